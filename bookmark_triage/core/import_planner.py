"""
Import planning for parsed and boundary-annotated bookmarks.

Turns detector output into the rows the persistence layer inserts:
duplicates within the upload collapse to one row per URL, URLs already
stored are skipped so their categorisation survives a re-import, and each
row gets its domain precomputed for browsing and search.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from ..utils.url_utils import extract_domain
from .data_models import AnnotatedBookmark


@dataclass
class ImportRow:
    """A new bookmark row as the store expects it."""

    url: str
    title: str
    add_date: Any
    chrome_folder_path: str
    domain: str
    is_tweet: bool
    is_keeper: bool
    is_categorized: bool = False
    is_skipped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "add_date": self.add_date.isoformat() if self.add_date else None,
            "chrome_folder_path": self.chrome_folder_path,
            "domain": self.domain,
            "is_tweet": self.is_tweet,
            "is_keeper": self.is_keeper,
            "is_categorized": self.is_categorized,
            "is_skipped": self.is_skipped,
        }


@dataclass
class ImportPlan:
    """Rows to insert plus the number of incoming URLs already stored."""

    rows: List[ImportRow] = field(default_factory=list)
    skipped: int = 0

    def summary(self) -> Dict[str, Any]:
        summary = {"imported": len(self.rows), "skipped": self.skipped}
        if not self.rows:
            summary["message"] = "All bookmarks already exist in database"
        return summary


class ImportPlanner:
    """Prepares annotated bookmarks for insertion into the store."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def plan(
        self,
        bookmarks: Sequence[AnnotatedBookmark],
        existing_urls: Iterable[str] = (),
    ) -> ImportPlan:
        """
        Build the insert plan for an upload.

        Args:
            bookmarks: Boundary-annotated bookmarks in document order
            existing_urls: URLs already present in the store

        Returns:
            ImportPlan with one row per new URL
        """
        # Later duplicates replace earlier ones but keep the first position
        unique: Dict[str, AnnotatedBookmark] = {}
        for bookmark in bookmarks:
            unique[bookmark.url] = bookmark

        stored = set(existing_urls)
        plan = ImportPlan()

        for url, bookmark in unique.items():
            if url in stored:
                plan.skipped += 1
                continue

            plan.rows.append(
                ImportRow(
                    url=bookmark.url,
                    title=bookmark.title,
                    add_date=bookmark.add_date,
                    chrome_folder_path=bookmark.folder_path,
                    domain=extract_domain(bookmark.url),
                    is_tweet=bookmark.is_tweet,
                    is_keeper=bookmark.is_keeper,
                )
            )

        duplicates = len(bookmarks) - len(unique)
        if duplicates:
            self.logger.debug(f"Collapsed {duplicates} duplicate URLs in upload")
        self.logger.info(
            f"Import plan: {len(plan.rows)} new bookmarks, {plan.skipped} already stored"
        )
        return plan
