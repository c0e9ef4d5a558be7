"""
Data models for Bookmark Triage.

This module defines the records that flow through the interchange
subsystem: parser output, boundary-annotated records, and the narrower
keeper projection consumed by the Chrome exporter.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class Bookmark:
    """
    A single link found in a bookmark export.

    ``folder_path`` is the ``/``-joined chain of folder names that
    contained the link, outermost first; an empty string means top level.
    """

    url: str
    title: str = ""
    add_date: Optional[datetime] = None
    folder_path: str = ""
    is_tweet: bool = False

    @property
    def folder_segments(self) -> List[str]:
        """Folder path split into its non-empty segments."""
        return [part for part in self.folder_path.split("/") if part]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data["add_date"] = self.add_date.isoformat() if self.add_date else None
        return data


@dataclass(frozen=True)
class AnnotatedBookmark(Bookmark):
    """Bookmark carrying the keeper flag assigned by boundary detection."""

    is_keeper: bool = False

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark, is_keeper: bool) -> "AnnotatedBookmark":
        return cls(
            url=bookmark.url,
            title=bookmark.title,
            add_date=bookmark.add_date,
            folder_path=bookmark.folder_path,
            is_tweet=bookmark.is_tweet,
            is_keeper=is_keeper,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnnotatedBookmark":
        """Rebuild a record written by ``to_dict``."""
        add_date = data.get("add_date")
        if isinstance(add_date, str) and add_date:
            add_date = parse_iso_datetime(add_date)
        return cls(
            url=data.get("url") or "",
            title=data.get("title") or "",
            add_date=add_date or None,
            folder_path=data.get("folder_path") or "",
            is_tweet=bool(data.get("is_tweet", False)),
            is_keeper=bool(data.get("is_keeper", False)),
        )


@dataclass
class BoundaryResult:
    """Outcome of splitting an import into keepers and to-categorize."""

    boundary_found: bool
    keeper_count: int
    to_categorize_count: int
    bookmarks: List[AnnotatedBookmark] = field(default_factory=list)

    @property
    def keepers(self) -> List[AnnotatedBookmark]:
        return [b for b in self.bookmarks if b.is_keeper]

    @property
    def to_categorize(self) -> List[AnnotatedBookmark]:
        return [b for b in self.bookmarks if not b.is_keeper]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boundary_found": self.boundary_found,
            "keeper_count": self.keeper_count,
            "to_categorize_count": self.to_categorize_count,
            "bookmarks": [b.to_dict() for b in self.bookmarks],
        }


@dataclass
class KeeperBookmark:
    """
    Projection of a persisted keeper record used by the Chrome exporter.

    ``add_date`` is an ISO-8601 string; ``chrome_folder_path`` of None or
    an empty string places the bookmark at the root.
    """

    url: str
    title: Optional[str] = None
    add_date: Optional[str] = None
    chrome_folder_path: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "KeeperBookmark":
        """
        Build a keeper from a store row or a serialized parser record.

        Args:
            record: Mapping with ``url``, ``title``, ``add_date`` and either
                ``chrome_folder_path`` or ``folder_path``

        Returns:
            KeeperBookmark instance
        """
        add_date = record.get("add_date")
        if isinstance(add_date, datetime):
            add_date = add_date.isoformat()

        folder_path = record.get("chrome_folder_path")
        if folder_path is None:
            folder_path = record.get("folder_path")

        return cls(
            url=record.get("url") or "",
            title=record.get("title"),
            add_date=add_date or None,
            chrome_folder_path=folder_path,
        )


def parse_iso_datetime(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp, accepting a trailing ``Z``.

    Naive values are taken to be UTC.

    Returns:
        Timezone-aware datetime, or None if the string is not a timestamp
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
