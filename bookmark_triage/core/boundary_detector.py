"""
Keeper / to-categorize boundary detection.

An import is split at a designated "last keeper" marker: a bookmark whose
URL equals a sentinel URL and whose folder path contains a segment equal
to a sentinel folder name. Everything up to and including the marker is
already organized (a keeper); everything after it goes through
categorization.
"""

import logging
from typing import Optional, Sequence

from .data_models import AnnotatedBookmark, Bookmark, BoundaryResult

DEFAULT_SENTINEL_URL = "https://byebyepaywall.com/en/"
DEFAULT_SENTINEL_FOLDER = "tools"


class BoundaryDetector:
    """
    Locates the last-keeper marker in a parsed bookmark list.

    The sentinel URL is compared exactly. The sentinel folder is compared
    case-insensitively against whole folder path segments, so
    ``Bar/Work/Tools`` matches but ``MyTools`` does not.
    """

    def __init__(
        self,
        sentinel_url: str = DEFAULT_SENTINEL_URL,
        sentinel_folder: str = DEFAULT_SENTINEL_FOLDER,
    ):
        self.sentinel_url = sentinel_url
        self.sentinel_folder = sentinel_folder.lower()
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config) -> "BoundaryDetector":
        """Create a detector from a BoundaryConfig."""
        return cls(
            sentinel_url=config.sentinel_url,
            sentinel_folder=config.sentinel_folder,
        )

    def is_marker(self, bookmark: Bookmark) -> bool:
        """Check whether a bookmark is the boundary marker."""
        if bookmark.url != self.sentinel_url:
            return False
        return any(
            part.lower() == self.sentinel_folder
            for part in bookmark.folder_path.split("/")
        )

    def find_marker_index(self, bookmarks: Sequence[Bookmark]) -> Optional[int]:
        """
        Find the index of the last marker in document order.

        Export tools may repeat the marker across runs; the most recent
        run's marker is the one furthest down the file.
        """
        for index in range(len(bookmarks) - 1, -1, -1):
            if self.is_marker(bookmarks[index]):
                return index
        return None

    def detect(self, bookmarks: Sequence[Bookmark]) -> BoundaryResult:
        """
        Split bookmarks into keepers and to-categorize records.

        Args:
            bookmarks: Parser output in document order

        Returns:
            BoundaryResult with counts and annotated copies of every record
        """
        if not bookmarks:
            return BoundaryResult(
                boundary_found=False,
                keeper_count=0,
                to_categorize_count=0,
                bookmarks=[],
            )

        boundary_index = self.find_marker_index(bookmarks)

        if boundary_index is None:
            self.logger.info(
                f"No boundary marker ({self.sentinel_url} in a "
                f"'{self.sentinel_folder}' folder) among {len(bookmarks)} bookmarks"
            )
            return BoundaryResult(
                boundary_found=False,
                keeper_count=0,
                to_categorize_count=len(bookmarks),
                bookmarks=[AnnotatedBookmark.from_bookmark(b, False) for b in bookmarks],
            )

        keeper_count = boundary_index + 1
        annotated = [
            AnnotatedBookmark.from_bookmark(b, index <= boundary_index)
            for index, b in enumerate(bookmarks)
        ]

        self.logger.info(
            f"Boundary found at index {boundary_index}: {keeper_count} keepers, "
            f"{len(bookmarks) - keeper_count} to categorize"
        )
        return BoundaryResult(
            boundary_found=True,
            keeper_count=keeper_count,
            to_categorize_count=len(bookmarks) - keeper_count,
            bookmarks=annotated,
        )


def detect_boundary(
    bookmarks: Sequence[Bookmark], detector: Optional[BoundaryDetector] = None
) -> BoundaryResult:
    """Split bookmarks at the last boundary marker using the given or default sentinel."""
    return (detector or BoundaryDetector()).detect(bookmarks)
