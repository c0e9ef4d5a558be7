"""
Bookmark Triage - Chrome bookmark import, keeper detection and export.
"""

from .core import (
    AnnotatedBookmark,
    Bookmark,
    BoundaryDetector,
    BoundaryResult,
    ChromeHTMLGenerator,
    ChromeHTMLParser,
    KeeperBookmark,
    build_ts_query,
    detect_boundary,
    export_to_chrome,
    parse_bookmarks_html,
)
from .utils.url_utils import extract_domain, get_tweet_id

__version__ = "1.0.0"

__all__ = [
    "AnnotatedBookmark",
    "Bookmark",
    "BoundaryDetector",
    "BoundaryResult",
    "ChromeHTMLGenerator",
    "ChromeHTMLParser",
    "KeeperBookmark",
    "build_ts_query",
    "detect_boundary",
    "export_to_chrome",
    "extract_domain",
    "get_tweet_id",
    "parse_bookmarks_html",
]
