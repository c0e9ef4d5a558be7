"""
Core bookmark interchange modules.

This package contains the Chrome HTML parser, keeper boundary detection,
the Chrome HTML exporter, import planning and search query construction.
"""

from .boundary_detector import BoundaryDetector, detect_boundary
from .chrome_html_generator import ChromeHTMLGenerator, FolderNode, export_to_chrome
from .chrome_html_parser import ChromeHTMLParser, parse_bookmarks_html
from .data_models import AnnotatedBookmark, Bookmark, BoundaryResult, KeeperBookmark
from .import_planner import ImportPlan, ImportPlanner, ImportRow
from .search_query import build_ts_query

__all__ = [
    "AnnotatedBookmark",
    "Bookmark",
    "BoundaryDetector",
    "BoundaryResult",
    "ChromeHTMLGenerator",
    "ChromeHTMLParser",
    "FolderNode",
    "ImportPlan",
    "ImportPlanner",
    "ImportRow",
    "KeeperBookmark",
    "build_ts_query",
    "detect_boundary",
    "export_to_chrome",
    "parse_bookmarks_html",
]
