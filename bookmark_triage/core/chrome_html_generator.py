"""
Chrome HTML Bookmark Generator

This module exports keeper bookmarks back to Chrome's Netscape-Bookmark-file-1
format. The folder hierarchy is rebuilt from each keeper's flat folder path
and the output always opens with a personal-toolbar "Bookmarks Bar" folder,
which is how Chrome expects a re-import to look.
"""

import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..utils.error_handler import ChromeHTMLGeneratorError
from .data_models import KeeperBookmark, parse_iso_datetime

BOOKMARKS_BAR = "Bookmarks Bar"
INDENT = "    "

KeeperInput = Union[KeeperBookmark, Mapping[str, Any]]


class FolderNode:
    """
    A folder in the export hierarchy.

    Children keep first-insertion order, which fixes the export order for
    a given keeper list.
    """

    def __init__(self, name: str):
        self.name = name
        self.children: Dict[str, "FolderNode"] = {}
        self.bookmarks: List[KeeperBookmark] = []

    def add_child(self, name: str) -> "FolderNode":
        """Add a child folder if missing and return it."""
        if name not in self.children:
            self.children[name] = FolderNode(name)
        return self.children[name]

    def add_bookmark(self, bookmark: KeeperBookmark) -> None:
        self.bookmarks.append(bookmark)

    def count(self) -> Dict[str, int]:
        """Count folders and bookmarks below this node."""
        folders = len(self.children)
        bookmarks = len(self.bookmarks)
        for child in self.children.values():
            child_counts = child.count()
            folders += child_counts["folders"]
            bookmarks += child_counts["bookmarks"]
        return {"folders": folders, "bookmarks": bookmarks}


class ChromeHTMLGenerator:
    """
    Generator for Chrome-compatible HTML bookmark files.

    Output layout: the fixed header, the root "Bookmarks Bar" folder
    marked ``PERSONAL_TOOLBAR_FOLDER`` (synthesized empty if absent), the
    other root folders in first-seen order, loose root bookmarks, and the
    closing list tag. Within a folder, sub-folders come before bookmarks.
    """

    HEADER = [
        "<!DOCTYPE NETSCAPE-Bookmark-file-1>",
        '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">',
        "<TITLE>Bookmarks</TITLE>",
        "<H1>Bookmarks</H1>",
        "<DL><p>",
    ]
    FOOTER = "</DL><p>"

    def __init__(self):
        """Initialize the Chrome HTML generator."""
        self.logger = logging.getLogger(__name__)

    def generate_html(self, keepers: Iterable[KeeperInput]) -> str:
        """
        Serialize keeper bookmarks to Chrome bookmark HTML.

        Args:
            keepers: KeeperBookmark objects or store rows with ``url``,
                ``title``, ``add_date`` and ``chrome_folder_path``

        Returns:
            Complete HTML document
        """
        root = self._build_folder_hierarchy(_coerce_keepers(keepers))

        lines = list(self.HEADER)

        toolbar = root.children.get(BOOKMARKS_BAR)
        if toolbar is None:
            toolbar = FolderNode(BOOKMARKS_BAR)
        lines.extend(self._generate_folder_html(toolbar, INDENT, is_toolbar=True))

        for name, child in root.children.items():
            if name != BOOKMARKS_BAR:
                lines.extend(self._generate_folder_html(child, INDENT))

        for bookmark in root.bookmarks:
            lines.append(self._generate_bookmark_html(bookmark, INDENT))

        lines.append(self.FOOTER)
        return "\n".join(lines)

    def write_html(
        self, keepers: Iterable[KeeperInput], output_path: Union[str, Path]
    ) -> Path:
        """
        Generate bookmark HTML and write it to a file.

        Raises:
            ChromeHTMLGeneratorError: If the file cannot be written
        """
        output_path = Path(output_path)
        html = self.generate_html(keepers)

        try:
            output_path.write_text(html, encoding="utf-8")
        except OSError as e:
            error_msg = f"Failed to write Chrome HTML file {output_path}: {e}"
            self.logger.error(error_msg)
            raise ChromeHTMLGeneratorError(error_msg) from e

        self.logger.info(f"Successfully generated Chrome HTML file: {output_path}")
        return output_path

    def _build_folder_hierarchy(self, keepers: List[KeeperBookmark]) -> FolderNode:
        """
        Build the folder tree from flat folder paths.

        Empty path segments are ignored, so a missing, empty or slash-only
        path places the bookmark at the root.
        """
        root = FolderNode("")

        for bookmark in keepers:
            current = root
            for part in (bookmark.chrome_folder_path or "").split("/"):
                if part:
                    current = current.add_child(part)
            current.add_bookmark(bookmark)

        counts = root.count()
        self.logger.info(
            f"Folder statistics: {counts['folders']} folders, "
            f"{counts['bookmarks']} bookmarks"
        )
        return root

    def _generate_folder_html(
        self, folder: FolderNode, indent: str, is_toolbar: bool = False
    ) -> List[str]:
        """Render a folder header, its container and everything inside it."""
        toolbar_attr = ' PERSONAL_TOOLBAR_FOLDER="true"' if is_toolbar else ""
        child_indent = indent + INDENT

        lines = [
            f"{indent}<DT><H3{toolbar_attr}>{escape_html(folder.name)}</H3>",
            f"{indent}<DL><p>",
        ]
        for child in folder.children.values():
            lines.extend(self._generate_folder_html(child, child_indent))
        for bookmark in folder.bookmarks:
            lines.append(self._generate_bookmark_html(bookmark, child_indent))
        lines.append(f"{indent}</DL><p>")

        return lines

    def _generate_bookmark_html(self, bookmark: KeeperBookmark, indent: str) -> str:
        """Render a single bookmark line."""
        attrs = f'HREF="{escape_html(bookmark.url)}"'

        timestamp = to_unix_timestamp(bookmark.add_date)
        if timestamp is not None:
            attrs += f' ADD_DATE="{timestamp}"'

        title = escape_html(bookmark.title or bookmark.url)
        return f"{indent}<DT><A {attrs}>{title}</A>"

    def get_generation_info(self, keepers: Iterable[KeeperInput]) -> Dict[str, Any]:
        """
        Describe the folder structure an export would produce.

        Args:
            keepers: Keeper bookmarks to analyze

        Returns:
            Dictionary with bookmark count and nested folder summary
        """
        keeper_list = _coerce_keepers(keepers)
        root = self._build_folder_hierarchy(keeper_list)

        def analyze_folder(node: FolderNode) -> Dict[str, Any]:
            return {
                "name": node.name,
                "bookmark_count": len(node.bookmarks),
                "subfolder_count": len(node.children),
                "subfolders": {
                    name: analyze_folder(child) for name, child in node.children.items()
                },
            }

        return {
            "total_bookmarks": len(keeper_list),
            "root_bookmark_count": len(root.bookmarks),
            "generation_timestamp": datetime.now(timezone.utc).isoformat(),
            "folder_structure": {
                name: analyze_folder(child) for name, child in root.children.items()
            },
        }


def escape_html(text: Optional[str]) -> str:
    """
    Escape the five HTML special characters.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text
    """
    if not text:
        return ""

    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace('"', "&quot;")
    text = text.replace("'", "&#39;")

    return text


def to_unix_timestamp(date_str: Optional[str]) -> Optional[int]:
    """
    Convert an ISO-8601 timestamp to whole Unix epoch seconds (floored).

    Returns:
        Epoch seconds, or None when the value is absent or not a timestamp
    """
    if not date_str:
        return None

    parsed = parse_iso_datetime(date_str)
    if parsed is None:
        logging.getLogger(__name__).warning(f"Unparseable add_date omitted: {date_str}")
        return None

    return math.floor(parsed.timestamp())


def _coerce_keepers(keepers: Iterable[KeeperInput]) -> List[KeeperBookmark]:
    return [
        keeper if isinstance(keeper, KeeperBookmark) else KeeperBookmark.from_record(keeper)
        for keeper in keepers
    ]


def export_to_chrome(keepers: Iterable[KeeperInput]) -> str:
    """Export keeper bookmarks to Chrome's Netscape bookmark HTML."""
    return ChromeHTMLGenerator().generate_html(keepers)
