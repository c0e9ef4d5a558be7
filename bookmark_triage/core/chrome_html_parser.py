"""
Chrome HTML bookmark parser module.

This module parses Chrome's Netscape bookmark export format into a flat,
document-ordered list of Bookmark records annotated with their folder
path. Two strategies are available and produce identical output:

* ``tree``: walks a BeautifulSoup document
* ``scan``: pattern-matches the raw markup token by token

Both strategies emit the same folder/link event stream, which a single
record builder turns into Bookmark objects.
"""

import html as html_lib
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag
from bs4.element import PreformattedString

from ..utils.error_handler import ChromeHTMLError, ChromeHTMLStructureError
from ..utils.url_utils import is_tweet_url
from .data_models import Bookmark

STRATEGIES = ("tree", "scan")

_LEADING_INTEGER = re.compile(r"\s*[+-]?\d+")

_STRUCTURAL_TAGS = frozenset({"a", "dt", "dl", "h3"})


# ============================================================================
# Parse events
# ============================================================================


@dataclass(frozen=True)
class FolderOpen:
    """A folder header whose content container has opened."""

    name: str


@dataclass(frozen=True)
class FolderClose:
    """The content container of the innermost open folder has closed."""


@dataclass(frozen=True)
class LinkFound:
    """A link element with its raw attribute values."""

    href: str
    title: str
    add_date: Optional[str] = None


ParseEvent = Union[FolderOpen, FolderClose, LinkFound]


class _RecordBuilder:
    """Turns a parse event stream into Bookmark records."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.folder_stack: List[str] = []
        self.bookmarks: List[Bookmark] = []

    def feed(self, events: Iterable[ParseEvent]) -> List[Bookmark]:
        for event in events:
            if isinstance(event, FolderOpen):
                self.folder_stack.append(event.name)
            elif isinstance(event, FolderClose):
                # Unbalanced closes never pop past the root
                if self.folder_stack:
                    self.folder_stack.pop()
            else:
                self.bookmarks.append(self._build_bookmark(event))
        return self.bookmarks

    def _build_bookmark(self, link: LinkFound) -> Bookmark:
        if not link.href:
            self.logger.debug(f"Link without URL at '{'/'.join(self.folder_stack)}'")
        return Bookmark(
            url=link.href,
            title=link.title,
            add_date=parse_timestamp(link.add_date),
            folder_path="/".join(self.folder_stack),
            is_tweet=is_tweet_url(link.href),
        )


def parse_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
    """
    Parse a Unix timestamp string (seconds since epoch) to a UTC datetime.

    Args:
        timestamp_str: Unix timestamp as string

    Returns:
        datetime object or None if absent or invalid
    """
    if not timestamp_str:
        return None

    # Fractional seconds are truncated
    match = _LEADING_INTEGER.match(timestamp_str)
    if match is None:
        logging.getLogger(__name__).debug(f"Invalid timestamp format: {timestamp_str}")
        return None

    try:
        return datetime.fromtimestamp(int(match.group(0)), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        logging.getLogger(__name__).debug(f"Invalid timestamp format: {timestamp_str}")
        return None


# ============================================================================
# Tree strategy
# ============================================================================


def iter_tree_events(html: str) -> Iterator[ParseEvent]:
    """
    Walk a BeautifulSoup document and yield parse events.

    An ``<H3>`` remembers a pending folder name; the next ``<DL>`` reached
    in document order opens that folder and leaving the ``<DL>`` closes it.
    A link or another header seen first discards the pending name.

    The walk keeps an explicit frame stack instead of recursing, because
    ``html.parser`` nests unclosed ``<DT>`` and ``<p>`` tags and a single
    large folder would otherwise exceed the interpreter's recursion limit.
    """
    soup = BeautifulSoup(html, "html.parser")

    pending_folder: Optional[str] = None
    # Each frame: (children, is a <DL>, opened a folder)
    frames: List[Tuple[Iterator[Any], bool, bool]] = [(iter(soup.children), False, False)]

    while frames:
        node = next(frames[-1][0], None)
        if node is None:
            _, is_container, opened_folder = frames.pop()
            if is_container:
                pending_folder = None
            if opened_folder:
                yield FolderClose()
            continue

        if not isinstance(node, Tag):
            continue

        if node.name == "h3":
            pending_folder = node.get_text().strip()
        elif node.name == "a":
            pending_folder = None
            yield LinkFound(
                href=_attribute(node, "href"),
                title=_leading_text(node),
                add_date=_attribute(node, "add_date") or None,
            )
            # An unclosed anchor swallows the markup after it
            frames.append((iter(node.children), False, False))
        elif node.name == "dl":
            opens_folder = pending_folder is not None
            if opens_folder:
                yield FolderOpen(pending_folder)
            pending_folder = None
            frames.append((iter(node.children), True, opens_folder))
        else:
            frames.append((iter(node.children), False, False))


def _leading_text(anchor: Tag) -> str:
    """Anchor text up to the first nested structural tag."""
    parts = []
    for child in anchor.children:
        if isinstance(child, Tag):
            if child.name in _STRUCTURAL_TAGS:
                break
            parts.append(child.get_text())
        elif not isinstance(child, PreformattedString):
            parts.append(str(child))
    return "".join(parts).strip()


def _attribute(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value


# ============================================================================
# Scan strategy
# ============================================================================

_TOKEN_PATTERN = re.compile(
    r"(?P<comment><!--.*?-->)"
    r"|(?P<dl_open><DL\b[^>]*>)"
    r"|(?P<dl_close></DL\s*>)"
    r"|<H3\b[^>]*>(?P<folder>.*?)</H3\s*>"
    r"|<A\b(?P<attrs>(?:[^>\"']|\"[^\"]*\"|'[^']*')*)>"
    r"(?P<title>(?:(?!</?(?:A|DT|DL|H3)\b).)*)(?:</A\s*>)?",
    re.IGNORECASE | re.DOTALL,
)

_ATTRIBUTE_PATTERN = re.compile(
    r"([\w:-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s\"'>]+))"
)

_TAG_PATTERN = re.compile(r"<[^>]*>")


def iter_scan_events(html: str) -> Iterator[ParseEvent]:
    """
    Scan raw bookmark markup and yield parse events.

    A header becomes a folder only once its ``<DL>`` opens, so a link
    right after a header stays at the header's own level. Each ``</DL>``
    closes the container opened by its matching ``<DL>``; unmatched
    closes are ignored.
    """
    pending_folder: Optional[str] = None
    open_containers: List[bool] = []

    for match in _TOKEN_PATTERN.finditer(html):
        if match.group("comment"):
            continue
        elif match.group("dl_open"):
            opens_folder = pending_folder is not None
            if opens_folder:
                yield FolderOpen(pending_folder)
            pending_folder = None
            open_containers.append(opens_folder)
        elif match.group("dl_close"):
            if open_containers:
                pending_folder = None
                if open_containers.pop():
                    yield FolderClose()
        elif match.group("folder") is not None:
            pending_folder = _clean_text(match.group("folder"))
        else:
            pending_folder = None
            attributes = _parse_attributes(match.group("attrs"))
            yield LinkFound(
                href=attributes.get("href", ""),
                title=_clean_text(match.group("title")),
                add_date=attributes.get("add_date") or None,
            )


def _parse_attributes(raw: str) -> Dict[str, str]:
    attributes = {}
    for name, double, single, bare in _ATTRIBUTE_PATTERN.findall(raw or ""):
        attributes[name.lower()] = html_lib.unescape(double or single or bare)
    return attributes


def _clean_text(raw: str) -> str:
    return html_lib.unescape(_TAG_PATTERN.sub("", raw)).strip()


# ============================================================================
# Parser
# ============================================================================


class ChromeHTMLParser:
    """
    Parser for Chrome HTML bookmark exports.

    ``parse_html`` never raises: malformed or partial markup is parsed on
    a best-effort basis and empty input yields an empty list.
    """

    DOCTYPE_PATTERN = r"<!DOCTYPE\s+NETSCAPE-Bookmark-file-1>"
    SUPPORTED_ENCODINGS = ["utf-8", "utf-16", "iso-8859-1"]

    def __init__(self, strategy: str = "tree"):
        """
        Initialize the Chrome HTML parser.

        Args:
            strategy: ``tree`` (BeautifulSoup walk) or ``scan`` (token scan)
        """
        if strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown parse strategy '{strategy}', expected one of {STRATEGIES}"
            )
        self.strategy = strategy
        self.logger = logging.getLogger(__name__)

    def parse_html(self, html: str) -> List[Bookmark]:
        """
        Parse bookmark export markup.

        Args:
            html: Raw bookmark HTML

        Returns:
            Bookmarks in document order
        """
        if not html or not html.strip():
            return []

        if self.strategy == "scan":
            bookmarks = _RecordBuilder().feed(iter_scan_events(html))
        else:
            try:
                bookmarks = _RecordBuilder().feed(iter_tree_events(html))
            except Exception as e:
                self.logger.warning(
                    f"Tree parse failed ({e}), falling back to token scan"
                )
                bookmarks = _RecordBuilder().feed(iter_scan_events(html))

        self.logger.info(
            f"Parsed {len(bookmarks)} bookmarks using '{self.strategy}' strategy"
        )
        return bookmarks

    def parse_file(self, file_path: Union[str, Path]) -> List[Bookmark]:
        """
        Parse a Chrome HTML bookmark export file.

        Args:
            file_path: Path to the Chrome HTML bookmark file

        Returns:
            List of Bookmark objects extracted from the file

        Raises:
            ChromeHTMLError: If the file cannot be read
            ChromeHTMLStructureError: If the file is not a bookmark export
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise ChromeHTMLError(f"File not found: {file_path}")

        html_content = self._read_html_file(file_path)
        bookmarks = self.parse_html(html_content)

        self.logger.info(f"Successfully parsed {len(bookmarks)} bookmarks from {file_path}")
        return bookmarks

    def _read_html_file(self, file_path: Path) -> str:
        """
        Read HTML file with encoding fallback.

        Raises:
            ChromeHTMLError: If file cannot be read
            ChromeHTMLStructureError: If the DOCTYPE is missing
        """
        for encoding in self.SUPPORTED_ENCODINGS:
            try:
                content = file_path.read_text(encoding=encoding)
            except UnicodeError:
                continue
            except OSError as e:
                raise ChromeHTMLError(f"Error reading file: {e}") from e

            if re.search(self.DOCTYPE_PATTERN, content, re.IGNORECASE):
                return content

        raise ChromeHTMLStructureError(
            "File does not appear to be a Chrome bookmark export (missing DOCTYPE)"
        )

    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """
        Validate if a file is a Chrome HTML bookmark export.

        Args:
            file_path: Path to the file to validate

        Returns:
            True if file appears to be a Chrome bookmark export
        """
        file_path = Path(file_path)

        if not file_path.exists() or file_path.suffix.lower() not in (".html", ".htm"):
            return False

        try:
            with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
                header = f.read(1024)
        except OSError:
            return False

        return bool(re.search(self.DOCTYPE_PATTERN, header, re.IGNORECASE))

    def get_file_info(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Get information about a Chrome HTML bookmark file.

        Args:
            file_path: Path to the file

        Returns:
            Dictionary with file information
        """
        file_path = Path(file_path)

        info = {
            "path": str(file_path),
            "exists": file_path.exists(),
            "size_bytes": 0,
            "is_chrome_bookmarks": False,
            "estimated_bookmark_count": 0,
        }

        if not info["exists"]:
            return info

        try:
            info["size_bytes"] = file_path.stat().st_size
            info["is_chrome_bookmarks"] = self.validate_file(file_path)

            if info["is_chrome_bookmarks"]:
                content = file_path.read_text(encoding="utf-8", errors="ignore")
                info["estimated_bookmark_count"] = len(
                    re.findall(r"<A\s+HREF=", content, re.IGNORECASE)
                )
        except OSError as e:
            self.logger.warning(f"Error getting file info for {file_path}: {e}")

        return info


def parse_bookmarks_html(html: str, strategy: str = "tree") -> List[Bookmark]:
    """Parse bookmark export markup into document-ordered Bookmark records."""
    return ChromeHTMLParser(strategy=strategy).parse_html(html)
