"""
Pytest configuration and shared fixtures for bookmark triage tests.

This module provides sample Chrome bookmark exports and keeper records
shared across the parser, detector, exporter and CLI tests.
"""

from pathlib import Path
from typing import List

import pytest

from bookmark_triage.core.data_models import KeeperBookmark

SAMPLE_CHROME_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3 ADD_DATE="1715434444" LAST_MODIFIED="1717526901" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks Bar</H3>
    <DL><p>
        <DT><H3 ADD_DATE="1717175257" LAST_MODIFIED="1717526910">Machine Learning</H3>
        <DL><p>
            <DT><A HREF="https://example.com/" ADD_DATE="1717175221">Example Site</A>
            <DT><A HREF="https://test.com/" ADD_DATE="1717175261">Test Site</A>
        </DL><p>
        <DT><H3 ADD_DATE="1717175257">Tools</H3>
        <DL><p>
            <DT><A HREF="https://regex101.com/" ADD_DATE="1717175262">regex101</A>
            <DT><A HREF="https://byebyepaywall.com/en/" ADD_DATE="1717175263">ByeByePaywall</A>
        </DL><p>
        <DT><A HREF="https://direct.com/" ADD_DATE="1717175273">Direct Bookmark</A>
    </DL><p>
    <DT><H3 ADD_DATE="1634868593" LAST_MODIFIED="1634868593">Other Folder</H3>
    <DL><p>
        <DT><A HREF="https://x.com/naval/status/1629307668568633344" ADD_DATE="1634868593">Naval on X</A>
        <DT><A HREF="https://nested.com/">Nested Bookmark</A>
    </DL><p>
</DL><p>
"""

COMPLEX_NESTED_HTML = """
<!DOCTYPE NETSCAPE-Bookmark-file-1>
<DL><p>
    <DT><A HREF="https://root.com">Root Bookmark</A>
    <DT><H3>Folder A</H3>
    <DL><p>
        <DT><A HREF="https://a1.com">A1</A>
        <DT><H3>Subfolder B</H3>
        <DL><p>
            <DT><A HREF="https://b1.com">B1</A>
        </DL><p>
        <DT><A HREF="https://a2.com">A2</A>
    </DL><p>
    <DT><A HREF="https://root2.com">Root Bookmark 2</A>
</DL><p>
"""


@pytest.fixture
def sample_chrome_html() -> str:
    """Chrome export with a toolbar folder, a Tools marker and a tweet."""
    return SAMPLE_CHROME_HTML


@pytest.fixture
def complex_nested_html() -> str:
    """Folders and links interleaved at several levels."""
    return COMPLEX_NESTED_HTML


@pytest.fixture
def sample_html_file(tmp_path: Path) -> Path:
    """Sample Chrome export written to disk."""
    path = tmp_path / "bookmarks.html"
    path.write_text(SAMPLE_CHROME_HTML, encoding="utf-8")
    return path


@pytest.fixture(params=["tree", "scan"])
def strategy(request) -> str:
    """Run a test once per parse strategy."""
    return request.param


@pytest.fixture
def keeper_bookmarks() -> List[KeeperBookmark]:
    """Keepers spread over the toolbar, another root folder and the root."""
    return [
        KeeperBookmark(
            url="https://work.example.com",
            title="Work Site",
            add_date="2024-02-01T12:00:00.000Z",
            chrome_folder_path="Bookmarks Bar/Work",
        ),
        KeeperBookmark(
            url="https://archive.example.com",
            title="Archived",
            add_date=None,
            chrome_folder_path="Other Bookmarks/Archive",
        ),
        KeeperBookmark(
            url="https://root.example.com",
            title="Root Bookmark",
            add_date="2024-01-01T00:00:00.000Z",
            chrome_folder_path=None,
        ),
        KeeperBookmark(
            url="https://docs.example.com",
            title="Work Docs",
            add_date="2024-02-02T12:00:00.000Z",
            chrome_folder_path="Bookmarks Bar/Work",
        ),
    ]
