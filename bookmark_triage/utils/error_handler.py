"""
Exception hierarchy for Bookmark Triage.

All custom exceptions for the project derive from BookmarkTriageError so
callers (CLI, import/export endpoints) can catch a single base class.
The parsing, detection and export functions themselves are total over
their inputs; these errors only surface from file and configuration I/O.
"""


class BookmarkTriageError(Exception):
    """Base exception for all bookmark triage errors."""

    pass


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(BookmarkTriageError):
    """Invalid command-line or record input."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(BookmarkTriageError, ValueError):
    """Invalid or unreadable configuration."""

    pass


# ============================================================================
# Bookmark File Errors
# ============================================================================


class ChromeHTMLError(BookmarkTriageError):
    """Base exception for Chrome HTML parsing errors."""

    pass


class ChromeHTMLStructureError(ChromeHTMLError):
    """Raised when a file does not look like a Chrome bookmark export."""

    pass


class ChromeHTMLGeneratorError(BookmarkTriageError):
    """Raised when an export cannot be written."""

    pass
