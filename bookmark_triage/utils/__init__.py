"""
Utility modules for bookmark triage.

This package contains URL helpers, logging setup and the exception
hierarchy.
"""

from .error_handler import (
    BookmarkTriageError,
    ChromeHTMLError,
    ChromeHTMLGeneratorError,
    ChromeHTMLStructureError,
    ConfigurationError,
    ValidationError,
)
from .url_utils import extract_domain, get_tweet_id, is_tweet_url

__all__ = [
    "BookmarkTriageError",
    "ChromeHTMLError",
    "ChromeHTMLGeneratorError",
    "ChromeHTMLStructureError",
    "ConfigurationError",
    "ValidationError",
    "extract_domain",
    "get_tweet_id",
    "is_tweet_url",
]
