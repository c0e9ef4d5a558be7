"""
URL helpers shared by the parser, the import planner and search code.

All functions are total: unparseable input yields an empty string or None.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

TWEET_URL_PATTERN = re.compile(r"(?:twitter\.com|x\.com)/\w+/status/(\d+)")

# Characters that can never appear in a hostname
_INVALID_HOST_CHARS = re.compile(r"[\s<>\"'`{}|\\^]")


def extract_domain(url: str) -> str:
    """
    Extract the hostname from a URL without a leading ``www.``.

    A missing scheme is tolerated by assuming ``https://``. Other
    subdomains are preserved.

    Args:
        url: URL string, possibly without scheme

    Returns:
        Hostname, or an empty string for unparseable input
    """
    if not url or not url.strip():
        return ""

    has_scheme = url.lower().startswith(("http://", "https://"))
    url_to_parse = url if has_scheme else f"https://{url}"

    try:
        parsed = urlsplit(url_to_parse)
        hostname = parsed.hostname
        # Accessing .port validates the port component
        parsed.port
    except ValueError:
        return ""

    if not hostname or _INVALID_HOST_CHARS.search(hostname):
        return ""

    if hostname.startswith("www."):
        hostname = hostname[4:]

    return hostname


def get_tweet_id(url: str) -> Optional[str]:
    """
    Extract the status ID from a twitter.com or x.com URL.

    Query strings and fragments after the ID are ignored.

    Args:
        url: Tweet URL

    Returns:
        Tweet ID digits, or None if the URL is not a tweet
    """
    if not url:
        return None

    match = TWEET_URL_PATTERN.search(url)
    return match.group(1) if match else None


def is_tweet_url(url: str) -> bool:
    """Check whether a URL points at a single tweet."""
    return get_tweet_id(url) is not None
