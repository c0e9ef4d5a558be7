"""
Full-text search query construction.

The search endpoint runs ``fts @@ to_tsquery('english', <query>)`` against
the store; this module only builds the query string.
"""

import re

_NON_WORD = re.compile(r"[^\w\s]")


def build_ts_query(query: str) -> str:
    """
    Convert free text into a prefix-matching, AND-joined tsquery string.

    ``"React HOOKS"`` becomes ``"react:* & hooks:*"``. Punctuation is
    dropped so user input can never break tsquery syntax.

    Args:
        query: Free-text search input

    Returns:
        tsquery string, or an empty string meaning "no search"
    """
    if not query:
        return ""

    tokens = _NON_WORD.sub("", query.strip().lower()).split()
    return " & ".join(f"{token}:*" for token in tokens)
