"""Text helpers shared by the scorer, router and prompt builder."""
import re

_WS = re.compile(r"\s+")


def normalize_whitespace(text: str | None) -> str:
    """Collapse whitespace runs into single spaces and strip the ends."""
    if not text:
        return ""
    return _WS.sub(" ", text).strip()


def normalize_query(text: str | None) -> str:
    """Whitespace-normalised, lower-cased form used for matching and cache keys."""
    return normalize_whitespace(text).lower()


def contains_any(haystack: str, needles) -> bool:
    return any(n and n in haystack for n in needles)


def truncate_text(text: str | None, max_chars: int) -> str:
    """Truncate text to max_chars without a suffix.

    Args:
        text: Text to truncate, or None.
        max_chars: Maximum character count for the result.

    Returns:
        Original text if within limit, the first ``max_chars`` characters
        otherwise, or empty string for None/empty input or non-positive
        max_chars.
    """
    if not text or max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars]
