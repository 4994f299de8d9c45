"""
Helper Utility Module

This module provides small text and URL helpers used by the publishing
pipeline: hashtag normalization, permalink construction and
sentence-aware truncation.
"""

from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse

ELLIPSIS = "..."


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is valid.

    Args:
        url: The URL to validate

    Returns:
        bool: True if the URL is valid, False otherwise
    """
    if not url:
        return False
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except (ValueError, AttributeError):
        return False


def format_hashtag(raw: Optional[str]) -> str:
    """
    Convert a free-text tag into a platform-safe hashtag token.

    Only ASCII letters, digits and underscores survive; everything else,
    including spaces and hyphens, is dropped. The result is lower-cased.
    A token that would start with a digit is rejected.

    Args:
        raw: The tag as entered by the author.

    Returns:
        str: The hashtag token without the leading '#', or "" when nothing usable remains.
    """
    if not raw:
        return ""
    trimmed = raw.strip()
    if not trimmed:
        return ""

    token = "".join(
        ch for ch in trimmed
        if ch == "_" or (ch.isascii() and ch.isalnum())
    ).lower()

    if token and token[0].isdigit():
        return ""
    return token


def hashtag_line(tags: Iterable[Any], limit: Optional[int] = None) -> str:
    """
    Build a space-separated '#tag' line.

    The first ``limit`` tags are considered (all of them when ``limit`` is None);
    tags that format to an empty token are skipped.
    """
    values = [tag_value(t) for t in tags]
    if limit is not None:
        values = values[:limit]

    hashtags = []
    for value in values:
        token = format_hashtag(value)
        if token:
            hashtags.append("#" + token)
    return " ".join(hashtags)


def build_permalink(base_url: Optional[str], post_id: Optional[str]) -> str:
    """
    Build the canonical blog permalink for a post.

    Args:
        base_url: Site base URL, with or without one trailing slash.
        post_id: The post identifier.

    Returns:
        str: "<base_url>/blog/<post_id>", or "" if either input is empty.
    """
    if not base_url or not post_id:
        return ""
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    return f"{base_url}/blog/{post_id}"


def truncate_at_sentence(text: str, max_length: int) -> str:
    """
    Truncate text, preferring to end on a sentence boundary.

    If the text is longer than ``max_length`` the prefix of that length is
    taken. When the last '.' in the prefix sits at or past its midpoint the
    cut happens right after that period; otherwise the prefix is kept whole.
    An ellipsis is appended in both cases.

    Args:
        text: The text to shorten.
        max_length: Maximum number of characters kept before the ellipsis.

    Returns:
        str: The original text if short enough, otherwise the truncated text plus "...".
    """
    if len(text) <= max_length:
        return text
    if max_length <= 0:
        return ELLIPSIS

    prefix = text[:max_length]
    last_period = prefix.rfind(".")
    if last_period >= 0 and last_period >= max_length / 2:
        return prefix[:last_period + 1] + ELLIPSIS
    return prefix + ELLIPSIS


def tag_value(tag: Any) -> str:
    """Return the raw text of a tag given either a tag model or a plain string."""
    if tag is None:
        return ""
    if isinstance(tag, str):
        return tag
    return getattr(tag, "value", "") or ""


def clean_tag_values(tags: Iterable[Any], strip_hash: bool = False) -> List[str]:
    """
    Trim raw tag values and drop blanks.

    Args:
        tags: Tag models or strings.
        strip_hash: Remove a leading '#' from each value.
    """
    cleaned = []
    for t in tags:
        value = tag_value(t).strip()
        if strip_hash:
            value = value.lstrip("#").strip()
        if value:
            cleaned.append(value)
    return cleaned


def parse_platform_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated platform list into trimmed, lower-cased names."""
    if not raw:
        return []
    return [p.strip().lower() for p in raw.split(",") if p.strip()]


def safe_get(data: Dict[str, Any], *keys, default: Any = None) -> Any:
    """
    Safely get a value from a nested dictionary.

    Args:
        data: The dictionary to search
        *keys: The keys to follow
        default: Default value if key doesn't exist

    Returns:
        The value at the specified keys or the default value
    """
    for key in keys:
        try:
            data = data[key]
        except (KeyError, TypeError, IndexError):
            return default
    return data
