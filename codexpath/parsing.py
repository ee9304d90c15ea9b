"""Shared parsing helpers for environment values and search-path lists."""

from __future__ import annotations

from collections.abc import Iterable


SEARCH_PATH_SEPARATOR = ":"


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def split_search_path(value: str | None) -> list[str]:
    """Split a PATH-style string into its non-empty directory segments."""

    if not value:
        return []
    return [segment for segment in value.split(SEARCH_PATH_SEPARATOR) if segment]


def join_search_path(segments: Iterable[str]) -> str:
    """Serialize directory segments into a PATH-style string."""

    return SEARCH_PATH_SEPARATOR.join(segments)


def dedupe_preserving_order(segments: Iterable[str]) -> list[str]:
    """Drop empty and repeated segments while keeping first-seen order."""

    seen: set[str] = set()
    deduped: list[str] = []
    for segment in segments:
        if not segment or segment in seen:
            continue
        seen.add(segment)
        deduped.append(segment)
    return deduped


def parse_positive_seconds(value: object, field_name: str) -> float:
    """Parse a strictly positive duration in seconds.

    Args:
        value: Number or numeric text to parse.
        field_name: Field name for an actionable validation error message.

    Raises:
        ValueError: If the value is not a positive finite number.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive number of seconds.")
    try:
        parsed = float(str(value).strip()) if not isinstance(value, (int, float)) else float(value)
    except ValueError as exc:
        raise ValueError(f"`{field_name}` must be a positive number of seconds.") from exc
    if not parsed > 0.0 or parsed == float("inf"):
        raise ValueError(f"`{field_name}` must be a positive number of seconds.")
    return parsed
