"""Tag normalization helpers."""

import re

_VALID_TAG = re.compile(r"^[A-Za-z0-9_-]+$")
MAX_TAG_LENGTH = 50


def is_valid_tag(tag: str) -> bool:
    """Tags are 1-50 characters of letters, digits, '_' or '-'."""
    trimmed = tag.strip()
    return 0 < len(trimmed) <= MAX_TAG_LENGTH and bool(_VALID_TAG.match(trimmed))


def normalize_tags(tags: list[str] | None) -> list[str]:
    """
    Normalize tags for storage.

    Trims and lowercases each tag, drops invalid ones and removes duplicates
    while keeping the order of first appearance.

    Args:
        tags: Raw tag list, possibly None

    Returns:
        Normalized tag list
    """
    if not tags:
        return []

    seen: set[str] = set()
    normalized: list[str] = []
    for tag in tags:
        if not isinstance(tag, str) or not is_valid_tag(tag):
            continue
        tag = tag.strip().lower()
        if tag not in seen:
            seen.add(tag)
            normalized.append(tag)
    return normalized


def parse_tag_input(value: str) -> list[str]:
    """Split a comma-separated tag string ("work, urgent") into normalized tags."""
    if not value.strip():
        return []
    return normalize_tags([part.strip().lstrip("+") for part in value.split(",")])
