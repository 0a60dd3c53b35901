"""Markdown list and heading extraction."""

import re
from typing import Optional

# Leading \s also spans blank lines and indentation of nested items.
UNORDERED_ITEM_RE = re.compile(r"^\s*[-*+]\s+(.+)$", re.MULTILINE)
ORDERED_ITEM_RE = re.compile(r"^\s*[0-9]+\.\s+(.+)$", re.MULTILINE)
TITLE_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)


def extract_bullet_points(content: str) -> list[str]:
    """Extract list items from markdown content.

    Unordered items (``-``, ``*``, ``+``) are collected first, then ordered
    items (``1.``, ``2.``), nested variants included. Markers are stripped,
    duplicates dropped keeping the first occurrence.

    Args:
        content: Markdown text

    Returns:
        List item texts in order of first appearance
    """
    items = [m.group(1).strip() for m in UNORDERED_ITEM_RE.finditer(content)]
    items.extend(m.group(1).strip() for m in ORDERED_ITEM_RE.finditer(content))

    return [item for item in dict.fromkeys(items) if item]


def extract_title(prd_text: str) -> Optional[str]:
    """Return the first H1 heading of a PRD, if any."""
    match = TITLE_RE.search(prd_text)
    return match.group(1).strip() if match else None
