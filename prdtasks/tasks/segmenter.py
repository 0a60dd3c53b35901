"""PRD segmentation into heading-delimited sections."""

import re

from .models import Section

HEADING_RE = re.compile(r"^##\s+(.+)$", re.MULTILINE)

FALLBACK_SECTION_TITLE = "Overview"


def segment(text: str) -> list[Section]:
    """Split PRD text into sections at level-2 headings.

    Each section holds the trimmed text between its heading and the next
    one (or the end of the document). A document without level-2 headings
    becomes a single "Overview" section.

    Args:
        text: Raw PRD markdown

    Returns:
        Sections in document order, numbered from 0
    """
    matches = list(HEADING_RE.finditer(text))

    if not matches:
        return [Section(title=FALLBACK_SECTION_TITLE, content=text.strip(), order=0)]

    sections = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        sections.append(
            Section(
                title=match.group(1).strip(),
                content=text[match.end():end].strip(),
                order=i,
            )
        )

    return sections
