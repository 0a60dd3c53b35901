"""Deterministic task synthesis from PRD sections.

Every helper is a pure function of its arguments. The list of tasks built
so far is threaded through explicitly, so the same sections always produce
the same tasks.
"""

import re
from collections.abc import Sequence
from typing import Optional

from .models import MAX_DEPS, MAX_STEPS, MAX_TAGS, TITLE_MAX_LENGTH, TITLE_MIN_LENGTH, Section, Task
from .parser import extract_bullet_points

DEFAULT_MAX_TASKS = 20

LONG_SECTION_CHARS = 500
IMPLEMENTATION_SUFFIX = " - Implementation"
SHORT_TITLE_PREFIX = "Task: "

# Checked in order; a tag is added when any keyword appears as a whole word.
TAG_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("feature", ("feature", "implement", "add", "create", "new")),
    ("bug", ("fix", "bug", "issue", "error", "defect")),
    ("enhancement", ("update", "improve", "enhance", "optimize", "upgrade")),
    ("testing", ("test", "testing", "qa", "quality", "coverage")),
    ("documentation", ("doc", "documentation", "readme", "guide")),
    ("refactor", ("refactor", "cleanup", "reorganize", "restructure")),
    ("api", ("api", "endpoint", "route", "rest")),
    ("ui", ("ui", "interface", "frontend", "component", "design")),
)

_TAG_PATTERNS = [
    (tag, re.compile(r"\b(" + "|".join(keywords) + r")\b", re.ASCII))
    for tag, keywords in TAG_KEYWORDS
]


def synthesize(sections: Sequence[Section], max_tasks: Optional[int] = None) -> list[Task]:
    """Build tasks from sections in document order.

    Args:
        sections: Sections produced by the segmenter
        max_tasks: Upper bound on the number of tasks (default 20)

    Returns:
        Tasks with ids T-001, T-002, ...; at least one when sections exist
    """
    limit = DEFAULT_MAX_TASKS if max_tasks is None else max_tasks
    tasks: list[Task] = []

    for section in sections:
        if len(tasks) >= limit:
            break

        per_section = tasks_per_section(section, len(sections))
        for index in range(per_section):
            if len(tasks) >= limit:
                break
            tasks.append(build_task(section, index, tasks))

    if not tasks and sections:
        tasks.append(build_task(sections[0], 0, []))

    return tasks


def tasks_per_section(section: Section, total_sections: int) -> int:
    """Number of tasks (1-3) a section contributes."""
    items = extract_bullet_points(section.content)

    if len(items) >= 5:
        return 3
    if len(items) >= 3:
        return 2
    if len(section.content) > LONG_SECTION_CHARS:
        return 2
    if total_sections <= 3:
        return 2
    return 1


def build_task(section: Section, index_in_section: int, existing: Sequence[Task]) -> Task:
    """Build the next task for a section.

    Args:
        section: Section the task comes from
        index_in_section: 0 for the first task built from this section
        existing: Tasks synthesized so far, in order
    """
    return Task(
        id=task_id(len(existing) + 1),
        title=task_title(section, index_in_section, len(existing)),
        tags=task_tags(section),
        deps=task_deps(section, existing),
        steps=task_steps(section),
    )


def task_id(number: int) -> str:
    return f"T-{number:03d}"


def task_title(section: Section, index_in_section: int, existing_count: int) -> str:
    title = section.title
    if index_in_section > 0 and existing_count > 0 and existing_count % 2 == 0:
        title += IMPLEMENTATION_SUFFIX

    if len(title) < TITLE_MIN_LENGTH:
        title = SHORT_TITLE_PREFIX + title
    if len(title) > TITLE_MAX_LENGTH:
        title = title[: TITLE_MAX_LENGTH - 3] + "..."

    return title


def task_tags(section: Section) -> list[str]:
    text = f"{section.title} {section.content}".lower()
    tags = [tag for tag, pattern in _TAG_PATTERNS if pattern.search(text)]
    return list(dict.fromkeys(tags))[:MAX_TAGS]


def task_deps(section: Section, existing: Sequence[Task]) -> list[str]:
    """Dependencies on earlier tasks.

    Every third task depends on the one before it, and sections after the
    third depend on the second task overall. Only earlier tasks are ever
    referenced.
    """
    if section.order == 0 or not existing:
        return []

    deps = []
    if len(existing) % 3 == 0:
        deps.append(existing[-1].id)
    if section.order > 2 and len(existing) >= 2:
        deps.append(existing[1].id)

    return deps[:MAX_DEPS]


def task_steps(section: Section) -> list[str]:
    items = extract_bullet_points(section.content)
    if items:
        return items[:MAX_STEPS]

    return [
        f"Review {section.title} requirements",
        f"Design solution for {section.title}",
        f"Implement {section.title}",
        f"Test {section.title} implementation",
        f"Document {section.title} changes",
    ]
