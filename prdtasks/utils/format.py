"""Human-readable formatting helpers."""

from collections.abc import Sequence

from ..tasks.models import Task

PREVIEW_SEPARATOR = " • "


def format_task_preview(tasks: Sequence[Task], count: int = 3) -> str:
    """One-line preview of the first tasks, e.g. "T-001: Setup • T-002: Build"."""
    return PREVIEW_SEPARATOR.join(f"{task.id}: {task.title}" for task in tasks[:count])


def format_task_line(task: Task) -> str:
    deps = f" (after {', '.join(task.deps)})" if task.deps else ""
    tags = f" [{', '.join(task.tags)}]" if task.tags else ""
    return f"{task.id}  {task.title}{tags}{deps}"
