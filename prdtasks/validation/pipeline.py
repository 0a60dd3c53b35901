"""Full validation pipeline for task collections.

Checks run in a fixed order: structure, unique ids, dependency
sanitization, then cycle detection on the sanitized graph.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..tasks.models import TasksJson
from .graph import detect_cycles, sanitize_dependencies, validate_unique_ids
from .schema import ValidationIssue, validate_collection, safe_validate_collection

logger = logging.getLogger(__name__)


class TaskGraphError(Exception):
    """Task collection violates a graph invariant."""

    pass


class DuplicateTaskIdError(TaskGraphError):
    """Task ids are not unique."""

    def __init__(self, duplicates: list[str]):
        self.duplicates = duplicates
        super().__init__(f"Duplicate task ids: {', '.join(duplicates)}")


class DependencyCycleError(TaskGraphError):
    """Task dependencies contain a cycle."""

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Dependency cycle detected: {' -> '.join(path)}")


@dataclass
class GraphReport:
    """Diagnostics collected by check_task_graph."""

    tasks_json: Optional[TasksJson] = None
    issues: list[ValidationIssue] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    cycle: Optional[list[str]] = None
    dropped_deps: int = 0

    @property
    def valid(self) -> bool:
        return (
            self.tasks_json is not None
            and not self.issues
            and not self.duplicates
            and self.cycle is None
        )


def _sanitize(tasks_json: TasksJson) -> tuple[TasksJson, int]:
    sanitized = sanitize_dependencies(tasks_json.tasks)
    dropped = sum(len(a.deps) - len(b.deps) for a, b in zip(tasks_json.tasks, sanitized))
    if dropped:
        logger.warning("Dropped %s dependencies referencing unknown or self tasks", dropped)
    return tasks_json.model_copy(update={"tasks": sanitized}), dropped


def ensure_task_graph(value: Any) -> TasksJson:
    """Validate and normalize a tasks document, raising on the first failure.

    Args:
        value: Raw tasks document (dict) or TasksJson

    Returns:
        Validated TasksJson with sanitized dependencies

    Raises:
        TaskValidationError: On structural violations
        DuplicateTaskIdError: If task ids repeat
        DependencyCycleError: If dependencies form a cycle
    """
    tasks_json = validate_collection(value)

    unique = validate_unique_ids(tasks_json.tasks)
    if not unique.valid:
        raise DuplicateTaskIdError(unique.duplicates)

    tasks_json, _ = _sanitize(tasks_json)

    cycle = detect_cycles(tasks_json.tasks)
    if cycle.has_cycle:
        raise DependencyCycleError(cycle.path or [])

    return tasks_json


def check_task_graph(value: Any) -> GraphReport:
    """Run the validation pipeline and report every finding.

    Structural issues stop the pipeline since the graph checks need a
    well-formed collection.
    """
    result = safe_validate_collection(value)
    if not result.success:
        return GraphReport(issues=result.issues)

    tasks_json = result.value
    report = GraphReport()

    unique = validate_unique_ids(tasks_json.tasks)
    report.duplicates = unique.duplicates

    tasks_json, report.dropped_deps = _sanitize(tasks_json)
    report.tasks_json = tasks_json

    cycle = detect_cycles(tasks_json.tasks)
    if cycle.has_cycle:
        report.cycle = cycle.path

    return report


def truncate_tasks(tasks_json: TasksJson, max_tasks: int) -> TasksJson:
    """Keep the first max_tasks tasks and drop dependencies on removed ones."""
    if len(tasks_json.tasks) <= max_tasks:
        return tasks_json

    logger.info("Truncating %s tasks to %s", len(tasks_json.tasks), max_tasks)
    kept = tasks_json.model_copy(update={"tasks": tasks_json.tasks[:max_tasks]})
    return _sanitize(kept)[0]
