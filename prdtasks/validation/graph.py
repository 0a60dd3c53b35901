"""Task graph rules: unique ids, cycle detection, dependency sanitization.

The rules accept Task models as well as plain mappings with ``id`` and
``deps`` keys, so collections can be checked before structural validation.
None of them mutate their input.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

from ..tasks.models import Task

TaskLike = TypeVar("TaskLike", Task, Mapping)


@dataclass
class UniqueIdResult:
    """Result of the unique id check."""

    valid: bool
    duplicates: list[str]


@dataclass
class CycleResult:
    """Result of cycle detection."""

    has_cycle: bool
    path: Optional[list[str]] = None


def _task_id(task: Any) -> str:
    if isinstance(task, Mapping):
        return task["id"]
    return task.id


def _task_deps(task: Any) -> list[str]:
    if isinstance(task, Mapping):
        deps = task.get("deps") or []
        # A bare string is one reference, not a sequence of characters.
        if isinstance(deps, str):
            return [deps]
        return list(deps)
    return list(task.deps)



def _with_deps(task: TaskLike, deps: list[str]) -> TaskLike:
    if isinstance(task, Mapping):
        return {**task, "deps": deps}
    return task.model_copy(update={"deps": deps})


def validate_unique_ids(tasks: Sequence[Any]) -> UniqueIdResult:
    """Check that every task id occurs once.

    Args:
        tasks: Tasks to check

    Returns:
        UniqueIdResult with the sorted list of repeated ids
    """
    seen: set[str] = set()
    duplicates: set[str] = set()

    for task in tasks:
        task_id = _task_id(task)
        if task_id in seen:
            duplicates.add(task_id)
        else:
            seen.add(task_id)

    return UniqueIdResult(valid=not duplicates, duplicates=sorted(duplicates))


def detect_cycles(tasks: Sequence[Any]) -> CycleResult:
    """Find a dependency cycle, if any.

    A task listing itself as a dependency is reported first as
    ``[id, id]``. Otherwise a depth-first search with white/gray/black
    colouring runs from every unvisited task in input order. Dependencies
    on unknown ids are ignored. The first cycle found is returned as the
    path from the repeated task back to itself.

    Args:
        tasks: Tasks to check

    Returns:
        CycleResult
    """
    graph: dict[str, list[str]] = {}
    for task in tasks:
        graph[_task_id(task)] = _task_deps(task)

    for task in tasks:
        task_id = _task_id(task)
        if task_id in _task_deps(task):
            return CycleResult(has_cycle=True, path=[task_id, task_id])

    visiting: set[str] = set()  # gray
    visited: set[str] = set()  # black

    for task in tasks:
        start = _task_id(task)
        if start in visited:
            continue

        path = [start]
        visiting.add(start)
        stack = [iter(graph[start])]

        while stack:
            for dep in stack[-1]:
                if dep not in graph or dep in visited:
                    continue
                if dep in visiting:
                    return CycleResult(has_cycle=True, path=path[path.index(dep):] + [dep])
                visiting.add(dep)
                path.append(dep)
                stack.append(iter(graph[dep]))
                break
            else:
                node = path.pop()
                stack.pop()
                visiting.discard(node)
                visited.add(node)

    return CycleResult(has_cycle=False)


def sanitize_dependencies(tasks: Sequence[TaskLike]) -> list[TaskLike]:
    """Drop self-references and references to unknown ids.

    Returns new task objects; dependency order and all other fields are
    kept. Never fails.
    """
    valid_ids = {_task_id(task) for task in tasks}

    sanitized = []
    for task in tasks:
        task_id = _task_id(task)
        deps = [dep for dep in _task_deps(task) if dep != task_id and dep in valid_ids]
        sanitized.append(_with_deps(task, deps))

    return sanitized
