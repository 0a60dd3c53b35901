"""Structural validation of tasks and task collections."""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..tasks.models import Task, TasksJson

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidationIssue:
    """A single field-level violation."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"


@dataclass
class ValidationResult(Generic[ModelT]):
    """Outcome of a non-throwing validation."""

    value: Optional[ModelT] = None
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.value is not None and not self.issues


class TaskValidationError(Exception):
    """Structural validation failed."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        summary = "; ".join(str(issue) for issue in issues[:5])
        if len(issues) > 5:
            summary += f" (+{len(issues) - 5} more)"
        super().__init__(f"Task validation failed: {summary}")


def issues_from_error(error: ValidationError) -> list[ValidationIssue]:
    """Convert a pydantic error into path/message issues."""
    return [
        ValidationIssue(
            path=".".join(str(part) for part in err["loc"]),
            message=err["msg"],
        )
        for err in error.errors()
    ]


def _validate(model: type[ModelT], value: Any) -> ModelT:
    if isinstance(value, model):
        value = value.model_dump(by_alias=True)
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise TaskValidationError(issues_from_error(e)) from e


def _safe_validate(model: type[ModelT], value: Any) -> ValidationResult[ModelT]:
    try:
        return ValidationResult(value=_validate(model, value))
    except TaskValidationError as e:
        return ValidationResult(issues=e.issues)


def validate_task(value: Any) -> Task:
    """Validate a single task.

    Raises:
        TaskValidationError: If any field violates its contract
    """
    return _validate(Task, value)


def validate_collection(value: Any) -> TasksJson:
    """Validate a tasks document.

    Raises:
        TaskValidationError: If any field violates its contract
    """
    return _validate(TasksJson, value)


def safe_validate_task(value: Any) -> ValidationResult[Task]:
    """Validate a single task, collecting issues instead of raising."""
    return _safe_validate(Task, value)


def safe_validate_collection(value: Any) -> ValidationResult[TasksJson]:
    """Validate a tasks document, collecting issues instead of raising."""
    return _safe_validate(TasksJson, value)
