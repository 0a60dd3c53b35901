"""Task and task collection models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TASK_ID_PATTERN = r"^[A-Z]-[0-9]{3}$"

MAX_TAGS = 8
MAX_DEPS = 16
MAX_STEPS = 20
MAX_TASKS = 200
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 140


@dataclass
class Section:
    """A heading-delimited span of a PRD."""

    title: str
    content: str
    order: int


class Priority(str, Enum):
    """Task priority."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"


class Risk(str, Enum):
    """Task risk level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Role(str, Enum):
    """Role expected to own the task."""

    FRONTEND = "frontend"
    BACKEND = "backend"
    INFRA = "infra"
    QA = "qa"
    PM = "pm"


class TaskStatus(str, Enum):
    """Task lifecycle status."""

    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskMetadata(BaseModel):
    """Planning metadata attached to a task."""

    priority: Priority = Field(description="Priority level")
    risk: Risk = Field(description="Risk level")
    effort_hours: float = Field(ge=2, le=24, description="Estimated effort in hours")
    role: Role = Field(description="Owning role")
    status: TaskStatus = Field(description="Lifecycle status")
    created: str = Field(description="Creation timestamp (ISO 8601)")
    updated: str = Field(description="Last update timestamp (ISO 8601)")

    @field_validator("created", "updated")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("timestamp must be valid ISO 8601 format")
        return value


class Task(BaseModel):
    """A single implementation task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        min_length=1,
        max_length=32,
        pattern=TASK_ID_PATTERN,
        description="Task identifier (e.g. T-001)",
    )
    title: str = Field(
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
        description="Task title",
    )
    description: Optional[str] = Field(default=None, description="Functional goal")
    details: Optional[str] = Field(default=None, description="Implementation notes")
    test_strategy: Optional[str] = Field(
        default=None,
        alias="testStrategy",
        description="How the task is verified",
    )
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
    deps: list[str] = Field(default_factory=list, max_length=MAX_DEPS)
    steps: list[Annotated[str, Field(min_length=1)]] = Field(
        min_length=1,
        max_length=MAX_STEPS,
    )
    metadata: Optional[TaskMetadata] = Field(default=None)


class VersionInfo(BaseModel):
    """Structured version block of a tasks document."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(alias="schema", description="Schema version")
    generator: str = Field(description="Generator that produced the document")
    source_prd: Optional[str] = Field(default=None, description="Source PRD label")


class TasksJson(BaseModel):
    """A versioned collection of tasks."""

    version: Union[str, VersionInfo] = Field(default="1.0")
    tasks: list[Task] = Field(min_length=1, max_length=MAX_TASKS)

    def to_dict(self) -> dict:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
