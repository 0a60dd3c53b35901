"""Base task generator interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from ..tasks.models import TasksJson


class GeneratorError(Exception):
    """Task generation error."""

    pass


class GeneratorOptions(BaseModel):
    """Per-call generation options."""

    max_tasks: Optional[int] = Field(default=None, ge=1, le=200, description="Task count cap")
    model: Optional[str] = Field(default=None, description="Model name (LLM generators)")
    temperature: Optional[float] = Field(
        default=None, ge=0, le=2, description="Sampling temperature (LLM generators)"
    )
    source_prd: Optional[str] = Field(
        default=None, description="Label recorded in a structured version block"
    )


class TaskGenerator(ABC):
    """Turns PRD text into a validated tasks document.

    Implementations may be pure (deterministic) or I/O bound (LLM backed);
    all of them share this async shape.
    """

    name: str = "base"

    def __init__(self, config: Optional[dict] = None):
        """Initialize generator.

        Args:
            config: Generator configuration dict
        """
        self.config = config or {}

    @abstractmethod
    async def generate(
        self,
        prd_text: str,
        options: Optional[GeneratorOptions] = None,
    ) -> TasksJson:
        """Generate tasks from a PRD.

        Args:
            prd_text: PRD markdown
            options: Generation options

        Returns:
            Validated TasksJson

        Raises:
            GeneratorError: On generation failure
        """
        pass
