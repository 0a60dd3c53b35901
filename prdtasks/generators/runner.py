"""Run a generator with input limits and a timeout."""

import asyncio
import logging
from typing import Optional

from ..config.models import LimitsConfig
from ..tasks.models import TasksJson
from .base import GeneratorError, GeneratorOptions, TaskGenerator

logger = logging.getLogger(__name__)


class PrdInputError(Exception):
    """PRD text is outside the accepted size limits."""

    pass


def check_prd_text(prd_text: str, limits: LimitsConfig) -> None:
    """Validate PRD size against configured limits.

    Raises:
        PrdInputError: If the text is too short or too long
    """
    length = len(prd_text)
    if length < limits.min_prd_chars:
        raise PrdInputError(
            f"PRD text must be at least {limits.min_prd_chars} characters (got {length})"
        )
    if length > limits.max_prd_chars:
        raise PrdInputError(
            f"PRD text must not exceed {limits.max_prd_chars} characters (got {length})"
        )


async def run_generator(
    generator: TaskGenerator,
    prd_text: str,
    options: Optional[GeneratorOptions] = None,
    limits: Optional[LimitsConfig] = None,
) -> TasksJson:
    """Generate tasks under input limits and a request timeout.

    Args:
        generator: Generator to run
        prd_text: PRD markdown
        options: Generation options
        limits: Input limits and timeout (defaults apply if omitted)

    Returns:
        Generated TasksJson

    Raises:
        PrdInputError: If the PRD violates size limits
        GeneratorError: If generation times out
    """
    limits = limits or LimitsConfig()
    check_prd_text(prd_text, limits)

    logger.info(f"Generating tasks with {generator.name} ({len(prd_text)} chars)")
    try:
        tasks_json = await asyncio.wait_for(
            generator.generate(prd_text, options),
            timeout=limits.request_timeout_sec,
        )
    except asyncio.TimeoutError as e:
        raise GeneratorError(
            f"Task generation timed out after {limits.request_timeout_sec}s"
        ) from e

    logger.info(f"Generated {len(tasks_json.tasks)} tasks")
    return tasks_json
