"""Deterministic, regex-driven task generator."""

import logging
from typing import Optional

from ..tasks.models import TasksJson, VersionInfo
from ..tasks.segmenter import segment
from ..tasks.synthesizer import synthesize
from ..validation.pipeline import ensure_task_graph
from .base import GeneratorOptions, TaskGenerator

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


class DeterministicTaskGenerator(TaskGenerator):
    """Generate tasks from PRD structure without any I/O.

    Same input always yields the same output. The coroutine never
    suspends, so awaiting it completes immediately.
    """

    name = "deterministic"

    async def generate(
        self,
        prd_text: str,
        options: Optional[GeneratorOptions] = None,
    ) -> TasksJson:
        options = options or GeneratorOptions()
        if options.model or options.temperature is not None:
            logger.debug("Ignoring model/temperature options for deterministic generator")

        sections = segment(prd_text)
        tasks = synthesize(sections, options.max_tasks)
        logger.debug(f"Synthesized {len(tasks)} tasks from {len(sections)} sections")

        document = {
            "version": self._version(options),
            "tasks": [task.model_dump(by_alias=True) for task in tasks],
        }
        return ensure_task_graph(document)

    def _version(self, options: GeneratorOptions) -> str | dict:
        if options.source_prd is None and not self.config.get("structured_version"):
            return SCHEMA_VERSION

        return VersionInfo(
            schema_version=SCHEMA_VERSION,
            generator=self.name,
            source_prd=options.source_prd,
        ).model_dump(by_alias=True, exclude_none=True)
