"""Generator registry and factory.

Providers are registered either as a class or as a ``"module:Class"``
import path. Import paths are resolved on first use so optional provider
dependencies are only needed when that provider is selected.
"""

import importlib
import logging
from typing import Union

from ..config.models import GeneratorConfig
from .base import GeneratorError, TaskGenerator

logger = logging.getLogger(__name__)

GeneratorTarget = Union[str, type[TaskGenerator]]

_DETERMINISTIC = "prdtasks.generators.deterministic:DeterministicTaskGenerator"

_registry: dict[str, GeneratorTarget] = {
    "deterministic": _DETERMINISTIC,
    "mock": _DETERMINISTIC,
}


def register_generator(name: str, target: GeneratorTarget) -> None:
    """Register a generator provider.

    Args:
        name: Provider name used in configuration
        target: TaskGenerator subclass or "module:Class" import path
    """
    key = name.lower()
    if key in _registry:
        logger.debug(f"Replacing registered generator provider: {key}")
    _registry[key] = target


def unregister_generator(name: str) -> None:
    _registry.pop(name.lower(), None)


def available_providers() -> list[str]:
    return sorted(_registry)


def _resolve(target: GeneratorTarget) -> type[TaskGenerator]:
    if not isinstance(target, str):
        return target

    module_name, _, attr = target.partition(":")
    try:
        module = importlib.import_module(module_name)
        cls = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise GeneratorError(f"Cannot load generator {target}: {e}") from e

    if not (isinstance(cls, type) and issubclass(cls, TaskGenerator)):
        raise GeneratorError(f"{target} is not a TaskGenerator")
    return cls


def create_task_generator(config: GeneratorConfig) -> TaskGenerator:
    """Create the generator selected by configuration.

    Args:
        config: Generator configuration

    Returns:
        TaskGenerator instance

    Raises:
        GeneratorError: If the provider is unknown or cannot be loaded
    """
    provider = config.provider.lower()
    target = _registry.get(provider)
    if target is None:
        raise GeneratorError(
            f"Unsupported provider: {config.provider} "
            f"(available: {', '.join(available_providers())})"
        )

    cls = _resolve(target)
    logger.info(f"Using {provider} task generator ({cls.__name__})")
    return cls(config.model_dump())
