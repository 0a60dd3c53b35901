"""Configuration loader with validation."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import TaskGenConfig

PROVIDER_ENV_VAR = "MODEL_PROVIDER"


class ConfigError(Exception):
    """Configuration error."""

    pass


def load_config(config_path: Path, env: Optional[dict] = None) -> TaskGenConfig:
    """Load and validate configuration from YAML file.

    A missing file yields the default configuration. MODEL_PROVIDER, when
    set, overrides generator.provider.

    Args:
        config_path: Path to config YAML file
        env: Environment mapping (defaults to os.environ)

    Returns:
        Validated TaskGenConfig instance

    Raises:
        ConfigError: If config file is invalid
    """
    env = os.environ if env is None else env
    data: dict = {}

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping: {config_path}")

        # Resolve log dir relative to config file
        log_dir = (data.get("logging") or {}).get("log_dir")
        if log_dir and not Path(log_dir).is_absolute():
            data["logging"]["log_dir"] = (config_path.parent / log_dir).resolve()

    provider = env.get(PROVIDER_ENV_VAR)
    if provider:
        if data.get("generator") is None:
            data["generator"] = {}
        if not isinstance(data["generator"], dict):
            raise ConfigError(f"'generator' must be a mapping: {config_path}")
        data["generator"]["provider"] = provider

    try:
        return TaskGenConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}")


def create_default_config(config_path: Path) -> None:
    """Create default configuration file.

    Args:
        config_path: Path where config should be created
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config = {
        "generator": {
            "provider": "deterministic",
            "model": None,
            "temperature": None,
            "max_tasks": 20,
            "structured_version": False,
        },
        "limits": {
            "min_prd_chars": 10,
            "max_prd_chars": 30000,
            "request_timeout_sec": 45,
        },
        "output": {
            "indent": 2,
            "preview_count": 3,
        },
        "logging": {
            "level": "INFO",
            "log_dir": None,
        },
    }

    with open(config_path, "w") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)
