"""Configuration models for prdtasks."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GeneratorConfig(BaseModel):
    """Task generator selection."""

    provider: str = Field(default="deterministic", description="Registered generator provider")
    model: Optional[str] = Field(default=None, description="Model name for LLM providers")
    temperature: Optional[float] = Field(default=None, description="Sampling temperature")
    max_tasks: Optional[int] = Field(
        default=None, ge=1, le=200, description="Default task count cap"
    )
    structured_version: bool = Field(
        default=False,
        description="Emit a {schema, generator, source_prd} version block",
    )


class LimitsConfig(BaseModel):
    """Input limits applied around generation."""

    min_prd_chars: int = Field(default=10, ge=0, description="Minimum PRD length")
    max_prd_chars: int = Field(default=30000, ge=1, description="Maximum PRD length")
    request_timeout_sec: float = Field(default=45.0, gt=0, description="Generation timeout")


class OutputConfig(BaseModel):
    """Tasks JSON output settings."""

    indent: int = Field(default=2, ge=0, description="JSON indent")
    preview_count: int = Field(default=3, ge=0, description="Tasks shown in the preview line")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = Field(default="INFO", description="Log level")
    log_dir: Optional[Path] = Field(default=None, description="Log directory (disabled if unset)")
    file_name: str = Field(default="prdtasks.log", min_length=1, description="Log file name inside log_dir")
    rotation_mb: int = Field(default=10, ge=1, description="Log rotation size (MB)")
    backup_count: int = Field(default=3, ge=0, description="Rotated log files to keep")


class TaskGenConfig(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
