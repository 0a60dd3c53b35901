"""Logging setup for the prdtasks CLI.

Console output goes to stderr so that ``prdtasks generate`` can print the
tasks JSON on stdout. The optional log file under ``logging.log_dir`` keeps
one rotating file per project.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "prdtasks"
DEFAULT_LOG_FILE = "prdtasks.log"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class ConsoleFormatter(logging.Formatter):
    """Short console lines: level, package-relative logger name, message."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = False):
        super().__init__()
        self.use_colors = use_colors

    @staticmethod
    def short_name(name: str) -> str:
        """Strip the package prefix: ``prdtasks.validation.pipeline`` -> ``validation.pipeline``."""
        prefix = PACKAGE_LOGGER + "."
        return name[len(prefix):] if name.startswith(prefix) else name

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:<8}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"{level} {self.short_name(record.name)}: {message}"


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    file_name: str = DEFAULT_LOG_FILE,
    rotation_mb: int = 10,
    backup_count: int = 3,
    console: bool = True,
    use_colors: Optional[bool] = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name, case-insensitive
        log_dir: Directory for the rotating log file (no file when unset)
        file_name: Log file name inside log_dir
        rotation_mb: Max log size before rotation (MB)
        backup_count: Rotated files to keep
        console: Whether to log to stderr
        use_colors: Force colors on or off; defaults to stderr being a tty
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()

    if console:
        if use_colors is None:
            use_colors = sys.stderr.isatty()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ConsoleFormatter(use_colors=use_colors))
        root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / file_name,
            maxBytes=max(1, rotation_mb) * 1024 * 1024,
            backupCount=max(0, backup_count),
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)
