"""
Logger utility for solvehash.

Console output is warnings and errors only. When a log directory is
configured (``SOLVEHASH_LOG_DIR`` or the ``log_dir`` setting), adds:
- solvehash.log: Main log with 5MB rotation, keeps 3 backups
- solvehash.json: Structured JSON, 5MB rotation, keeps 2 backups
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _level(level: Union[int, str, None]) -> Optional[int]:
    if level is None or isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else None


def get_logger(
    name: str = "solvehash",
    level: Union[int, str, None] = None,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Get or create a logger with console and optional rotating file handlers.

    Library modules log through ``logging.getLogger(__name__)``; calling
    this once for "solvehash" wires handlers for the whole package.

    Args:
        name: Logger name
        level: Optional logging level, as int or name ("DEBUG")
        log_dir: Optional directory for rotating log files

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        text_formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(text_formatter)
        logger.addHandler(console_handler)

        if log_dir is not None:
            log_dir = Path(log_dir).expanduser()
            log_dir.mkdir(parents=True, exist_ok=True)

            main_handler = RotatingFileHandler(
                log_dir / "solvehash.log",
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            main_handler.setLevel(logging.DEBUG)
            main_handler.setFormatter(text_formatter)
            logger.addHandler(main_handler)

            json_handler = RotatingFileHandler(
                log_dir / "solvehash.json",
                maxBytes=5 * 1024 * 1024,
                backupCount=2,
                encoding="utf-8",
            )
            json_handler.setLevel(logging.INFO)
            json_handler.setFormatter(JsonFormatter())
            logger.addHandler(json_handler)

    resolved = _level(level)
    if resolved is not None:
        logger.setLevel(resolved)
    elif not logger.level:
        logger.setLevel(logging.WARNING)

    return logger


def configure_logging(settings) -> logging.Logger:
    """Wire the package logger from a HashSettings instance."""
    return get_logger("solvehash", level=settings.log_level, log_dir=settings.log_dir)
