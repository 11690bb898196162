"""Structured logging configuration for the command line entry point."""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

from bundlescope.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure console (and optionally file) logging for bundlescope and uvicorn.

    Args:
        level: Overrides ``settings.log_level`` when given (e.g. from ``--log-level``)
    """
    log_level = (level or settings.log_level).upper()
    formatter = "json" if settings.log_json else ("detailed" if settings.is_development else "simple")

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": formatter,
            "stream": sys.stdout,
        },
    }

    if settings.log_file and not settings.is_testing:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "json" if settings.log_json else "detailed",
            "filename": str(log_path),
            "encoding": "utf-8",
        }

    handler_names = list(handlers)

    log_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": "%(message)s",
            },
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(filename)s %(lineno)d %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            "bundlescope": {
                "level": log_level,
                "handlers": handler_names,
                "propagate": False,
            },
            "uvicorn": {
                "level": "WARNING",
                "handlers": handler_names,
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "WARNING" if settings.is_production else "INFO",
                "handlers": handler_names,
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": handler_names,
        },
    }

    logging.config.dictConfig(log_config)

    logger = logging.getLogger("bundlescope")
    logger.debug(
        f"Logging initialized - Environment: {settings.environment}, Level: {log_level}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    Args:
        name: Logger name relative to the ``bundlescope`` logger

    Returns:
        Configured logger instance
    """
    return logging.getLogger(f"bundlescope.{name}")
