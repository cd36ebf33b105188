"""
Logging configuration for Local Graph.

This module provides centralized logging setup with structured logging support
and consistent formatting across all components.
"""

import logging
import logging.config
import sys
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

STANDARD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str | None = None,
    level: str | None = None,
    structured: bool = False,
    log_file: Path | None = None
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        name: Logger name (defaults to this module)
        level: Logging level (INFO, DEBUG, etc.)
        structured: Enable JSON structured logging
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    if name is None:
        name = __name__

    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # Module loggers defer to the "localgraph" logger configured by the CLI
    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))

    if structured:
        formatter = JsonFormatter(fmt=STRUCTURED_FORMAT, datefmt=DATE_FORMAT)
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    elif level is not None:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def configure_root_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> None:
    """Configure logging for the whole application.

    Args:
        level: Root logging level
        structured: Enable JSON structured logging
        log_file: Optional log file path
    """
    level = level.upper()
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": STANDARD_FORMAT,
                "datefmt": DATE_FORMAT
            },
            "structured": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": STRUCTURED_FORMAT,
                "datefmt": DATE_FORMAT
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "structured" if structured else "standard",
                "stream": "ext://sys.stderr"
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"]
        },
        "loggers": {
            "localgraph": {
                "level": level,
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": "structured" if structured else "standard",
            "filename": str(log_file)
        }
        config["loggers"]["localgraph"]["handlers"].append("file")

    logging.config.dictConfig(config)
