"""
Logging configuration for the index benchmark.

Provides per-module loggers with clean, concise terminal output. The CLI can
re-apply a level and an optional log file to every logger created so far.
"""
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

_default_level: int = logging.INFO
_default_log_file: Optional[Path] = None
_loggers: Dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: Optional[int] = None,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: the level set by configure_logging, INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    level = _default_level if level is None else level
    log_file = _default_log_file if log_file is None else log_file

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt='[%(levelname)s] %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    _loggers[name] = logger
    return logger


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Apply level and log file to all existing and future loggers."""
    global _default_level, _default_log_file
    _default_level = level
    _default_log_file = log_file
    for name in list(_loggers):
        setup_logger(name)
