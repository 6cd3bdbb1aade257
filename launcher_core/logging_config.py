"""
Centralized logging configuration for launcher_core.

Every module logs through a child of the "launcher_core" logger, so a single
call to setup_logging() controls console and file output for the library.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional


LOGGER_NAME = "launcher_core"

_logger: Optional[logging.Logger] = None

# Child loggers given their own level by the last setup_logging() call
_child_overrides: set = set()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
    propagate: bool = False,
    module_levels: Optional[Dict[str, str]] = None,
) -> logging.Logger:
    """
    Configure logging for the library.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        verbose: Enable verbose (DEBUG) output
        quiet: Suppress console output (file only)
        propagate: Allow log propagation (useful for testing)
        module_levels: Per-module levels, keyed by module name relative to
            the package, e.g. {"discovery": "DEBUG", "mirrors": "WARNING"}

    Returns:
        Configured logger instance
    """
    global _logger

    if verbose:
        effective_level = "DEBUG"
    elif quiet:
        effective_level = "WARNING"
    else:
        effective_level = level.upper()

    child_levels = _normalize_module_levels(module_levels or {})
    handler_level = min([getattr(logging, effective_level), *child_levels.values()])

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, effective_level))

    logger.handlers.clear()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(handler_level)
        console_handler.setFormatter(ColoredFormatter(
            "%(levelname_colored)s %(message)s",
            use_colors=sys.stderr.isatty(),
        ))
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    _apply_module_levels(child_levels)

    logger.propagate = propagate

    _logger = logger
    return logger


def _normalize_module_levels(module_levels: Dict[str, str]) -> Dict[str, int]:
    levels = {}
    for name, level in module_levels.items():
        if name.startswith(f"{LOGGER_NAME}."):
            name = name[len(LOGGER_NAME) + 1:]
        levels[name] = getattr(logging, level.upper())
    return levels


def _apply_module_levels(child_levels: Dict[str, int]) -> None:
    for name in _child_overrides - set(child_levels):
        logging.getLogger(f"{LOGGER_NAME}.{name}").setLevel(logging.NOTSET)
    _child_overrides.clear()

    for name, level in child_levels.items():
        logging.getLogger(f"{LOGGER_NAME}.{name}").setLevel(level)
        _child_overrides.add(name)


def get_logger() -> logging.Logger:
    """
    Get the configured logger instance.

    If logging hasn't been set up, initializes with defaults.
    """
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


class ColoredFormatter(logging.Formatter):
    """
    Formatter with colored output for different log levels.
    """

    COLORS = {
        "DEBUG": "\033[36m",       # Cyan
        "INFO": "\033[32m",        # Green
        "WARNING": "\033[33m",     # Yellow
        "ERROR": "\033[31m",       # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            record.levelname_colored = f"{color}{record.levelname}{self.RESET}"
        else:
            record.levelname_colored = record.levelname

        return super().format(record)
