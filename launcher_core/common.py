"""
Common utilities shared across launcher_core modules.
"""

from __future__ import annotations

import os
import platform
import sys


def current_system() -> str:
    """
    Get the normalized operating system name.

    Returns:
        "windows", "darwin", or "linux" (any other POSIX system reports its
        lowercased platform.system() value)
    """
    return platform.system().lower() or "unknown"


def is_windows(system: str | None = None) -> bool:
    """Check whether the given (or current) system is Windows."""
    return (system or current_system()) == "windows"


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log verbose message using structured logging.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or os.environ.get("LAUNCHER_CORE_DEBUG", "0") == "1":
        try:
            from .logging_config import get_logger
            logger = get_logger()
            logger.info(msg)
        except Exception:
            # Fallback to stderr if logging fails
            try:
                print(f"[launcher_core] {msg}", file=sys.stderr)
            except Exception:
                pass
