"""
Out-of-process diagnostic text extraction.

Runs a runtime executable (typically `java -version`), captures the text it
writes to stderr and pulls structured facts out of it with fixed-marker
substring searches.
"""

from __future__ import annotations

import logging
import os
import subprocess

from .common import is_windows

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = float(os.environ.get("LAUNCHER_CORE_TIMEOUT_SECONDS", "3"))

VERSION_MARKER = 'version "'
BITNESS_MARKER = "64-Bit"
VERSION_ARGUMENT = "-version"


class ExtractionError(Exception):
    """Raised when a fact cannot be extracted from a runtime executable."""
    pass


class ParseError(ExtractionError):
    """Raised when diagnostic text does not have the expected shape."""
    pass


class ProcessError(ExtractionError):
    """Raised when the executable cannot be launched or read."""
    pass


class _NotFound:
    """Marker for an executable that does not exist on disk."""

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


def runtime_executable(install_dir: str, system: str | None = None) -> str:
    """Build the path of the java executable inside an install directory.

    Args:
        install_dir: Runtime home (the directory holding bin/)
        system: Operating system name (defaults to the current one)

    Returns:
        <install_dir>/bin/java.exe on Windows, <install_dir>/bin/java elsewhere
    """
    name = "java.exe" if is_windows(system) else "java"
    return os.path.join(install_dir, "bin", name)


def run_diagnostic(
    executable: str,
    argument: str = VERSION_ARGUMENT,
    timeout: float | None = None,
) -> str | _NotFound:
    """Run an executable and return what it wrote to stderr.

    The child gets no stdin and its exit code is ignored; only the captured
    text matters. The call waits for the process to exit before returning.

    Args:
        executable: Path to the executable
        argument: Single command-line argument
        timeout: Timeout in seconds (default: TIMEOUT_SECONDS)

    Returns:
        Diagnostic text, or NOT_FOUND if the executable does not exist

    Raises:
        ProcessError: If the process cannot be started, read or times out
    """
    if not os.path.isfile(executable):
        logger.debug(f"Executable not found: {executable}")
        return NOT_FOUND

    try:
        proc = subprocess.run(
            [executable, argument],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
            timeout=timeout or TIMEOUT_SECONDS,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ProcessError(f"Timed out running {executable} {argument}") from e
    except OSError as e:
        raise ProcessError(f"Failed to run {executable} {argument}: {e}") from e

    return proc.stderr or ""


def extract_version(text: str) -> str:
    """Extract the quoted version from diagnostic text.

    Args:
        text: Output such as 'java version "21.0.4" 2024-07-16 LTS'

    Returns:
        The text between `version "` and the next quote (e.g., "21.0.4")

    Raises:
        ParseError: If the marker or its closing quote is missing
    """
    start = text.find(VERSION_MARKER)
    if start == -1:
        raise ParseError("version marker not found")

    start += len(VERSION_MARKER)
    end = text.find('"', start)
    if end == -1:
        raise ParseError("version marker not found")

    return text[start:end]


def extract_bitness(text: str) -> int:
    """Extract bitness from diagnostic text.

    Anything that does not mention `64-Bit` is reported as 32-bit.
    """
    return 64 if BITNESS_MARKER in text else 32


def get_runtime_version(install_dir: str, timeout: float | None = None) -> str | _NotFound:
    """Get the version of the runtime installed in install_dir.

    Returns:
        Version string, or NOT_FOUND if bin/java is missing

    Raises:
        ParseError: If the output carries no version marker
        ProcessError: If the executable cannot be run
    """
    text = run_diagnostic(runtime_executable(install_dir), timeout=timeout)
    if text is NOT_FOUND:
        return NOT_FOUND
    return extract_version(text)


def get_runtime_bitness(install_dir: str, timeout: float | None = None) -> int | _NotFound:
    """Get the bitness (32 or 64) of the runtime installed in install_dir.

    Returns:
        32 or 64, or NOT_FOUND if bin/java is missing

    Raises:
        ProcessError: If the executable cannot be run
    """
    text = run_diagnostic(runtime_executable(install_dir), timeout=timeout)
    if text is NOT_FOUND:
        return NOT_FOUND
    return extract_bitness(text)
