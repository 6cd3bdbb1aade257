"""
Local Java runtime discovery.

Scans every storage root for the java executable and probes each hit for its
version and bitness. Roots are scanned one after another and every hit is
fully processed before the next one; nothing is cached between calls.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

from .common import is_windows
from .process_text import (
    NOT_FOUND,
    ExtractionError,
    get_runtime_bitness,
    get_runtime_version,
)
from .roots import enumerate_roots

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeRecord:
    """One discovered runtime installation."""

    version: str
    bitness: int
    install_path: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "bitness": self.bitness,
            "install_path": self.install_path,
        }


@dataclass(frozen=True)
class DiscoveryFailure:
    """A candidate that could not be probed."""

    path: str
    error: ExtractionError

    def __str__(self) -> str:
        return f"{self.path}: {self.error}"


@dataclass
class DiscoveryReport:
    """Records found by a tolerant scan, plus the candidates that failed."""

    records: list[RuntimeRecord] = field(default_factory=list)
    failures: list[DiscoveryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def default_executable_name(system: str | None = None) -> str:
    """Name of the java executable on the given (or current) system."""
    return "java.exe" if is_windows(system) else "java"


def find_executables(root: str, name: str) -> list[str]:
    """Recursively find files named exactly `name` under root.

    The walk stays on root's filesystem (other mount points are roots of
    their own), does not follow symlinked directories and skips directories
    it cannot read.

    Args:
        root: Directory to search
        name: Exact file name to match

    Returns:
        Absolute paths in walk order
    """
    try:
        root_dev = os.stat(root).st_dev
    except OSError as e:
        logger.debug(f"Cannot stat root {root}: {e}")
        return []

    hits: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        kept = []
        for d in sorted(dirnames):
            try:
                if os.lstat(os.path.join(dirpath, d)).st_dev == root_dev:
                    kept.append(d)
            except OSError:
                continue
        dirnames[:] = kept

        if name in filenames:
            path = os.path.join(dirpath, name)
            if os.path.isfile(path):
                hits.append(os.path.abspath(path))
    return hits


def install_dir_for(executable: str) -> str:
    """Runtime home for an executable: the parent of its bin/ directory."""
    return os.path.dirname(os.path.dirname(executable))


def in_bin_dir(executable: str) -> bool:
    """True if the executable sits directly inside a directory named bin."""
    parent = os.path.basename(os.path.dirname(executable))
    return os.path.normcase(parent) == "bin"


def _probe(executable: str, timeout: float | None) -> RuntimeRecord | None:
    if not in_bin_dir(executable):
        logger.debug(f"Skipping {executable}: not inside a bin directory")
        return None

    install_dir = install_dir_for(executable)

    version = get_runtime_version(install_dir, timeout=timeout)
    if version is NOT_FOUND:
        logger.debug(f"Skipping {executable}: no bin/java under {install_dir}")
        return None

    bitness = get_runtime_bitness(install_dir, timeout=timeout)
    if bitness is NOT_FOUND:
        return None

    logger.debug(f"Found runtime {version} ({bitness}-bit) at {install_dir}")
    return RuntimeRecord(version=version, bitness=bitness, install_path=install_dir)


def _scan(
    roots: Sequence[str] | None,
    executable_name: str | None,
    timeout: float | None,
    report: DiscoveryReport | None,
) -> list[RuntimeRecord]:
    if roots is None:
        roots = enumerate_roots()
    name = executable_name or default_executable_name()

    records: list[RuntimeRecord] = []
    for root in roots:
        logger.debug(f"Scanning {root} for {name}")
        for executable in find_executables(root, name):
            try:
                record = _probe(executable, timeout)
            except ExtractionError as e:
                if report is None:
                    raise
                logger.warning(f"Failed to probe {executable}: {e}")
                report.failures.append(DiscoveryFailure(path=executable, error=e))
                continue
            if record is not None:
                records.append(record)

    logger.info(f"Discovered {len(records)} runtime(s) across {len(roots)} root(s)")
    return records


def discover_runtimes(
    roots: Sequence[str] | None = None,
    executable_name: str | None = None,
    timeout: float | None = None,
    continue_on_error: bool = False,
) -> list[RuntimeRecord]:
    """Discover all locally installed runtimes.

    By default the first candidate that fails to probe (unparseable version
    output, launch failure) aborts the whole scan. With continue_on_error the
    failing candidates are logged and skipped instead; use
    discover_runtimes_report() to get them back.

    Args:
        roots: Roots to scan in order (default: enumerate_roots())
        executable_name: File name to look for (default: java / java.exe)
        timeout: Per-process timeout in seconds
        continue_on_error: Skip failing candidates instead of raising

    Returns:
        Records in root order, then walk order

    Raises:
        ParseError: If a candidate prints no version (strict mode)
        ProcessError: If a candidate cannot be run (strict mode)
    """
    if continue_on_error:
        return discover_runtimes_report(roots, executable_name, timeout).records
    return _scan(roots, executable_name, timeout, report=None)


def discover_runtimes_report(
    roots: Sequence[str] | None = None,
    executable_name: str | None = None,
    timeout: float | None = None,
) -> DiscoveryReport:
    """Discover runtimes, collecting per-candidate failures instead of raising."""
    report = DiscoveryReport()
    report.records = _scan(roots, executable_name, timeout, report=report)
    return report


def discover_from_config(config: Config | None = None) -> list[RuntimeRecord]:
    """Discover runtimes using the discovery section of a Config.

    Args:
        config: Loaded configuration (default: load_config())
    """
    if config is None:
        from .config import load_config
        config = load_config()

    discovery = config.discovery
    return discover_runtimes(
        roots=list(discovery.roots) or None,
        executable_name=discovery.executable_name,
        timeout=config.preferences.process_timeout_seconds,
        continue_on_error=discovery.continue_on_error,
    )
