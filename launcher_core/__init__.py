"""
launcher-core - Source resolution and Java runtime discovery for game launchers.

Core Modules:
- Discovery: storage root enumeration, java executable search, version/bitness probing
- Sources: mirror latency selection, manifest acquisition and queries
- Foundation: configuration files, logging
"""

__version__ = "1.0.0"

VERSION = __version__

# Discovery
from .process_text import (
    NOT_FOUND,
    ExtractionError,
    ParseError,
    ProcessError,
    run_diagnostic,
    extract_version,
    extract_bitness,
    runtime_executable,
    get_runtime_version,
    get_runtime_bitness,
)
from .roots import enumerate_roots, windows_roots, posix_roots
from .discovery import (
    RuntimeRecord,
    DiscoveryFailure,
    DiscoveryReport,
    find_executables,
    discover_runtimes,
    discover_runtimes_report,
    discover_from_config,
)

# Sources
from .transport import TransportError, http_get
from .mirrors import MOJANG, BMCLAPI, PRIMARY, SECONDARY, mirror_url, probe_latency, select_source
from .manifest import (
    CURRENT_MANIFEST,
    ManifestSlot,
    VersionEntry,
    VersionKind,
    initialize_source,
    resolve_manifest,
    get_latest_version,
    get_latest_release,
    get_latest_snapshot,
    get_version_list,
    find_version,
)

# Foundation
from .config import (
    Config,
    Preferences,
    DiscoveryPreferences,
    load_config,
    load_config_file,
    validate_config,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    # Version
    "__version__",
    "VERSION",
    # Discovery
    "NOT_FOUND",
    "ExtractionError",
    "ParseError",
    "ProcessError",
    "run_diagnostic",
    "extract_version",
    "extract_bitness",
    "runtime_executable",
    "get_runtime_version",
    "get_runtime_bitness",
    "enumerate_roots",
    "windows_roots",
    "posix_roots",
    "RuntimeRecord",
    "DiscoveryFailure",
    "DiscoveryReport",
    "find_executables",
    "discover_runtimes",
    "discover_runtimes_report",
    "discover_from_config",
    # Sources
    "TransportError",
    "http_get",
    "MOJANG",
    "BMCLAPI",
    "PRIMARY",
    "SECONDARY",
    "mirror_url",
    "probe_latency",
    "select_source",
    "CURRENT_MANIFEST",
    "ManifestSlot",
    "VersionEntry",
    "VersionKind",
    "initialize_source",
    "resolve_manifest",
    "get_latest_version",
    "get_latest_release",
    "get_latest_snapshot",
    "get_version_list",
    "find_version",
    # Foundation
    "Config",
    "Preferences",
    "DiscoveryPreferences",
    "load_config",
    "load_config_file",
    "validate_config",
    "setup_logging",
    "get_logger",
]
