"""
Configuration file parsing and management.

Supports YAML configuration files (JSON for *.json paths).
Merges configurations from multiple sources (project → user → system → defaults).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .common import vlog
from .mirrors import MOJANG, BMCLAPI


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".launcher-core.yml",                                      # Project root (highest priority)
    ".launcher-core.yaml",
    os.path.expanduser("~/.config/launcher-core/config.yml"),  # User global
    os.path.expanduser("~/.config/launcher-core/config.yaml"),
    "/etc/launcher-core/config.yml",                           # System global
    "/etc/launcher-core/config.yaml",
]

VALID_SOURCES = {"auto", MOJANG, BMCLAPI}


@dataclass(frozen=True)
class Preferences:
    """
    Timeouts for blocking operations.

    Attributes:
        timeout_seconds: Timeout for each mirror probe and manifest fetch
        process_timeout_seconds: Timeout for each `java -version` invocation
    """
    timeout_seconds: int = 5
    process_timeout_seconds: int = 3

    def __post_init__(self):
        """Validate preferences after initialization."""
        if self.timeout_seconds < 1 or self.timeout_seconds > 60:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. "
                "Must be between 1 and 60"
            )

        if self.process_timeout_seconds < 1 or self.process_timeout_seconds > 60:
            raise ValueError(
                f"Invalid process_timeout_seconds: {self.process_timeout_seconds}. "
                "Must be between 1 and 60"
            )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Preferences:
        """Create Preferences from dictionary."""
        return Preferences(
            timeout_seconds=data.get("timeout_seconds", 5),
            process_timeout_seconds=data.get("process_timeout_seconds", 3),
        )


@dataclass(frozen=True)
class DiscoveryPreferences:
    """
    Runtime discovery settings.

    Attributes:
        executable_name: File name to search for (None: java / java.exe)
        roots: Directories to scan instead of every storage root
        continue_on_error: Skip candidates that fail to probe instead of aborting
    """
    executable_name: str | None = None
    roots: tuple[str, ...] = ()
    continue_on_error: bool = False

    @staticmethod
    def from_dict(data: dict[str, Any]) -> DiscoveryPreferences:
        """Create DiscoveryPreferences from dictionary."""
        return DiscoveryPreferences(
            executable_name=data.get("executable_name"),
            roots=tuple(data.get("roots", ()) or ()),
            continue_on_error=data.get("continue_on_error", False),
        )


@dataclass(frozen=True)
class Config:
    """
    Complete configuration for launcher_core.

    Attributes:
        version: Config schema version
        source: Manifest mirror ('auto', 'MoJang' or 'BMCLAPI')
        preferences: Timeouts
        discovery: Runtime discovery settings
        source_file: Path to the configuration file that was loaded
    """
    version: int = 1
    source: str = "auto"
    preferences: Preferences = field(default_factory=Preferences)
    discovery: DiscoveryPreferences = field(default_factory=DiscoveryPreferences)
    source_file: str = ""

    def __post_init__(self):
        """Validate config after initialization."""
        if self.version != 1:
            raise ValueError(f"Unsupported config version: {self.version}. Expected version 1")

        if self.source not in VALID_SOURCES:
            raise ValueError(
                f"Invalid source: {self.source}. "
                f"Must be one of: {', '.join(sorted(VALID_SOURCES))}"
            )

    @staticmethod
    def from_dict(data: dict[str, Any], source_file: str = "") -> Config:
        """Create Config from dictionary."""
        return Config(
            version=data.get("version", 1),
            source=data.get("source", "auto"),
            preferences=Preferences.from_dict(data.get("preferences", {}) or {}),
            discovery=DiscoveryPreferences.from_dict(data.get("discovery", {}) or {}),
            source_file=source_file,
        )

    def merge_with(self, other: Config) -> Config:
        """
        Merge this config with another, preferring values from this config.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged Config object
        """
        prefs, other_prefs = self.preferences, other.preferences
        merged_preferences = Preferences(
            timeout_seconds=prefs.timeout_seconds if prefs.timeout_seconds != 5 else other_prefs.timeout_seconds,
            process_timeout_seconds=(
                prefs.process_timeout_seconds
                if prefs.process_timeout_seconds != 3
                else other_prefs.process_timeout_seconds
            ),
        )

        disc, other_disc = self.discovery, other.discovery
        merged_discovery = DiscoveryPreferences(
            executable_name=disc.executable_name or other_disc.executable_name,
            roots=disc.roots or other_disc.roots,
            continue_on_error=disc.continue_on_error or other_disc.continue_on_error,
        )

        return Config(
            version=self.version,
            source=self.source if self.source != "auto" else other.source,
            preferences=merged_preferences,
            discovery=merged_discovery,
            source_file=self.source_file or other.source_file,
        )


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return None


def _load_json(file_path: str) -> dict[str, Any] | None:
    """
    Load JSON configuration file.

    Returns:
        Parsed configuration dictionary, or None if file invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, json.JSONDecodeError):
        return None


def load_config_file(file_path: str, verbose: bool = False) -> Config | None:
    """
    Load configuration from a single file.

    Args:
        file_path: Path to configuration file (.yml, .yaml or .json)
        verbose: Enable verbose logging

    Returns:
        Config object, or None if file cannot be loaded
    """
    if not os.path.exists(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    if file_path.endswith(".json"):
        data = _load_json(file_path)
    else:
        data = _load_yaml(file_path)

    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        config = Config.from_dict(data, source_file=file_path)
        vlog(f"Loaded config successfully: {file_path}", verbose)
        return config
    except (ValueError, TypeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .launcher-core.yml
    3. User ~/.config/launcher-core/config.yml
    4. System /etc/launcher-core/config.yml
    5. Default configuration

    Args:
        custom_path: Optional path to custom configuration file
        verbose: Enable verbose logging

    Returns:
        Merged Config object (never None, returns defaults if no config found)

    Raises:
        ValueError: If custom_path is provided but file cannot be loaded
    """
    configs: list[Config] = []

    if custom_path:
        config = load_config_file(custom_path, verbose)
        if config is None:
            raise ValueError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)
        vlog(f"Using custom config: {custom_path}", verbose)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location, verbose)
        if config is not None:
            configs.append(config)
            vlog(f"Found config at: {location}", verbose)

    if not configs:
        vlog("No config files found, using defaults", verbose)
        return Config()

    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    vlog(f"Merged {len(configs)} config files", verbose)
    return merged


def validate_config(config: Config) -> list[str]:
    """
    Validate configuration and return list of warnings.

    Args:
        config: Config object to validate

    Returns:
        List of validation warning messages (empty if valid)
    """
    warnings = []

    roots = config.discovery.roots
    if len(roots) != len(set(roots)):
        warnings.append("Duplicate discovery roots")

    for root in roots:
        if not os.path.isdir(root):
            warnings.append(f"Discovery root does not exist: {root}")

    name = config.discovery.executable_name
    if name is not None and (not name or os.sep in name or "/" in name):
        warnings.append(f"Discovery executable_name must be a bare file name: {name!r}")

    return warnings
