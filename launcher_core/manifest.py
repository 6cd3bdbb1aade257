"""
Version manifest acquisition and queries.

initialize_source() fetches a mirror's version_manifest_v2.json into a
ManifestSlot; the query functions parse either an explicit document or the
slot's current snapshot. Queries never raise on bad remote data: a document
that cannot be parsed yields None.

Document shape:
    {"latest": {"release": id, "snapshot": id},
     "versions": [{"id", "type", "url", "releaseTime", "sha1"}, ...]}
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .mirrors import PRIMARY, mirror_url, select_source
from .transport import TransportError, http_get

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


class VersionKind:
    """Known values of a catalog row's `type` field."""

    RELEASE = "release"
    SNAPSHOT = "snapshot"
    OLD_BETA = "old_beta"
    OLD_ALPHA = "old_alpha"

    LEGACY = (OLD_BETA, OLD_ALPHA)
    LATEST = (RELEASE, SNAPSHOT)


@dataclass(frozen=True)
class VersionEntry:
    """One row of the catalog's `versions` array."""

    name: str | None
    kind: str | None
    source_url: str | None
    published_at: str | None
    checksum: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VersionEntry":
        """Create from a catalog row.

        A JSON null is kept as None; any other non-string value is rejected.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field is neither a string nor null
        """
        values = [data[key] for key in ("id", "type", "url", "releaseTime", "sha1")]
        for value in values:
            if value is not None and not isinstance(value, str):
                raise TypeError(f"Expected string field, got {type(value).__name__}")
        return cls(*values)

    def to_dict(self) -> dict[str, str | None]:
        """Convert back to the catalog row layout."""
        return {
            "id": self.name,
            "type": self.kind,
            "url": self.source_url,
            "releaseTime": self.published_at,
            "sha1": self.checksum,
        }


class ManifestSlot:
    """Holds the current manifest document; safe to share between threads.

    Writers replace the whole document under the lock and readers take a
    snapshot of the reference, so a reader never sees a partial update.
    """

    def __init__(self, document: str | None = None) -> None:
        self._lock = threading.Lock()
        self._document = document

    def get(self) -> str | None:
        with self._lock:
            return self._document

    def set(self, document: str) -> None:
        with self._lock:
            self._document = document

    def clear(self) -> None:
        with self._lock:
            self._document = None


# Process-wide default slot
CURRENT_MANIFEST = ManifestSlot()


def _resolve_document(document: str | None, slot: ManifestSlot | None) -> str | None:
    if document is not None:
        return document
    return (slot or CURRENT_MANIFEST).get()


def _parse(document: str | None) -> dict[str, Any]:
    if document is None:
        raise ValueError("No manifest loaded")
    try:
        data = json.loads(document)
    except RecursionError as e:
        raise ValueError("Manifest nesting too deep") from e
    if not isinstance(data, dict):
        raise ValueError("Manifest root is not an object")
    return data


def initialize_source(
    source: str = PRIMARY,
    slot: ManifestSlot | None = None,
    timeout: float | None = None,
) -> bool:
    """Fetch a mirror's manifest and store it as the current document.

    Args:
        source: Mirror label (MOJANG or BMCLAPI)
        slot: Slot to fill (default: CURRENT_MANIFEST)
        timeout: Request timeout in seconds

    Returns:
        True if a non-empty document was stored; on failure the slot is untouched
    """
    url = mirror_url(source)
    try:
        body = http_get(url, timeout=timeout).decode("utf-8", errors="replace")
    except TransportError as e:
        logger.warning(f"Manifest fetch from {source} failed: {e}")
        return False

    if not body.strip():
        logger.warning(f"Manifest fetch from {source} returned an empty body")
        return False

    (slot or CURRENT_MANIFEST).set(body)
    logger.debug(f"Loaded manifest from {source} ({len(body)} bytes)")
    return True


def resolve_manifest(config: Config | None = None, slot: ManifestSlot | None = None) -> str | None:
    """Choose a mirror per config and load its manifest.

    A config source of "auto" runs select_source(); an explicit label is used
    as is.

    Returns:
        The mirror label used, or None if the manifest could not be fetched
    """
    if config is None:
        from .config import load_config
        config = load_config()

    timeout = config.preferences.timeout_seconds
    source = config.source
    if source == "auto":
        source = select_source(timeout=timeout)
        logger.info(f"Selected manifest mirror: {source}")

    if initialize_source(source, slot=slot, timeout=timeout):
        return source
    return None


def get_latest_version(
    kind: str,
    document: str | None = None,
    slot: ManifestSlot | None = None,
) -> str | None:
    """Get the id at latest.<kind>.

    Args:
        kind: VersionKind.RELEASE or VersionKind.SNAPSHOT
        document: Manifest JSON text (default: the slot's current document)
        slot: Slot to read when document is None (default: CURRENT_MANIFEST)

    Returns:
        Version id, or None if the document is missing or malformed

    Raises:
        ValueError: If kind is not release or snapshot
    """
    if kind not in VersionKind.LATEST:
        raise ValueError(f"Unsupported latest kind: {kind}. Must be 'release' or 'snapshot'")

    try:
        value = _parse(_resolve_document(document, slot))["latest"][kind]
    except (ValueError, KeyError, TypeError) as e:
        logger.debug(f"Latest {kind} unavailable: {e}")
        return None

    return value if isinstance(value, str) else None


def get_latest_release(document: str | None = None, slot: ManifestSlot | None = None) -> str | None:
    return get_latest_version(VersionKind.RELEASE, document, slot)


def get_latest_snapshot(document: str | None = None, slot: ManifestSlot | None = None) -> str | None:
    return get_latest_version(VersionKind.SNAPSHOT, document, slot)


def _included(kind: str, include_release: bool, include_snapshot: bool, include_legacy: bool) -> bool:
    if kind == VersionKind.RELEASE:
        return include_release
    if kind == VersionKind.SNAPSHOT:
        return include_snapshot
    if kind in VersionKind.LEGACY:
        return include_legacy
    return True


def get_version_list(
    document: str | None = None,
    include_release: bool = True,
    include_snapshot: bool = True,
    include_legacy: bool = True,
    slot: ManifestSlot | None = None,
) -> list[VersionEntry] | None:
    """List catalog rows, filtered by kind, in document order.

    include_legacy covers both old_beta and old_alpha. Rows of any other
    kind are always kept.

    Returns:
        Matching entries (possibly empty), or None if the document could not
        be parsed
    """
    try:
        rows = _parse(_resolve_document(document, slot))["versions"]
        if not isinstance(rows, list):
            return []
        entries = [VersionEntry.from_dict(row) for row in rows]
    except (ValueError, KeyError, TypeError) as e:
        logger.debug(f"Version list unavailable: {e}")
        return None

    return [
        entry for entry in entries
        if _included(entry.kind, include_release, include_snapshot, include_legacy)
    ]


def find_version(
    name: str,
    document: str | None = None,
    slot: ManifestSlot | None = None,
) -> VersionEntry | None:
    """Find the first catalog row with the given id."""
    entries = get_version_list(document, slot=slot)
    if not entries:
        return None
    for entry in entries:
        if entry.name == name:
            return entry
    return None
