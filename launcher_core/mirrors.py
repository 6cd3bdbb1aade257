"""
Version manifest mirrors and latency-based selection.

Two mirrors serve the same catalog: Mojang's own endpoint (primary) and the
BMCLAPI mirror (secondary). select_source() times one request to each and
picks the faster; any failure settles on the primary.
"""

from __future__ import annotations

import logging
import time

from .transport import TransportError, http_get

logger = logging.getLogger(__name__)

MOJANG = "MoJang"
BMCLAPI = "BMCLAPI"

PRIMARY = MOJANG
SECONDARY = BMCLAPI

MIRROR_URLS = {
    MOJANG: "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json",
    BMCLAPI: "https://bmclapi2.bangbang93.com/mc/game/version_manifest_v2.json",
}

# Probe order matters: a failure on either probe resolves to PRIMARY.
PROBE_ORDER = (PRIMARY, SECONDARY)


def mirror_url(label: str) -> str:
    """Catalog URL for a mirror label; anything but BMCLAPI maps to the primary."""
    if label == SECONDARY:
        return MIRROR_URLS[SECONDARY]
    return MIRROR_URLS[PRIMARY]


def probe_latency(url: str, timeout: float | None = None) -> float:
    """Fetch url once and return the elapsed wall-clock time in seconds.

    Raises:
        TransportError: If the request fails or the status is not 2xx
    """
    start = time.perf_counter()
    http_get(url, timeout=timeout)
    return time.perf_counter() - start


def select_source(timeout: float | None = None) -> str:
    """Pick the mirror with the lower round-trip latency.

    Probes run one after another, so selection takes the sum of both probe
    times. The first failed probe ends selection with PRIMARY; the remaining
    probe is not attempted. On a tie PRIMARY wins.

    Args:
        timeout: Per-probe timeout in seconds; a timed-out probe is a failure

    Returns:
        MOJANG or BMCLAPI
    """
    latencies: dict[str, float] = {}
    for label in PROBE_ORDER:
        try:
            latencies[label] = probe_latency(mirror_url(label), timeout=timeout)
        except TransportError as e:
            logger.debug(f"Mirror probe failed for {label}, using {PRIMARY}: {e}")
            return PRIMARY
        logger.debug(f"Mirror {label}: {latencies[label] * 1000:.0f} ms")

    if latencies[SECONDARY] < latencies[PRIMARY]:
        return SECONDARY
    return PRIMARY
