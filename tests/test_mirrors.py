"""
Tests for mirror selection (launcher_core/mirrors.py).
"""

from unittest.mock import patch

import pytest

from launcher_core.mirrors import (
    BMCLAPI,
    MIRROR_URLS,
    MOJANG,
    PRIMARY,
    SECONDARY,
    mirror_url,
    probe_latency,
    select_source,
)
from launcher_core.transport import TransportError


MOJANG_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
BMCLAPI_URL = "https://bmclapi2.bangbang93.com/mc/game/version_manifest_v2.json"


def latencies(mojang, bmclapi):
    """Build a probe_latency side effect keyed by URL."""
    table = {MOJANG_URL: mojang, BMCLAPI_URL: bmclapi}

    def probe(url, timeout=None):
        value = table[url]
        if isinstance(value, Exception):
            raise value
        return value

    return probe


class TestMirrorUrls:
    """Tests for mirror labels and URLs."""

    def test_primary_is_mojang(self):
        """Test label roles."""
        assert PRIMARY == MOJANG == "MoJang"
        assert SECONDARY == BMCLAPI == "BMCLAPI"

    def test_mirror_url(self):
        """Test URL per label."""
        assert mirror_url(MOJANG) == MOJANG_URL
        assert mirror_url(BMCLAPI) == BMCLAPI_URL
        assert MIRROR_URLS[MOJANG] == MOJANG_URL

    def test_unknown_label_maps_to_primary(self):
        """Test any other label resolves to the primary URL."""
        assert mirror_url("mirror.example") == MOJANG_URL
        assert mirror_url("") == MOJANG_URL


class TestProbeLatency:
    """Tests for a single probe."""

    def test_returns_elapsed_seconds(self):
        """Test elapsed time measured around the request."""
        with patch("launcher_core.mirrors.http_get", return_value=b"{}") as mock_get, \
             patch("launcher_core.mirrors.time.perf_counter", side_effect=[10.0, 10.25]):
            assert probe_latency(MOJANG_URL, timeout=2) == pytest.approx(0.25)
        mock_get.assert_called_once_with(MOJANG_URL, timeout=2)

    def test_propagates_transport_error(self):
        """Test failures surface to the selector."""
        with patch("launcher_core.mirrors.http_get", side_effect=TransportError("down")):
            with pytest.raises(TransportError):
                probe_latency(MOJANG_URL)


class TestSelectSource:
    """Tests for the two-way latency race."""

    def test_secondary_wins_when_strictly_faster(self):
        """Test the faster secondary is chosen."""
        with patch("launcher_core.mirrors.probe_latency", side_effect=latencies(0.30, 0.10)):
            assert select_source() == BMCLAPI

    def test_primary_wins_when_faster(self):
        """Test the faster primary is chosen."""
        with patch("launcher_core.mirrors.probe_latency", side_effect=latencies(0.05, 0.40)):
            assert select_source() == MOJANG

    def test_tie_goes_to_primary(self):
        """Test exact ties resolve to the primary."""
        with patch("launcher_core.mirrors.probe_latency", side_effect=latencies(0.2, 0.2)):
            assert select_source() == MOJANG

    def test_primary_failure_returns_primary_without_second_probe(self):
        """Test the first failure ends selection immediately."""
        with patch("launcher_core.mirrors.probe_latency",
                   side_effect=latencies(TransportError("timeout"), 0.01)) as mock_probe:
            assert select_source() == MOJANG
        assert mock_probe.call_count == 1

    def test_secondary_failure_returns_primary(self):
        """Test a failing secondary never wins even if the primary was slow."""
        with patch("launcher_core.mirrors.probe_latency",
                   side_effect=latencies(5.0, TransportError("HTTP 503"))):
            assert select_source() == MOJANG

    def test_probes_run_in_order(self):
        """Test primary is probed before secondary, each with the timeout."""
        with patch("launcher_core.mirrors.probe_latency", side_effect=latencies(0.1, 0.2)) as mock_probe:
            select_source(timeout=4)
        assert [c.args[0] for c in mock_probe.call_args_list] == [MOJANG_URL, BMCLAPI_URL]
        assert all(c.kwargs["timeout"] == 4 for c in mock_probe.call_args_list)

    def test_http_failures_never_raise(self):
        """Test end to end through http_get: errors degrade to primary."""
        with patch("launcher_core.mirrors.http_get", side_effect=TransportError("offline")):
            assert select_source() == MOJANG
