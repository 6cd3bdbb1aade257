"""
Plain HTTP GET used by the mirror selector and manifest acquisition.

No retries, no caching, no custom headers.
"""

import os
import urllib.request

DEFAULT_TIMEOUT = float(os.environ.get("LAUNCHER_CORE_HTTP_TIMEOUT", "5"))


class TransportError(Exception):
    """Raised when an HTTP request fails or returns a non-success status."""
    pass


def http_get(url: str, timeout: float | None = None) -> bytes:
    """Perform HTTP GET request.

    Args:
        url: URL to fetch
        timeout: Timeout in seconds (default: DEFAULT_TIMEOUT)

    Returns:
        Response body as bytes

    Raises:
        TransportError: If the request fails, times out or the status is not 2xx
    """
    try:
        with urllib.request.urlopen(url, timeout=timeout or DEFAULT_TIMEOUT) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise TransportError(f"Failed to fetch {url}: HTTP {status}")
            return response.read()
    except TransportError:
        raise
    except Exception as e:
        raise TransportError(f"Failed to fetch {url}: {e}") from e
