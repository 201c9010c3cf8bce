"""Prober - performs a single HTTP GET against a monitor URL and classifies it."""
import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx

from ..models import STATUS_DEGRADED, STATUS_HEALTHY, STATUS_UNHEALTHY

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass
class ProbeResult:
    """Result of probing one URL."""
    status: str  # HEALTHY, DEGRADED, UNHEALTHY
    response_code: int = 0  # 0 = no response obtained
    response_time_ms: int = 0
    details: Optional[str] = None


def classify_status(code: int) -> str:
    """Derive monitor status from an HTTP status code.

    2xx/3xx = HEALTHY, 4xx = DEGRADED, everything else (including 0 for
    "no response") = UNHEALTHY.
    """
    if 200 <= code < 400:
        return STATUS_HEALTHY
    if 400 <= code < 500:
        return STATUS_DEGRADED
    return STATUS_UNHEALTHY


class Prober:
    """Issues one GET per call with a fixed client timeout and no retries."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    async def _get(self, url: str) -> Tuple[int, float]:
        """Send the GET and return (status code, seconds until headers)."""
        async with self._client() as client:
            start = time.monotonic()
            async with client.stream("GET", url) as response:
                return response.status_code, time.monotonic() - start

    async def probe(self, url: str) -> ProbeResult:
        """GET ``url`` and classify the response.

        ``timeout`` caps the whole exchange, redirects included, not just
        each connect or read. Latency covers sending the request up to
        receiving the response headers; the body is not read. Transport
        failures are logged and reported as UNHEALTHY with code 0 and
        latency 0.
        """
        try:
            code, elapsed = await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Probe of {url} timed out after {self.timeout}s")
            return ProbeResult(status=STATUS_UNHEALTHY, details="Request timeout")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # ValueError covers hosts that fail IDNA encoding
            logger.warning(f"Probe of {url} failed: {e.__class__.__name__}: {e}")
            return ProbeResult(status=STATUS_UNHEALTHY, details=str(e) or e.__class__.__name__)

        # Round up so a completed response never reports 0 ms
        latency_ms = max(1, math.ceil(elapsed * 1000))
        status = classify_status(code)
        logger.debug(f"Probe of {url}: HTTP {code} in {latency_ms}ms -> {status}")
        return ProbeResult(
            status=status,
            response_code=code,
            response_time_ms=latency_ms,
            details=None if status == STATUS_HEALTHY else f"HTTP {code}",
        )
