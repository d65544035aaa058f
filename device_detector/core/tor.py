"""
Tor exit-node reputation cache.

Holds the set of known Tor exit IPv4 addresses, fetched from the Tor
Project's exit-address listing and refreshed once it is older than the TTL.

Failure policy: a failed fetch never reaches the caller. The previous set
(empty before the first success) keeps being served and the next attempt is
deferred by ``retry_after`` seconds, so Tor detection degrades to "no match"
instead of failing the request.
"""

import asyncio
import re
import time
from typing import Awaitable, Callable

import httpx
import structlog

from device_detector.config import Settings

logger = structlog.get_logger()

CACHE_KEY = "device_detector_tor_exit_nodes"

EXIT_ADDRESS_RE = re.compile(r"ExitAddress\s+([0-9.]+)")

Fetcher = Callable[[str, float], Awaitable[str]]


def parse_exit_addresses(body: str) -> frozenset[str]:
    """Extract every IPv4 address that follows an ``ExitAddress`` token."""
    return frozenset(EXIT_ADDRESS_RE.findall(body or ""))


async def fetch_exit_list(url: str, timeout: float) -> str:
    """GET the exit-address listing. Raises httpx.HTTPError on any failure."""
    async with httpx.AsyncClient() as client:
        resp = await client.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.text


class TorExitNodeCache:
    """Process-wide exit-node set with TTL and coalesced refresh.

    The set is replaced by a single reference assignment, so readers always
    see either the old or the new complete set. Concurrent callers that find
    the set expired queue on one lock; only the first one fetches.
    """

    def __init__(
        self,
        url: str,
        ttl: int = 3600,
        timeout: float = 10.0,
        enabled: bool = True,
        fetch: Fetcher | None = None,
        clock: Callable[[], float] = time.monotonic,
        retry_after: int = 60,
    ):
        self.url = url
        self.ttl = ttl
        self.timeout = timeout
        self.enabled = enabled
        self.retry_after = min(retry_after, ttl)
        self._fetch = fetch or fetch_exit_list
        self._clock = clock
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

        self._nodes: frozenset[str] = frozenset()
        self._fetched_at: float | None = None
        self._expires_at: float | None = None
        self.fetch_count = 0

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "TorExitNodeCache":
        kwargs = dict(
            url=settings.tor_exit_node_url,
            ttl=settings.tor_cache_duration,
            timeout=settings.tor_fetch_timeout,
            enabled=settings.enable_tor_detection,
            retry_after=settings.tor_retry_after,
        )
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def fetched_at(self) -> float | None:
        return self._fetched_at

    def _is_fresh(self) -> bool:
        return self._expires_at is not None and self._clock() < self._expires_at

    def _refresh_lock(self) -> asyncio.Lock:
        # asyncio.Lock binds to one loop; a process-wide cache may outlive it.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def invalidate(self) -> None:
        """Drop the cached set; the next query refetches."""
        self._nodes = frozenset()
        self._fetched_at = None
        self._expires_at = None

    async def get_exit_nodes(self) -> frozenset[str]:
        if self._is_fresh():
            return self._nodes

        async with self._refresh_lock():
            # Another waiter may have refreshed while we queued.
            if not self._is_fresh():
                await self._refresh()
        return self._nodes

    async def _refresh(self) -> None:
        self.fetch_count += 1
        try:
            body = await self._fetch(self.url, self.timeout)
        except httpx.HTTPError as e:
            self._expires_at = self._clock() + self.retry_after
            logger.warning(
                "tor_exit_nodes_fetch_failed",
                cache_key=CACHE_KEY,
                url=self.url,
                error=str(e) or type(e).__name__,
                retained=len(self._nodes),
            )
            return

        now = self._clock()
        self._nodes = parse_exit_addresses(body)
        self._fetched_at = now
        self._expires_at = now + self.ttl
        logger.info("tor_exit_nodes_refreshed", cache_key=CACHE_KEY, url=self.url, count=len(self._nodes))

    async def is_tor_exit(self, ip: str) -> bool:
        if not self.enabled or not ip:
            return False
        nodes = await self.get_exit_nodes()
        return ip in nodes
