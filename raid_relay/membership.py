"""Guild membership lookup with a time-to-live cache.

The member list comes from the Wynncraft guild API, which groups members by
rank. The cache keeps one flattened set of member UUIDs and refreshes it when
it is older than the TTL. A failed refresh keeps the old set and timestamp, so
the next lookup retries, and raises so the caller can reject the request.
"""

import asyncio
import time
from typing import Any, Callable, Protocol
from urllib.parse import quote

import httpx

from raid_relay.errors import DirectoryError
from raid_relay.logger import logger


class GroupDirectory(Protocol):
    async def fetch_group_members(self, group: str) -> dict[str, Any]:
        ...


class MembershipDirectory:
    def __init__(self, client: httpx.AsyncClient, base_url: str, timeout: float = 15):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def fetch_group_members(self, group: str) -> dict[str, Any]:
        url = f"{self._base_url}/{quote(group, safe='')}"
        try:
            resp = await self._client.get(
                url, params={"identifier": "uuid"}, timeout=self._timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DirectoryError(f"Failed to fetch members of guild '{group}': {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("members"), dict):
            raise DirectoryError(f"Guild '{group}' response has no members object")
        return data


def flatten_members(data: dict[str, Any]) -> frozenset[str]:
    """Collect member ids from every rank, skipping the leading "total" entry."""
    ranks = list(data["members"].values())[1:]
    return frozenset(
        member for rank in ranks if isinstance(rank, dict) for member in rank
    )


class MembershipCache:
    def __init__(
        self,
        directory: GroupDirectory,
        group: str,
        ttl: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._directory = directory
        self._group = group
        self._ttl = ttl
        self._clock = clock
        self._members: frozenset[str] = frozenset()
        self._last_refresh: float | None = None
        self._lock = asyncio.Lock()

    @property
    def is_stale(self) -> bool:
        if self._last_refresh is None:
            return True
        return self._clock() - self._last_refresh > self._ttl

    @property
    def last_refresh(self) -> float | None:
        return self._last_refresh

    @property
    def size(self) -> int:
        return len(self._members)

    async def refresh(self) -> None:
        data = await self._directory.fetch_group_members(self._group)
        members = flatten_members(data)
        self._members = members
        self._last_refresh = self._clock()
        logger.info(f"[membership] Loaded {len(members)} members of guild '{self._group}'")

    async def is_member(self, identifier: str) -> bool:
        """Check membership, refreshing first if the cache is stale.

        Raises DirectoryError if a needed refresh fails.
        """
        async with self._lock:
            if self.is_stale:
                await self.refresh()
            return identifier in self._members
