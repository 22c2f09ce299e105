"""In-memory download cache.

Guarantees at most one fetcher call per distinct URI for the lifetime of the
cache. Keys are the literal URI strings as declared; two spellings of the same
location are two entries. Nothing is persisted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .interfaces import Fetcher

logger = structlog.get_logger(__name__)


class DownloadCache:
    """Memoizes fetcher results by URI.

    Not safe for concurrent use: two overlapping fetch_once calls for the same
    URI would both reach the fetcher. The installer awaits fetches one at a
    time.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        """Initialize an empty cache.

        Args:
            fetcher: Fetcher used on cache misses.
        """
        self._fetcher = fetcher
        self._entries: dict[str, bytes] = {}
        self._fetch_count = 0

    @property
    def fetch_count(self) -> int:
        """Total number of fetcher calls made through this cache."""
        return self._fetch_count

    def __contains__(self, uri: object) -> bool:
        return uri in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def fetch_once(self, uri: str) -> bytes:
        """Return the bytes for a URI, fetching only on the first request.

        Args:
            uri: Source URI.

        Returns:
            The fetched bytes.
        """
        cached = self._entries.get(uri)
        if cached is not None:
            logger.debug("cache_hit", uri=uri)
            return cached

        self._fetch_count += 1
        data = await self._fetcher.get(uri)
        self._entries[uri] = data
        logger.debug("resource_fetched", uri=uri, size_bytes=len(data))
        return data
