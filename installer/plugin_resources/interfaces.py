"""Core interfaces for plugin-resources.

This module defines the abstract base class for fetchers.
"""

from abc import ABC, abstractmethod


class Fetcher(ABC):
    """Abstract base class for resource fetchers.

    A fetcher retrieves the raw bytes behind a URI. It does no caching of its
    own; the installer's download cache decides when it is called.
    """

    @abstractmethod
    async def get(self, uri: str) -> bytes:
        """Retrieve the content at a URI.

        Args:
            uri: The URI to fetch.

        Returns:
            Raw response body.
        """
        ...
