"""HTTP fetcher backed by aiohttp."""

from __future__ import annotations

import aiohttp
import structlog

from .errors import FetchError
from .interfaces import Fetcher
from .models import InstallerConfig

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 300.0
DEFAULT_USER_AGENT = "plugin-resources/1.0"


class HttpFetcher(Fetcher):
    """Fetch resources over HTTP(S).

    The response body is returned whatever the status code. Storage services
    answer unauthorized requests with an error document, and that document has
    to reach the bad-payload check instead of being turned into an exception
    here. Network-level failures are raised as FetchError; nothing is retried.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout_seconds: Total timeout for a single request.
            user_agent: User-Agent header value.
        """
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent

    @classmethod
    def from_config(cls, config: InstallerConfig) -> HttpFetcher:
        """Create a fetcher from installer configuration."""
        return cls(
            timeout_seconds=config.fetch_timeout_seconds,
            user_agent=config.user_agent,
        )

    async def get(self, uri: str) -> bytes:
        """Retrieve the body at a URI.

        Args:
            uri: HTTP or HTTPS URI.

        Returns:
            The response body.

        Raises:
            FetchError: On connection errors or timeouts.
        """
        timeout = aiohttp.ClientTimeout(total=self._timeout_seconds)
        headers = {"User-Agent": self._user_agent}

        try:
            async with (
                aiohttp.ClientSession(timeout=timeout) as session,
                session.get(uri, headers=headers) as response,
            ):
                body = await response.read()
                if response.status >= 400:
                    logger.warning(
                        "fetch_http_error",
                        uri=uri,
                        status=response.status,
                        reason=response.reason,
                    )
                else:
                    logger.debug("fetch_completed", uri=uri, size_bytes=len(body))
                return body

        except aiohttp.ClientError as e:
            raise FetchError(f"Network error fetching {uri}: {e}", uri) from e

        except TimeoutError:
            raise FetchError(f"Timed out fetching {uri}", uri) from None
