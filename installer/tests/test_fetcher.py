"""Tests for the aiohttp-based HttpFetcher.

Requests go to an in-process aiohttp test server, so no external network
access is needed.
"""

from __future__ import annotations

import asyncio

import pytest
from aiohttp import test_utils, web

from plugin_resources.errors import FetchError
from plugin_resources.fetcher import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT, HttpFetcher
from plugin_resources.models import InstallerConfig


def _make_app(s3_denied_body: bytes) -> tuple[web.Application, list[str]]:
    seen_agents: list[str] = []

    async def ok(request: web.Request) -> web.Response:
        seen_agents.append(request.headers.get("User-Agent", ""))
        return web.Response(body=b"<html>hello</html>", content_type="text/html")

    async def denied(request: web.Request) -> web.Response:  # noqa: ARG001
        return web.Response(status=403, body=s3_denied_body, content_type="application/xml")

    async def slow(request: web.Request) -> web.Response:  # noqa: ARG001
        await asyncio.sleep(2)
        return web.Response(body=b"late")

    app = web.Application()
    app.router.add_get("/index.html", ok)
    app.router.add_get("/denied.html", denied)
    app.router.add_get("/slow", slow)
    return app, seen_agents


class TestHttpFetcherInit:
    """Tests for HttpFetcher construction."""

    def test_defaults(self) -> None:
        fetcher = HttpFetcher()

        assert fetcher._timeout_seconds == DEFAULT_TIMEOUT_SECONDS
        assert fetcher._user_agent == DEFAULT_USER_AGENT

    def test_from_config(self) -> None:
        config = InstallerConfig(fetch_timeout_seconds=30, user_agent="custom/2.0")

        fetcher = HttpFetcher.from_config(config)

        assert fetcher._timeout_seconds == 30
        assert fetcher._user_agent == "custom/2.0"


class TestHttpFetcherGet:
    """Tests for HttpFetcher.get() against a local server."""

    @pytest.mark.asyncio
    async def test_returns_body(self, s3_denied_body) -> None:
        app, seen_agents = _make_app(s3_denied_body)
        async with test_utils.TestServer(app) as server:
            fetcher = HttpFetcher(user_agent="plugin-resources-test")

            body = await fetcher.get(str(server.make_url("/index.html")))

        assert body == b"<html>hello</html>"
        assert seen_agents == ["plugin-resources-test"]

    @pytest.mark.asyncio
    async def test_error_status_body_returned(self, s3_denied_body) -> None:
        """Error documents are handed back so the installer can inspect them."""
        async with test_utils.TestServer(_make_app(s3_denied_body)[0]) as server:
            body = await HttpFetcher().get(str(server.make_url("/denied.html")))

        assert body == s3_denied_body

    @pytest.mark.asyncio
    async def test_timeout_raises_fetch_error(self, s3_denied_body) -> None:
        async with test_utils.TestServer(_make_app(s3_denied_body)[0]) as server:
            uri = str(server.make_url("/slow"))

            with pytest.raises(FetchError) as exc_info:
                await HttpFetcher(timeout_seconds=0.2).get(uri)

        assert exc_info.value.uri == uri

    @pytest.mark.asyncio
    async def test_connection_error_raises_fetch_error(self) -> None:
        # Port 9 (discard) on localhost is not expected to accept connections.
        uri = "http://127.0.0.1:9/nothing"

        with pytest.raises(FetchError) as exc_info:
            await HttpFetcher(timeout_seconds=5).get(uri)

        assert exc_info.value.uri == uri
        assert exc_info.value.__cause__ is not None
