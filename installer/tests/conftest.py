"""Shared test fixtures for plugin-resources tests."""

from __future__ import annotations

from collections import Counter
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from plugin_resources.interfaces import Fetcher
from plugin_resources.models import Plugin, ResourceDeclaration

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

FAKE_CONTENT = b"Fake File"

S3_ACCESS_DENIED_BODY = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b"<Error><Code>AccessDenied</Code><Message>Access Denied</Message>"
    b"<RequestId>4442587FB7D0A2F9</RequestId>"
    b"<HostId>EXAMPLEhostid+0123456789abcdef=</HostId></Error>"
)


class CountingFetcher(Fetcher):
    """Fetcher stub that records how often each URI was requested."""

    def __init__(
        self,
        content: bytes = FAKE_CONTENT,
        responses: Mapping[str, bytes] | None = None,
    ) -> None:
        self.get_count: Counter[str] = Counter()
        self._content = content
        self._responses = dict(responses or {})

    async def get(self, uri: str) -> bytes:
        self.get_count[uri] += 1
        return self._responses.get(uri, self._content)


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """An existing, empty install root."""
    root = tmp_path / "install"
    root.mkdir()
    return root


@pytest.fixture
def output() -> StringIO:
    """Output sink for installer diagnostics."""
    return StringIO()


@pytest.fixture
def fetcher() -> CountingFetcher:
    return CountingFetcher()


@pytest.fixture
def core_plugin() -> Plugin:
    """Plugin "Core" with one resource and an explicit filename."""
    return Plugin(
        name="Core",
        resources=[
            ResourceDeclaration(
                source_uri="http://www.google.com/index.html",
                filename="google.html",
            ),
        ],
    )


@pytest.fixture
def prefixed_plugin() -> Plugin:
    """Plugin whose resource installs under an explicit prefix."""
    return Plugin(
        name="Asset Host",
        resources=[
            ResourceDeclaration(
                source_uri="http://assets.example.com/pages/google.html",
                prefix="with-prefix",
            ),
        ],
    )


@pytest.fixture
def multiple_installs_plugin() -> Plugin:
    """Plugin with two resources sharing one prefix."""
    return Plugin(
        name="Multiple Installs",
        resources=[
            ResourceDeclaration(
                source_uri="http://www.google.ca/index.html",
                filename="google-ca.html",
                prefix="multiple-installs",
            ),
            ResourceDeclaration(
                source_uri="http://www.google.co.uk/index.html",
                filename="google-uk.html",
                prefix="multiple-installs",
            ),
        ],
    )


@pytest.fixture
def implied_filenames_plugin() -> Plugin:
    """Plugin whose resources take their filenames from the URI."""
    return Plugin(
        name="Implied Filenames",
        resources=[
            ResourceDeclaration(
                source_uri="http://example.com/files/foo", prefix="implied-filenames"
            ),
            ResourceDeclaration(
                source_uri="http://example.com/files/bar", prefix="implied-filenames"
            ),
            ResourceDeclaration(
                source_uri="http://example.com/other/baz", prefix="implied-filenames"
            ),
        ],
    )


@pytest.fixture
def s3_denied_plugin() -> Plugin:
    """Plugin "Core" whose second resource is served as an access-denied page."""
    return Plugin(
        name="Core",
        resources=[
            ResourceDeclaration(
                source_uri="http://www.google.com/index.html",
                filename="google.html",
            ),
            ResourceDeclaration(
                source_uri="https://bucket.s3.amazonaws.com/bad_file.html",
            ),
        ],
    )


@pytest.fixture
def fetcher_factory() -> type[CountingFetcher]:
    """The CountingFetcher class, for tests that need custom responses."""
    return CountingFetcher


@pytest.fixture
def s3_denied_body() -> bytes:
    return S3_ACCESS_DENIED_BODY
