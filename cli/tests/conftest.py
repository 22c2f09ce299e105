"""Shared test fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_config_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Isolate tests from the real user configuration directory.

    Sets XDG_CONFIG_HOME to a temporary directory and clears
    PLUGIN_RESOURCES_CONFIG so that tests never read the user's file.
    """
    config_home = tmp_path / "xdg_config"
    config_home.mkdir(parents=True, exist_ok=True)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("PLUGIN_RESOURCES_CONFIG", raising=False)

    yield config_home


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo the logging configuration applied by the install command.

    The command binds structlog to the runner's captured stderr, which is
    closed once the invocation returns.
    """
    yield
    structlog.reset_defaults()
