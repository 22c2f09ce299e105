"""Configuration management for plugin-resources.

The configuration file declares the installer settings and the plugin set to
install::

    installer:
      log_level: info
      fetch_timeout_seconds: 300
    plugins:
      - name: Core
        resources:
          - source_uri: http://www.google.com/index.html
            filename: google.html

Its location is ``$PLUGIN_RESOURCES_CONFIG`` when set, otherwise
``config.yaml`` in the XDG configuration directory.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog
import yaml

from .models import InstallerConfig, Plugin

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "PLUGIN_RESOURCES_CONFIG"
CONFIG_SECTIONS = frozenset({"installer", "plugins"})


def get_default_config_path() -> Path:
    """Locate the configuration file. Nothing is created on disk."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return base / "plugin-resources" / "config.yaml"


def read_config_file(path: Path) -> dict[str, Any]:
    """Read and shape-check a configuration file.

    Args:
        path: Configuration file. A missing or empty file reads as ``{}``.

    Returns:
        The top-level mapping.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping, or a section has the wrong shape.
    """
    if not path.exists():
        logger.info("using_default_config", path=str(path))
        return {}

    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    unknown = sorted(set(data) - CONFIG_SECTIONS)
    if unknown:
        logger.warning("unknown_config_sections", path=str(path), sections=unknown)

    if not isinstance(data.get("installer") or {}, dict):
        raise ValueError(f"{path}: 'installer' must be a mapping")
    if not isinstance(data.get("plugins") or [], list):
        raise ValueError(f"{path}: 'plugins' must be a list")

    return data


class ConfigManager:
    """Loads installer settings and the declared plugin set from one file.

    The file is read once per manager.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        Uses default path if not provided.
        """
        self.config_path = config_path or get_default_config_path()
        self._data: dict[str, Any] | None = None

    def _read(self) -> dict[str, Any]:
        if self._data is None:
            self._data = read_config_file(self.config_path)
        return self._data

    def load(self) -> InstallerConfig:
        """Load installer settings.

        Returns:
            InstallerConfig with loaded values, or defaults if the file doesn't exist.
        """
        return InstallerConfig(**(self._read().get("installer") or {}))

    def load_plugins(self) -> list[Plugin]:
        """Load the declared plugins, in file order.

        Raises:
            ValueError: If two plugins share a name.
            pydantic.ValidationError: If a plugin entry is malformed.
        """
        plugins = [Plugin(**entry) for entry in self._read().get("plugins") or []]

        seen: set[str] = set()
        for plugin in plugins:
            if plugin.name in seen:
                raise ValueError(f"Duplicate plugin name in {self.config_path}: {plugin.name}")
            seen.add(plugin.name)

        logger.debug("plugins_loaded", path=str(self.config_path), count=len(plugins))
        return plugins
