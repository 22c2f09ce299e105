"""Resource installer.

This module provides the installer that walks loaded plugins, fetches each
declared resource through the download cache and writes it under an install
root, stopping the whole run when a fetched payload is a known error document.
"""

from __future__ import annotations

import sys
import tempfile
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

from .cache import DownloadCache
from .errors import BadPayloadDetected, ResourceInstallError
from .fetcher import HttpFetcher
from .models import InstalledResource, InstallResult, InstallStatus
from .namespace import default_namespace
from .payload import match_bad_payload
from .resolver import resolve

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .interfaces import Fetcher
    from .models import InstallerConfig, Plugin, ResolvedResource

logger = structlog.get_logger(__name__)


class ResourceInstaller:
    """Installs the resources declared by a set of plugins.

    The installer is responsible for:
    - Resolving each plugin's declarations to output paths
    - Fetching every distinct URI once per installer lifetime
    - Writing resources under the install root
    - Aborting the run on a bad payload
    """

    def __init__(
        self,
        plugins: Sequence[Plugin],
        fetcher: Fetcher | None = None,
        output: TextIO | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            plugins: Loaded plugins, in load order.
            fetcher: Fetcher for remote resources. Defaults to HttpFetcher.
            output: Text sink for the bad-payload diagnostic. Defaults to stderr.
        """
        self._plugins = tuple(plugins)
        self._cache = DownloadCache(fetcher if fetcher is not None else HttpFetcher())
        self._output = output
        self._last_root: Path | None = None
        self._log = logger.bind(component="resource_installer")

    @classmethod
    def from_config(
        cls,
        config: InstallerConfig,
        plugins: Sequence[Plugin],
        output: TextIO | None = None,
    ) -> ResourceInstaller:
        """Create an installer with an HttpFetcher built from configuration."""
        return cls(plugins, fetcher=HttpFetcher.from_config(config), output=output)

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        """Loaded plugins, in load order."""
        return self._plugins

    @property
    def cache(self) -> DownloadCache:
        """The download cache owned by this installer."""
        return self._cache

    def resource_dir(self, plugin: Plugin, root_directory: Path | str | None = None) -> Path:
        """Return the conventional directory for a plugin's resources.

        Args:
            plugin: The plugin.
            root_directory: Install root. Defaults to the root of the last
                install_to call.

        Returns:
            ``root / namespace``, whether or not any resource used a custom prefix.

        Raises:
            ResourceInstallError: If no root is given and nothing was installed yet.
        """
        if root_directory is not None:
            root = Path(root_directory)
        elif self._last_root is not None:
            root = self._last_root
        else:
            raise ResourceInstallError("No install root given and install_to has not been called")
        return root / default_namespace(plugin.name)

    async def install_to(self, root_directory: Path | str) -> InstallResult:
        """Install every declared resource under a root directory.

        Args:
            root_directory: Existing, writable directory.

        Returns:
            InstallResult. Its status is ABORTED if a bad payload was found;
            resources installed before that point stay on disk.

        Raises:
            FileNotFoundError: If the root does not exist.
            NotADirectoryError: If the root is not a directory.
            AmbiguousFilenameError: If a declaration's filename cannot be derived.
        """
        root = Path(root_directory)
        if not root.exists():
            raise FileNotFoundError(f"Install root not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Install root is not a directory: {root}")

        self._last_root = root

        run_id = str(uuid.uuid4())[:8]
        start_time = datetime.now(tz=UTC)
        fetches_before = self._cache.fetch_count
        installed: list[InstalledResource] = []
        log = self._log.bind(run_id=run_id)

        log.info("install_started", root=str(root), plugin_count=len(self._plugins))

        try:
            for plugin in self._plugins:
                for resource in resolve(plugin):
                    installed.append(await self._install_resource(root, resource))
        except BadPayloadDetected as e:
            self._report_bad_payload(e)
            log.error(
                "install_aborted",
                plugin=e.plugin_name,
                uri=e.uri,
                signature=e.signature.name,
                installed=len(installed),
            )
            return InstallResult(
                run_id=run_id,
                root=root,
                status=InstallStatus.ABORTED,
                start_time=start_time,
                end_time=datetime.now(tz=UTC),
                installed=installed,
                fetched=self._cache.fetch_count - fetches_before,
                reason=e.signature.message,
                failed_uri=e.uri,
                failed_plugin=e.plugin_name,
            )

        result = InstallResult(
            run_id=run_id,
            root=root,
            status=InstallStatus.COMPLETED,
            start_time=start_time,
            end_time=datetime.now(tz=UTC),
            installed=installed,
            fetched=self._cache.fetch_count - fetches_before,
        )
        log.info(
            "install_completed",
            installed=len(result.installed),
            fetched=result.fetched,
        )
        return result

    async def _install_resource(self, root: Path, resource: ResolvedResource) -> InstalledResource:
        """Fetch, check and write a single resource.

        Raises:
            BadPayloadDetected: If the bytes match a known error document.
        """
        from_cache = resource.uri in self._cache
        data = await self._cache.fetch_once(resource.uri)

        signature = match_bad_payload(data)
        if signature is not None:
            raise BadPayloadDetected(resource.uri, resource.plugin_name, signature)

        destination = root / resource.relative_path
        destination.parent.mkdir(parents=True, exist_ok=True)

        # Created with O_EXCL under a random name; never an existing file.
        temp_file = tempfile.NamedTemporaryFile(  # noqa: SIM115
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".download",
            delete=False,
        )
        temp_path = Path(temp_file.name)
        try:
            with temp_file:
                temp_file.write(data)
            temp_path.replace(destination)
        finally:
            temp_path.unlink(missing_ok=True)

        self._log.debug(
            "resource_installed",
            plugin=resource.plugin_name,
            uri=resource.uri,
            path=str(destination),
            from_cache=from_cache,
        )
        return InstalledResource(
            plugin_name=resource.plugin_name,
            uri=resource.uri,
            path=destination,
            size_bytes=len(data),
            from_cache=from_cache,
        )

    def _report_bad_payload(self, error: BadPayloadDetected) -> None:
        output = self._output if self._output is not None else sys.stderr
        output.write(f"{error.signature.message} (plugin {error.plugin_name}: {error.uri})\n")
        output.flush()
