"""Core data models for plugin-resources.

This module defines Pydantic models for resource declarations, loaded plugins,
installation results and installer configuration.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - needed at runtime by Pydantic
from enum import Enum
from pathlib import Path, PurePosixPath  # noqa: TC003 - needed at runtime by Pydantic

from pydantic import BaseModel, ConfigDict, Field

from .namespace import default_namespace


class LogLevel(str, Enum):
    """Log level for installer output."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class InstallStatus(str, Enum):
    """Outcome of an installation run."""

    COMPLETED = "completed"
    ABORTED = "aborted"


class ResourceDeclaration(BaseModel):
    """A plugin's request that a remote file be installed locally."""

    model_config = ConfigDict(frozen=True)

    source_uri: str = Field(..., min_length=1, description="URI the resource is fetched from")
    filename: str | None = Field(
        default=None,
        min_length=1,
        description="Output filename. Derived from the URI when omitted.",
    )
    prefix: str | None = Field(
        default=None,
        min_length=1,
        description="Directory under the install root. Defaults to the plugin namespace.",
    )


class Plugin(BaseModel):
    """A loaded plugin and the resources it declares."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique plugin name")
    resources: list[ResourceDeclaration] = Field(
        default_factory=list, description="Resource declarations in declaration order"
    )

    @property
    def namespace(self) -> str:
        """Default directory name for this plugin's resources."""
        return default_namespace(self.name)


class ResolvedResource(BaseModel):
    """A declaration resolved to a concrete URI and output location."""

    model_config = ConfigDict(frozen=True)

    plugin_name: str
    uri: str
    relative_path: PurePosixPath


class InstalledResource(BaseModel):
    """A resource that was written to disk."""

    plugin_name: str = Field(..., description="Plugin that declared the resource")
    uri: str = Field(..., description="Source URI")
    path: Path = Field(..., description="Install root joined with the resolved path")
    size_bytes: int = Field(default=0, description="Number of bytes written")
    from_cache: bool = Field(
        default=False, description="True if the bytes were already fetched earlier"
    )


class InstallResult(BaseModel):
    """Outcome of a single install_to call.

    A bad payload does not raise out of the installer; it produces a result
    with ``status == InstallStatus.ABORTED`` and the caller decides how to
    stop the process.
    """

    run_id: str = Field(..., description="Short identifier for this run")
    root: Path = Field(..., description="Install root directory")
    status: InstallStatus = Field(..., description="Run outcome")
    start_time: datetime = Field(..., description="Run start time")
    end_time: datetime | None = Field(default=None, description="Run end time")
    installed: list[InstalledResource] = Field(default_factory=list)
    fetched: int = Field(default=0, description="Fetcher calls made during this run")
    reason: str | None = Field(default=None, description="Diagnostic for aborted runs")
    failed_uri: str | None = Field(default=None, description="URI that caused the abort")
    failed_plugin: str | None = Field(default=None, description="Plugin that caused the abort")

    @property
    def aborted(self) -> bool:
        """Check whether the run was stopped by a bad payload."""
        return self.status == InstallStatus.ABORTED

    @property
    def exit_code(self) -> int:
        """Process exit code a top-level caller should use."""
        return 1 if self.aborted else 0


class InstallerConfig(BaseModel):
    """Installer settings loaded from the configuration file."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    fetch_timeout_seconds: float = Field(
        default=300.0, gt=0, description="Total timeout for a single fetch in seconds"
    )
    user_agent: str = Field(
        default="plugin-resources/1.0", description="User-Agent header sent with requests"
    )
