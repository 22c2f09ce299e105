"""Plugin resource installer.

Fetches the remote resources declared by loaded plugins and installs them into
a per-plugin directory tree under an install root.

Module Overview:
    cache: In-memory, per-installer download cache (one fetch per URI)
    config: YAML configuration and plugin set loading
    errors: Exception hierarchy
    fetcher: aiohttp-based HTTP fetcher
    installer: Orchestrates resolution, fetching, checking and writing
    interfaces: Abstract Fetcher base class
    models: Pydantic data models for declarations, plugins and results
    namespace: Default directory names derived from plugin names
    payload: Detection of error documents delivered in place of resources
    resolver: Derivation of output paths from resource declarations
"""

from importlib.metadata import version as get_package_version

from plugin_resources.cache import DownloadCache
from plugin_resources.config import (
    CONFIG_ENV_VAR,
    ConfigManager,
    get_default_config_path,
    read_config_file,
)
from plugin_resources.errors import (
    AmbiguousFilenameError,
    BadPayloadDetected,
    FetchError,
    InvalidNamespaceError,
    ResourceInstallError,
    UnsafeResourcePathError,
)
from plugin_resources.fetcher import HttpFetcher
from plugin_resources.installer import ResourceInstaller
from plugin_resources.interfaces import Fetcher
from plugin_resources.models import (
    InstalledResource,
    InstallerConfig,
    InstallResult,
    InstallStatus,
    LogLevel,
    Plugin,
    ResolvedResource,
    ResourceDeclaration,
)
from plugin_resources.namespace import default_namespace
from plugin_resources.payload import (
    BAD_PAYLOAD_SIGNATURES,
    S3_BAD_MESSAGE,
    PayloadSignature,
    is_bad_payload,
    match_bad_payload,
)
from plugin_resources.resolver import (
    effective_filename,
    resolve,
    resource_prefix,
)

__version__ = get_package_version("plugin-resources")

__all__ = [
    "BAD_PAYLOAD_SIGNATURES",
    "CONFIG_ENV_VAR",
    "S3_BAD_MESSAGE",
    "AmbiguousFilenameError",
    "BadPayloadDetected",
    "ConfigManager",
    "DownloadCache",
    "FetchError",
    "Fetcher",
    "HttpFetcher",
    "InstallResult",
    "InstallStatus",
    "InstalledResource",
    "InstallerConfig",
    "InvalidNamespaceError",
    "LogLevel",
    "PayloadSignature",
    "Plugin",
    "ResolvedResource",
    "ResourceDeclaration",
    "ResourceInstallError",
    "ResourceInstaller",
    "UnsafeResourcePathError",
    "default_namespace",
    "effective_filename",
    "get_default_config_path",
    "is_bad_payload",
    "match_bad_payload",
    "read_config_file",
    "resolve",
    "resource_prefix",
]
