"""Exceptions raised while resolving, fetching and installing resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import PurePath

    from .payload import PayloadSignature


class ResourceInstallError(Exception):
    """Base class for resource installer errors."""


class AmbiguousFilenameError(ResourceInstallError):
    """A declaration has no filename and none can be derived from its URI."""

    def __init__(self, uri: str) -> None:
        """Initialize the error.

        Args:
            uri: The declared source URI.
        """
        super().__init__(f"Cannot derive a filename from {uri!r}; declare one explicitly")
        self.uri = uri


class InvalidNamespaceError(ResourceInstallError):
    """A plugin name yields no usable directory name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Plugin name {name!r} does not produce a usable namespace")
        self.name = name


class UnsafeResourcePathError(ResourceInstallError):
    """A resolved path would escape the install root or name no file."""

    def __init__(self, path: PurePath) -> None:
        super().__init__(f"Resource path {str(path)!r} does not name a file under the install root")
        self.path = path


class FetchError(ResourceInstallError):
    """A resource could not be retrieved at the network level."""

    def __init__(self, message: str, uri: str) -> None:
        super().__init__(message)
        self.uri = uri


class BadPayloadDetected(ResourceInstallError):
    """Fetched bytes match a known error-page signature.

    Always fatal for the whole installation run.
    """

    def __init__(self, uri: str, plugin_name: str, signature: PayloadSignature) -> None:
        """Initialize the error.

        Args:
            uri: URI whose payload was rejected.
            plugin_name: Plugin that declared the resource.
            signature: The signature that matched.
        """
        super().__init__(f"{signature.name} payload received from {uri} (plugin {plugin_name})")
        self.uri = uri
        self.plugin_name = plugin_name
        self.signature = signature
