"""Resolution of resource declarations into output paths.

A declaration resolves to ``prefix / filename`` relative to the install root:

- prefix: the declaration's explicit prefix, else the plugin namespace
  (the plugin name lower-cased with whitespace removed, "Core" -> "core").
- filename: the declaration's explicit filename, else the text after the
  final ``/`` of the source URI.

Everything here is pure; nothing touches the network or the filesystem.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from .errors import AmbiguousFilenameError, UnsafeResourcePathError
from .models import Plugin, ResolvedResource, ResourceDeclaration
from .namespace import default_namespace


def resource_prefix(declaration: ResourceDeclaration, plugin: Plugin) -> str:
    """Return the directory a declaration installs into."""
    if declaration.prefix:
        return declaration.prefix
    return default_namespace(plugin.name)


def effective_filename(declaration: ResourceDeclaration) -> str:
    """Return the output filename for a declaration.

    Raises:
        AmbiguousFilenameError: If no filename is declared and the URI ends in
            ``/`` or in a bare ``.`` segment.
    """
    if declaration.filename:
        return declaration.filename

    implied = declaration.source_uri.rsplit("/", 1)[-1]
    if implied in ("", "."):
        raise AmbiguousFilenameError(declaration.source_uri)
    return implied


def _check_contained(prefix: str, filename: str) -> PurePosixPath:
    # "." segments collapse away, so a part made only of them names no directory or file.
    for part in (PurePosixPath(prefix), PurePosixPath(filename)):
        if part.is_absolute() or not part.parts or ".." in part.parts:
            raise UnsafeResourcePathError(PurePosixPath(f"{prefix}/{filename}"))
    return PurePosixPath(prefix) / filename


def resolve(plugin: Plugin) -> list[ResolvedResource]:
    """Resolve every declaration of a plugin, in declaration order.

    Args:
        plugin: The plugin to resolve.

    Returns:
        One ResolvedResource per declaration.

    Raises:
        AmbiguousFilenameError: If a filename cannot be derived.
        UnsafeResourcePathError: If a path would escape the install root or
            collapse onto the prefix directory.
    """
    resolved: list[ResolvedResource] = []
    for declaration in plugin.resources:
        relative_path = _check_contained(
            resource_prefix(declaration, plugin), effective_filename(declaration)
        )
        resolved.append(
            ResolvedResource(
                plugin_name=plugin.name,
                uri=declaration.source_uri,
                relative_path=relative_path,
            )
        )
    return resolved
