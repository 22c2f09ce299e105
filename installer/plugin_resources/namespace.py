"""Plugin namespaces.

A namespace is the directory a plugin's resources install into when no prefix
is declared: the plugin name lower-cased, with whitespace and any character
outside ``[a-z0-9._-]`` removed.
"""

from __future__ import annotations

import re

from .errors import InvalidNamespaceError

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_NAMESPACE_CHARS = re.compile(r"[^a-z0-9._-]")


def default_namespace(name: str) -> str:
    """Derive the filesystem-safe namespace for a plugin name.

    Args:
        name: Plugin name.

    Returns:
        The namespace directory name.

    Raises:
        InvalidNamespaceError: If no usable characters remain.
    """
    namespace = _WHITESPACE.sub("", name.lower())
    namespace = _UNSAFE_NAMESPACE_CHARS.sub("", namespace)
    if namespace in ("", ".", ".."):
        raise InvalidNamespaceError(name)
    return namespace
