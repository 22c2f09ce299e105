"""Command-line interface for plugin-resources."""

from importlib.metadata import version as get_package_version

__version__ = get_package_version("plugin-resources")
