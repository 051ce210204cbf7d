"""Tracks: scaffolding tool for Go web applications."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tracks-cli")
except PackageNotFoundError:
    __version__ = "0.0.0"
