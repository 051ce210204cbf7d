"""Command-line interface for tracks."""

from tracks.cli.app import app

__all__ = ["app"]
