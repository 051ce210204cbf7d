"""Validation of user input for new projects."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from tracks.generator.errors import ProjectValidationError
from tracks.generator.types import DBDriver

logger = logging.getLogger(__name__)

MAX_PROJECT_NAME_LENGTH = 100
MAX_MODULE_PATH_LENGTH = 300

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9_-]+$")
_MODULE_PATH_RE = re.compile(r"^[a-zA-Z0-9._/-]+$")

_WRITE_PROBE = ".tracks_write_test"


def validate_project_name(name: str) -> None:
    """Project names are lowercase alphanumerics, hyphens and underscores."""
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise ProjectValidationError(
            "project_name", name, f"must be {MAX_PROJECT_NAME_LENGTH} characters or less"
        )
    if not _PROJECT_NAME_RE.match(name):
        raise ProjectValidationError(
            "project_name", name, "must be lowercase alphanumeric with hyphens/underscores"
        )


def validate_module_path(path: str) -> None:
    """Module paths look like ``github.com/user/project``."""
    if not path:
        raise ProjectValidationError("module_path", path, "cannot be empty")
    if len(path) > MAX_MODULE_PATH_LENGTH:
        raise ProjectValidationError(
            "module_path", path, f"must be {MAX_MODULE_PATH_LENGTH} characters or less"
        )
    if "/" not in path:
        raise ProjectValidationError(
            "module_path", path, "must contain domain and path (e.g., github.com/user/project)"
        )
    if path.startswith("/") or path.endswith("/"):
        raise ProjectValidationError("module_path", path, "cannot start or end with slash")
    if not _MODULE_PATH_RE.match(path):
        raise ProjectValidationError("module_path", path, "must be valid Go import path")


def validate_database_driver(driver: str) -> DBDriver:
    """Return the matching :class:`DBDriver` or raise."""
    try:
        return DBDriver(driver)
    except ValueError:
        valid = ", ".join(d.value for d in DBDriver)
        raise ProjectValidationError(
            "database_driver", driver, f"must be one of: {valid}"
        ) from None


def validate_directory(path: Path) -> None:
    """The target must be an empty directory, or absent with a writable parent."""
    if path.exists():
        if not path.is_dir():
            raise ProjectValidationError(
                "output_path", str(path), "path exists but is not a directory"
            )
        if any(path.iterdir()):
            raise ProjectValidationError("output_path", str(path), "directory must be empty")
        return

    parent = path.parent
    if not parent.is_dir():
        raise ProjectValidationError("output_path", str(path), "parent directory does not exist")

    probe = parent / _WRITE_PROBE
    try:
        probe.write_bytes(b"")
    except OSError:
        raise ProjectValidationError(
            "output_path", str(path), "parent directory is not writable"
        ) from None

    try:
        probe.unlink()
    except OSError as exc:
        logger.warning("Failed to remove write probe %s: %s", probe, exc)
