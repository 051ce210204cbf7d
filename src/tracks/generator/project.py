"""Orchestrates template rendering for a new project on disk."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from tracks.generator.manifest import PROJECT_DIRECTORIES, ManifestEntry, project_manifest
from tracks.generator.template import TemplateData, TemplateRenderer
from tracks.generator.types import DBDriver
from tracks.generator.validation import (
    validate_database_driver,
    validate_directory,
    validate_module_path,
    validate_project_name,
)

logger = logging.getLogger(__name__)

DEFAULT_GO_VERSION = "1.25"

FileCallback = Callable[[ManifestEntry, Path], None]


def default_module_path(project_name: str) -> str:
    return f"example.com/{project_name}"


@dataclass(frozen=True, kw_only=True)
class ProjectConfig:
    """
    Everything needed to generate one project.

    Attributes:
        project_name: Name of the project and of its directory.
        module_path: Go module path of the generated project.
        db_driver: Database driver wired into the generated code.
        go_version: Go version written to ``go.mod``.
        output_path: Directory in which the project directory is created.
    """

    project_name: str
    module_path: str
    db_driver: DBDriver = DBDriver.GO_LIBSQL
    go_version: str = DEFAULT_GO_VERSION
    output_path: Path = field(default_factory=lambda: Path("."))

    @property
    def project_root(self) -> Path:
        return self.output_path / self.project_name

    def template_data(self) -> TemplateData:
        return TemplateData.for_project(
            module_name=self.module_path,
            project_name=self.project_name,
            db_driver=DBDriver(self.db_driver).value,
            go_version=self.go_version,
        )


def validate_config(config: ProjectConfig) -> None:
    """Raise :class:`~tracks.generator.errors.ProjectValidationError` on bad input."""
    validate_project_name(config.project_name)
    validate_module_path(config.module_path)
    validate_database_driver(config.db_driver)
    validate_directory(config.project_root)


def generate_project(
    config: ProjectConfig,
    engine: TemplateRenderer | None = None,
    on_file: FileCallback | None = None,
) -> list[Path]:
    """Render every manifest template into ``config.project_root``.

    All templates are validated before anything is written. Generation stops
    at the first error; files already written are left in place.

    Args:
        config: Project options.
        engine: Template engine, defaults to one over the bundled templates.
        on_file: Called after each file is written, e.g. to advance a progress bar.

    Returns:
        Paths of the written files, in manifest order.
    """
    engine = engine or TemplateRenderer()
    manifest = project_manifest()

    validate_config(config)
    engine.validate_all(entry.template for entry in manifest)

    root = config.project_root
    logger.info("Creating project %s in %s", config.project_name, root)
    for parts in PROJECT_DIRECTORIES:
        root.joinpath(*parts).mkdir(mode=0o755, parents=True, exist_ok=True)

    data = config.template_data()
    written: list[Path] = []
    for entry in manifest:
        path = engine.render_to_file(entry.template, data, entry.output_path(root))
        written.append(path)
        if on_file is not None:
            on_file(entry, path)

    logger.info("Wrote %d files for %s", len(written), config.project_name)
    return written
