"""Files and directories that make up a generated project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ManifestEntry:
    """
    One rendered file of a generated project.

    Attributes:
        template: Logical template name inside the bundle (always ``/``-separated).
        output: Output location relative to the project root, as path segments.
    """

    template: str
    output: tuple[str, ...]

    def output_path(self, project_root: Path) -> Path:
        """Resolve the host-native output path under ``project_root``."""
        return project_root.joinpath(*self.output)

    @property
    def display_name(self) -> str:
        return "/".join(self.output)


def _entry(template: str, *output: str) -> ManifestEntry:
    return ManifestEntry(template=template, output=output)


PROJECT_MANIFEST: tuple[ManifestEntry, ...] = (
    _entry("go.mod.tmpl", "go.mod"),
    _entry("README.md.tmpl", "README.md"),
    _entry("Makefile.tmpl", "Makefile"),
    _entry(".gitignore.tmpl", ".gitignore"),
    _entry(".env.example.tmpl", ".env.example"),
    _entry("cmd/server/main.go.tmpl", "cmd", "server", "main.go"),
    _entry("internal/config/config.go.tmpl", "internal", "config", "config.go"),
    _entry("internal/db/db.go.tmpl", "internal", "db", "db.go"),
    _entry("internal/http/server.go.tmpl", "internal", "http", "server.go"),
    _entry("internal/http/routes.go.tmpl", "internal", "http", "routes.go"),
    _entry("internal/http/middleware.go.tmpl", "internal", "http", "middleware.go"),
    _entry("internal/http/handlers/health.go.tmpl", "internal", "http", "handlers", "health.go"),
    _entry(
        "internal/http/handlers/health_test.go.tmpl",
        "internal",
        "http",
        "handlers",
        "health_test.go",
    ),
    _entry(
        "db/migrations/00001_initial_schema.sql.tmpl",
        "db",
        "migrations",
        "00001_initial_schema.sql",
    ),
)

# Created up front so they exist even when no template writes into them.
PROJECT_DIRECTORIES: tuple[tuple[str, ...], ...] = (
    ("cmd", "server"),
    ("internal", "config"),
    ("internal", "db"),
    ("internal", "http", "handlers"),
    ("db", "migrations"),
    ("db", "queries"),
    ("data",),
)


def project_manifest() -> list[ManifestEntry]:
    """Return the ordered list of files rendered for a new project."""
    return list(PROJECT_MANIFEST)
