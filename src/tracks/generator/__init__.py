"""Project generation: template engine, manifest and validation."""

from tracks.generator.errors import ProjectValidationError, TemplateError, ValidationError
from tracks.generator.manifest import ManifestEntry, project_manifest
from tracks.generator.project import (
    DEFAULT_GO_VERSION,
    ProjectConfig,
    default_module_path,
    generate_project,
)
from tracks.generator.template import TemplateData, TemplateRenderer
from tracks.generator.types import DBDriver

__all__ = [
    "DEFAULT_GO_VERSION",
    "DBDriver",
    "ManifestEntry",
    "ProjectConfig",
    "ProjectValidationError",
    "TemplateData",
    "TemplateError",
    "TemplateRenderer",
    "ValidationError",
    "default_module_path",
    "generate_project",
    "project_manifest",
]
