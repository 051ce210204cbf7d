"""Shared fixtures for the tracks test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tracks.generator import TemplateData, TemplateRenderer

BundleFactory = Callable[[dict[str, str]], TemplateRenderer]


@pytest.fixture
def template_data() -> TemplateData:
    return TemplateData.for_project(
        module_name="github.com/acme/myapp",
        project_name="myapp",
        db_driver="go-libsql",
        go_version="1.25",
        year=2025,
        secret_key="0" * 64,
    )


@pytest.fixture
def engine() -> TemplateRenderer:
    """Engine over the templates shipped with the package."""
    return TemplateRenderer()


@pytest.fixture
def make_bundle(tmp_path: Path) -> BundleFactory:
    """Build an engine over a throwaway bundle of ``{name: source}`` templates."""

    def factory(templates: dict[str, str]) -> TemplateRenderer:
        bundle = tmp_path / "bundle"
        for name, source in templates.items():
            path = bundle.joinpath("project", *name.split("/"))
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        (bundle / "project").mkdir(parents=True, exist_ok=True)
        return TemplateRenderer(bundle=bundle)

    return factory
