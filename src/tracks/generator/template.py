"""Jinja2 template rendering for project scaffolding.

Templates are bundled with the package under ``tracks/templates/project/`` and
are addressed by logical, forward-slash names such as
``"internal/http/server.go.tmpl"``. Two path spaces are kept apart:

- lookups inside the bundle always go through :class:`~pathlib.PurePosixPath`,
  whatever the host separator is;
- output files are host-native :class:`~pathlib.Path` objects supplied by the
  caller.
"""

from __future__ import annotations

import datetime
import importlib.resources as ilr
import logging
import re
import secrets
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateNotFound, TemplateSyntaxError
from jinja2 import TemplateError as JinjaTemplateError
from jinja2.loaders import split_template_path

from tracks.generator.errors import TemplateError, ValidationError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "tracks.templates"
TEMPLATE_ROOT = PurePosixPath("project")
TEMPLATE_SUFFIX = ".tmpl"

_ENV_PREFIX_INVALID = re.compile(r"[^A-Z0-9]+")


@dataclass(frozen=True, kw_only=True)
class TemplateData:
    """
    Variables available to every template.

    Every template receives the full set, whether it uses a field or not.
    All fields default to their zero value so an empty instance is valid input.

    Attributes:
        module_name: Go module path of the generated project, e.g. ``github.com/user/myapp``.
        project_name: Short project name, e.g. ``myapp``.
        db_driver: Database driver, one of ``go-libsql``, ``sqlite3``, ``postgres``.
        go_version: Go toolchain version written to ``go.mod``, e.g. ``1.25``.
        year: Year used in copyright notices.
        env_prefix: Prefix for the generated application's environment variables.
        secret_key: Random session key written to the example environment file.
    """

    module_name: str = ""
    project_name: str = ""
    db_driver: str = ""
    go_version: str = ""
    year: int = 0
    env_prefix: str = ""
    secret_key: str = ""

    @classmethod
    def for_project(
        cls,
        *,
        module_name: str,
        project_name: str,
        db_driver: str,
        go_version: str,
        year: int | None = None,
        secret_key: str | None = None,
    ) -> TemplateData:
        """Build fully-populated data for a new project."""
        return cls(
            module_name=module_name,
            project_name=project_name,
            db_driver=db_driver,
            go_version=go_version,
            year=year if year is not None else datetime.date.today().year,
            env_prefix=env_prefix_for(project_name),
            secret_key=secret_key if secret_key is not None else secrets.token_hex(32),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def env_prefix_for(project_name: str) -> str:
    """Derive an environment variable prefix: ``my-app`` -> ``MY_APP``."""
    prefix = _ENV_PREFIX_INVALID.sub("_", project_name.upper()).strip("_")
    if not prefix:
        return "APP"
    if prefix[0].isdigit():
        return f"APP_{prefix}"
    return prefix


class BundleLoader(BaseLoader):
    """Jinja2 loader over a read-only resource tree.

    ``bundle`` is any :class:`~importlib.resources.abc.Traversable`: the
    installed ``tracks.templates`` package by default, or a plain
    :class:`~pathlib.Path` directory in tests.
    """

    def __init__(self, bundle: Traversable, root: PurePosixPath = TEMPLATE_ROOT) -> None:
        self.bundle = bundle
        self.root = root

    def bundle_path(self, name: str) -> PurePosixPath:
        """Map a logical template name to its location inside the bundle."""
        return self.root.joinpath(*split_template_path(name))

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str, Callable[[], bool]]:
        bundle_path = self.bundle_path(template)
        resource = self.bundle.joinpath(*bundle_path.parts)
        if not resource.is_file():
            raise TemplateNotFound(template, f"no template {bundle_path} in bundle")

        logger.debug("Loading template %s from %s", template, bundle_path)
        source = resource.read_text(encoding="utf-8")
        return source, str(bundle_path), lambda: True

    def list_templates(self) -> list[str]:
        top = self.bundle.joinpath(*self.root.parts)
        if not top.is_dir():
            return []
        return sorted(str(rel) for rel in _walk(top, PurePosixPath()))


def _walk(node: Traversable, rel: PurePosixPath) -> Iterator[PurePosixPath]:
    for child in node.iterdir():
        child_rel = rel / child.name
        if child.is_dir():
            yield from _walk(child, child_rel)
        elif child.name.endswith(TEMPLATE_SUFFIX):
            yield child_rel


class TemplateRenderer:
    """Renders bundled templates and writes them to disk.

    Rendering is stateless: the same ``(name, data)`` pair always produces the
    same text. Any failure is reported as :class:`TemplateError` (lookup,
    parse, execution, write) or :class:`ValidationError` (syntax, from
    :meth:`validate` only).
    """

    def __init__(
        self, bundle: Traversable | None = None, root: PurePosixPath | str = TEMPLATE_ROOT
    ) -> None:
        if bundle is None:
            bundle = ilr.files(TEMPLATE_PACKAGE)
        self.loader = BundleLoader(bundle, PurePosixPath(root))
        self.env = Environment(
            loader=self.loader,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # noqa: S701
        )

    def render(self, name: str, data: TemplateData | Mapping[str, Any]) -> str:
        """Render template ``name`` with ``data`` and return the text.

        Args:
            name: Logical template name, e.g. ``"go.mod.tmpl"``.
            data: Template variables. A :class:`TemplateData` is expanded with
                :meth:`TemplateData.to_dict`.

        Raises:
            TemplateError: The template is missing, does not parse, or fails
                while executing (e.g. it references an undefined variable).
        """
        try:
            template = self.env.get_template(name)
        except (JinjaTemplateError, OSError, UnicodeDecodeError) as exc:
            raise TemplateError(name, exc) from exc

        context = data.to_dict() if isinstance(data, TemplateData) else dict(data)
        try:
            return template.render(context)
        # template expressions can raise arbitrary errors at execution time
        except Exception as exc:
            raise TemplateError(name, exc) from exc

    def render_to_file(
        self, name: str, data: TemplateData | Mapping[str, Any], output_path: Path | str
    ) -> Path:
        """Render template ``name`` and write the result to ``output_path``.

        ``output_path`` is a host-native path. Missing parent directories are
        created, an existing file is overwritten. Returns the written path.

        Raises:
            TemplateError: Rendering failed, or the directory or file could not
                be written.
        """
        content = self.render(name, data)
        path = Path(output_path)

        try:
            path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise TemplateError(name, exc, "failed to create directory") from exc

        try:
            path.write_text(content, encoding="utf-8", newline="")
        except OSError as exc:
            raise TemplateError(name, exc, "failed to write file") from exc

        logger.debug("Rendered %s to %s", name, path)
        return path

    def validate(self, name: str) -> None:
        """Check that template ``name`` exists and parses, without executing it.

        Raises:
            TemplateError: The template does not exist or cannot be read.
            ValidationError: The template has a syntax error.
        """
        try:
            source, filename, _ = self.loader.get_source(self.env, name)
        except (JinjaTemplateError, OSError, UnicodeDecodeError) as exc:
            raise TemplateError(name, exc) from exc

        try:
            self.env.compile(source, name, filename)
        except TemplateSyntaxError as exc:
            message = exc.message or "invalid template syntax"
            if exc.lineno:
                message = f"{message} (line {exc.lineno})"
            raise ValidationError(name, message) from exc

    def validate_all(self, names: Iterable[str]) -> None:
        """Validate every template in ``names``, stopping at the first failure."""
        for name in names:
            self.validate(name)

    def list_templates(self) -> list[str]:
        """Return the sorted logical names of every bundled template."""
        return self.loader.list_templates()
