"""Typer CLI application for tracks."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

from rich.console import Console
from rich.text import Text
from typer import Argument, Context, Exit, Option, Typer

import tracks
from tracks.cli._logging import configure_logging, parse_log_level
from tracks.cli._mode import UIConfig, UIMode, detect_mode
from tracks.cli._output import ProgressSpec, Renderer, Section, Table, new_renderer
from tracks.cli._prompts import prompt_db_driver, prompt_module_path
from tracks.cli._theme import DEFAULT_THEME
from tracks.generator import (
    DEFAULT_GO_VERSION,
    DBDriver,
    ManifestEntry,
    ProjectConfig,
    ProjectValidationError,
    TemplateError,
    TemplateRenderer,
    ValidationError,
    default_module_path,
    generate_project,
    project_manifest,
)
from tracks.generator.project import validate_config
from tracks.generator.validation import validate_project_name

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_err_console = Console(stderr=True, soft_wrap=True, highlight=False)

_NEXT_STEPS = ("go mod tidy", "make test", "make run")


@dataclass(frozen=True)
class GlobalOptions:
    json: bool = False
    no_color: bool = False
    interactive: bool = False


def _fail(message: str) -> NoReturn:
    _err_console.print(Text("Error: ", style=DEFAULT_THEME.error) + Text(message))
    raise Exit(code=1)


def _renderer_for(ctx: Context) -> tuple[Renderer, UIMode]:
    opts = ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()
    config = UIConfig.from_environment(
        json=opts.json, no_color=opts.no_color, interactive=opts.interactive
    )
    mode = detect_mode(config)
    return new_renderer(mode, sys.stdout, no_color=config.no_color), mode


def _flush(renderer: Renderer) -> None:
    try:
        renderer.flush()
    except OSError as exc:
        _fail(str(exc))


def _effective_log_level(log_level: str, *, verbose: bool, quiet: bool) -> str:
    """``--verbose`` and ``--quiet`` only apply when ``--log-level`` is left at ``off``."""
    if parse_log_level(log_level) is not None:
        return log_level
    if verbose:
        return "info"
    if quiet:
        return "error"
    return log_level


def _version_callback(value: bool) -> None:
    if value:
        print(f"tracks {tracks.__version__}")
        raise Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: Context,
    json_output: Annotated[
        bool, Option("--json", envvar="TRACKS_JSON", help="Output in JSON format (useful for scripting)")
    ] = False,
    no_color: Annotated[
        bool,
        Option("--no-color", envvar="TRACKS_NO_COLOR", help="Disable color output (respects NO_COLOR)"),
    ] = False,
    interactive: Annotated[
        bool,
        Option(
            "--interactive",
            envvar="TRACKS_INTERACTIVE",
            help="Force interactive mode even in non-TTY environments",
        ),
    ] = False,
    log_level: Annotated[
        str,
        Option(
            "--log-level",
            envvar="TRACKS_LOG_LEVEL",
            help="Diagnostic log level on stderr: debug, info, warn, error or off",
        ),
    ] = "off",
    verbose: Annotated[
        bool, Option("--verbose", "-v", help="Show diagnostic logs at info level")
    ] = False,
    quiet: Annotated[bool, Option("--quiet", "-q", help="Show error logs only")] = False,
    version: Annotated[
        bool,
        Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """tracks: scaffolding tool for Go web applications."""
    if verbose and quiet:
        _fail("--verbose and --quiet flags are mutually exclusive")
    configure_logging(_effective_log_level(log_level, verbose=verbose, quiet=quiet))
    ctx.obj = GlobalOptions(json=json_output, no_color=no_color, interactive=interactive)

    if ctx.invoked_subcommand is None:
        renderer, _ = _renderer_for(ctx)
        renderer.section(
            Section(body="Interactive mode is not available yet. Use --help for available commands.")
        )
        _flush(renderer)


@app.command()
def new(
    ctx: Context,
    project_name: Annotated[str, Argument(help="Name for the new project directory")],
    db_driver: Annotated[
        DBDriver | None,
        Option("--db", "-d", help="Database driver [default: go-libsql]", show_default=False),
    ] = None,
    module_path: Annotated[
        str | None,
        Option(
            "--module",
            "-m",
            help="Go module path [default: example.com/<project-name>]",
            show_default=False,
        ),
    ] = None,
    go_version: Annotated[str, Option("--go-version", help="Go version for go.mod")] = (
        DEFAULT_GO_VERSION
    ),
    output_dir: Annotated[
        Path, Option("--output", "-o", help="Directory in which to create the project")
    ] = Path("."),
) -> None:
    """Create a new Tracks application."""
    try:
        validate_project_name(project_name)
    except ProjectValidationError as exc:
        _fail(f"invalid project name: {exc}")

    renderer, mode = _renderer_for(ctx)
    interactive = mode is UIMode.TUI

    if db_driver is None:
        db_driver = prompt_db_driver() if interactive else DBDriver.GO_LIBSQL
    if module_path is None:
        default = default_module_path(project_name)
        module_path = prompt_module_path(default) if interactive else default

    config = ProjectConfig(
        project_name=project_name,
        module_path=module_path,
        db_driver=db_driver,
        go_version=go_version,
        output_path=output_dir,
    )
    try:
        validate_config(config)
    except ProjectValidationError as exc:
        _fail(f"invalid {exc.field.replace('_', ' ')}: {exc}")

    manifest = project_manifest()
    renderer.title(f"Creating new Tracks application: {project_name}")
    progress = renderer.progress(ProgressSpec(label="Rendering templates", total=len(manifest)))

    def advance(entry: ManifestEntry, path: Path) -> None:
        progress.increment(1)

    try:
        generate_project(config, TemplateRenderer(), on_file=advance)
    except (TemplateError, ValidationError, ProjectValidationError) as exc:
        progress.done()
        _fail(str(exc))
    except OSError as exc:
        progress.done()
        _fail(f"failed to create project: {exc}")
    progress.done()

    renderer.section(
        Section(
            title=f"✓ Project '{project_name}' created successfully!",
            body="\n".join(
                [
                    f"Location: {config.project_root.resolve()}",
                    f"Module:   {config.module_path}",
                    f"Database: {config.db_driver.value}",
                    f"Go:       {config.go_version}",
                ]
            ),
        )
    )
    renderer.table(
        Table(
            headers=["File", "Template"],
            rows=[[entry.display_name, entry.template] for entry in manifest],
        )
    )
    steps = [f"cd {config.project_root}", *_NEXT_STEPS]
    renderer.section(
        Section(
            title="Next steps",
            body="\n".join(f"  {i}. {step}" for i, step in enumerate(steps, start=1)),
        )
    )
    _flush(renderer)


@app.command()
def version(ctx: Context) -> None:
    """Print version information."""
    renderer, _ = _renderer_for(ctx)
    renderer.title(f"Tracks {tracks.__version__}")
    renderer.section(
        Section(body=f"Python: {platform.python_version()}\nPlatform: {platform.platform()}")
    )
    _flush(renderer)
