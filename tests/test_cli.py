"""Integration tests for the tracks CLI."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from tracks.cli import app
from tracks.cli._logging import configure_logging
from tracks.generator import DBDriver, project_manifest

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    yield
    configure_logging("off")


def _new(tmp_path: Path, *args: str, name: str = "myapp") -> list[str]:
    return ["new", name, "--output", str(tmp_path), *args]


class TestNewCommand:
    """Tests for the `new` command with non-interactive flags."""

    @pytest.mark.parametrize("driver", list(DBDriver))
    def test_each_driver(self, tmp_path: Path, driver: DBDriver) -> None:
        result = runner.invoke(app, _new(tmp_path, "--db", driver.value))

        assert result.exit_code == 0, result.output
        project = tmp_path / "myapp"
        for entry in project_manifest():
            assert entry.output_path(project).is_file(), entry.display_name
        assert (project / "db" / "queries").is_dir()
        assert (project / "data").is_dir()

    def test_defaults(self, tmp_path: Path) -> None:
        result = runner.invoke(app, _new(tmp_path))

        assert result.exit_code == 0, result.output
        go_mod = (tmp_path / "myapp" / "go.mod").read_text()
        assert go_mod.startswith("module example.com/myapp\n")
        assert "go 1.25" in go_mod
        assert "go-libsql" in go_mod

    def test_module_and_go_version(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, _new(tmp_path, "--module", "github.com/acme/myapp", "--go-version", "1.24")
        )

        assert result.exit_code == 0, result.output
        go_mod = (tmp_path / "myapp" / "go.mod").read_text()
        assert "module github.com/acme/myapp" in go_mod
        assert "go 1.24" in go_mod

    def test_console_summary(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-color", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Creating new Tracks application: myapp" in result.output
        assert "Project 'myapp' created successfully!" in result.output
        assert "Module:   example.com/myapp" in result.output
        assert "Next steps" in result.output
        assert "make run" in result.output
        assert "\x1b[" not in result.output

    def test_json_output(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--json", *_new(tmp_path, "--db", "postgres")])

        assert result.exit_code == 0, result.output
        doc = json.loads(result.stdout)
        assert doc["title"] == "Creating new Tracks application: myapp"
        assert doc["sections"][0]["title"] == "✓ Project 'myapp' created successfully!"
        assert "Database: postgres" in doc["sections"][0]["body"]
        assert doc["sections"][1]["title"] == "Next steps"
        table = doc["tables"][0]
        assert table["headers"] == ["File", "Template"]
        assert ["go.mod", "go.mod.tmpl"] in table["rows"]
        assert len(table["rows"]) == len(project_manifest())

    def test_json_from_environment(self, tmp_path: Path) -> None:
        result = runner.invoke(app, _new(tmp_path), env={"TRACKS_JSON": "1"})

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["title"].endswith("myapp")

    def test_existing_directory_fails(self, tmp_path: Path) -> None:
        project = tmp_path / "myapp"
        project.mkdir()
        (project / "main.go").write_text("package main\n")

        result = runner.invoke(app, _new(tmp_path))

        assert result.exit_code == 1
        assert "Error: invalid output path" in result.output
        assert "directory must be empty" in result.output
        assert sorted(p.name for p in project.iterdir()) == ["main.go"]

    def test_missing_output_parent_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, _new(tmp_path / "nope"))

        assert result.exit_code == 1
        assert "parent directory does not exist" in result.output

    @pytest.mark.parametrize("name", ["MyApp", "my app", "a" * 101])
    def test_invalid_project_name(self, tmp_path: Path, name: str) -> None:
        result = runner.invoke(app, _new(tmp_path, name=name))

        assert result.exit_code == 1
        assert "invalid project name" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_invalid_module_path(self, tmp_path: Path) -> None:
        result = runner.invoke(app, _new(tmp_path, "--module", "nodomain"))

        assert result.exit_code == 1
        assert "invalid module path" in result.output

    def test_invalid_driver_is_usage_error(self, tmp_path: Path) -> None:
        result = runner.invoke(app, _new(tmp_path, "--db", "mysql"))

        assert result.exit_code == 2
        assert not (tmp_path / "myapp").exists()

    def test_log_level_debug(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--log-level", "debug", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Creating project myapp" in result.output


class TestInteractiveNew:
    @patch("tracks.cli.app.prompt_module_path", return_value="github.com/me/myapp")
    @patch("tracks.cli.app.prompt_db_driver", return_value=DBDriver.SQLITE3)
    def test_prompts_for_missing_options(
        self, mock_driver: MagicMock, mock_module: MagicMock, tmp_path: Path
    ) -> None:
        result = runner.invoke(app, ["--interactive", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        mock_driver.assert_called_once()
        mock_module.assert_called_once_with("example.com/myapp")
        go_mod = (tmp_path / "myapp" / "go.mod").read_text()
        assert "module github.com/me/myapp" in go_mod
        assert "mattn/go-sqlite3" in go_mod

    @patch("tracks.cli.app.prompt_module_path")
    @patch("tracks.cli.app.prompt_db_driver")
    def test_flags_skip_prompts(
        self, mock_driver: MagicMock, mock_module: MagicMock, tmp_path: Path
    ) -> None:
        result = runner.invoke(
            app,
            ["--interactive", *_new(tmp_path, "--db", "postgres", "--module", "example.com/x/y")],
        )

        assert result.exit_code == 0, result.output
        mock_driver.assert_not_called()
        mock_module.assert_not_called()

    @patch("tracks.cli.app.prompt_module_path")
    @patch("tracks.cli.app.prompt_db_driver")
    def test_no_prompts_without_interactive(
        self, mock_driver: MagicMock, mock_module: MagicMock, tmp_path: Path
    ) -> None:
        result = runner.invoke(app, _new(tmp_path))

        assert result.exit_code == 0, result.output
        mock_driver.assert_not_called()
        mock_module.assert_not_called()

    @patch("tracks.cli.app.prompt_db_driver")
    def test_json_wins_over_interactive(self, mock_driver: MagicMock, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--json", "--interactive", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        mock_driver.assert_not_called()
        json.loads(result.stdout)


class TestOtherCommands:
    def test_version_command(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("Tracks ")
        assert "Python: " in result.output
        assert "Platform: " in result.output

    def test_version_json(self) -> None:
        result = runner.invoke(app, ["--json", "version"])

        assert result.exit_code == 0, result.output
        doc = json.loads(result.stdout)
        assert doc["title"].startswith("Tracks ")
        assert doc["sections"][0]["body"].startswith("Python: ")

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("tracks ")

    def test_no_command(self) -> None:
        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        assert "Interactive mode is not available yet" in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "new" in result.output
        assert "version" in result.output


class TestVerbosityFlags:
    def test_verbose_and_quiet_are_exclusive(self) -> None:
        result = runner.invoke(app, ["--verbose", "--quiet", "version"])

        assert result.exit_code == 1
        assert "--verbose and --quiet flags are mutually exclusive" in result.output

    def test_short_flags_are_exclusive(self) -> None:
        result = runner.invoke(app, ["-v", "-q", "version"])

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_verbose_enables_info_logs(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["-v", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Creating project myapp" in result.output

    def test_quiet_hides_info_logs(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["-q", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Creating project myapp" not in result.output

    def test_explicit_log_level_wins(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--log-level", "error", "-v", *_new(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Creating project myapp" not in result.output
