"""Tests for CLI commands."""

import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cursorgen import __version__
from cursorgen.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def test_project(tmp_path: Path, ts_project_dir: Path) -> Path:
    """Copy the sample TypeScript project into a temporary directory."""
    project = tmp_path / "app"
    shutil.copytree(ts_project_dir, project)
    return project


def test_generate_writes_cursors(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(app, ["generate", str(test_project)])

    assert result.exit_code == 0, result.output
    assert "Generated 2 cursors file(s)" in result.output
    state = (test_project / "state.cursors.ts").read_text()
    assert "export const rootKey = bf.rootCursor.key;" in state
    assert "todosItemsCursor" in state
    assert (test_project / "detail" / "state.cursors.ts").exists()


def test_generate_no_recurse_with_root_key(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(
        app, ["generate", str(test_project), "--no-recurse", "--root-key", "app"]
    )

    assert result.exit_code == 0, result.output
    state = (test_project / "state.cursors.ts").read_text()
    assert "export const rootKey = 'app';" in state
    assert "todosItemsCursor" not in state
    assert not (test_project / "detail" / "state.cursors.ts").exists()


def test_generate_dry_run_writes_nothing(cli_runner: CliRunner, test_project: Path) -> None:
    result = cli_runner.invoke(app, ["generate", str(test_project), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Would generate 2 cursors file(s)" in result.output
    assert not (test_project / "state.cursors.ts").exists()


def test_generate_reports_schema_errors(cli_runner: CliRunner, test_project: Path) -> None:
    (test_project / "state.ts").write_text(
        "interface IApplicationState { user: IUser; }\n"
        "interface IUser { a: string; }\n"
        "interface IUser { b: string; }\n"
    )

    result = cli_runner.invoke(app, ["generate", str(test_project)])

    assert result.exit_code == 1
    assert "IUser" in result.output


def test_generate_invalid_config(cli_runner: CliRunner, test_project: Path) -> None:
    (test_project / "cursorgen.toml").write_text("[generation]\nrecurse = 'maybe'\n")

    result = cli_runner.invoke(app, ["generate", str(test_project)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_generate_without_sources(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(app, ["generate", str(tmp_path)])

    assert result.exit_code == 1
    assert "No TypeScript sources" in result.output


def test_schema_command(cli_runner: CliRunner, ts_project_dir: Path) -> None:
    result = cli_runner.invoke(app, ["schema", str(ts_project_dir / "todos" / "state.ts")])

    assert result.exit_code == 0, result.output
    assert "ITodosState" in result.output
    assert "component" in result.output
    assert "ITodo[]" in result.output


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"cursorgen {__version__}" in result.output
