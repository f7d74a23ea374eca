"""Tests for the root errlint CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from errlint import __version__
from errlint.cli import cli
from tests.conftest import GOOD_ENUM


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "errlint" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("project_root")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("project_root")
def test_missing_config_file(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "missing.toml", "check"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_invalid_config(cli_runner: CliRunner, project_root: Path) -> None:
    (project_root / "errlint.toml").write_text("[rules]\nlength = 0\n")
    result = cli_runner.invoke(cli, ["check"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_config_via_env(
    cli_runner: CliRunner, project_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config = project_root / "other.toml"
    config.write_text('[rules]\nprefix = "9"\n')
    monkeypatch.setenv("ERRLINT_CONFIG", str(config))
    (project_root / "errors.py").write_text(GOOD_ENUM)
    result = cli_runner.invoke(cli, ["-q", "check"])
    assert result.exit_code == 1
    assert "PREFIX_MISMATCH" in result.output


# --- Commands registered ---


@pytest.mark.parametrize("command", ["check", "codes"])
def test_command_registered(command: str) -> None:
    assert command in cli.commands
