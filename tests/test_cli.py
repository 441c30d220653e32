"""Tests for the root iniconf CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from iniconf import __version__
from iniconf.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "iniconf" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_cli_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    assert "iniconf scan app.ini" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


@pytest.mark.parametrize("name", ["scan", "get"])
def test_commands_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0
    assert "PATH" in result.output


def test_env_var_enables_json(
    cli_runner: CliRunner, write_ini, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("INICONF_JSON_OUTPUT", "1")
    path: Path = write_ini("k = v\n")
    result = cli_runner.invoke(cli, ["get", str(path), "k"])
    assert result.exit_code == 0
    assert json.loads(result.output)["data"]["value"] == "v"
