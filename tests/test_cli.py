"""Tests for the click CLI."""

import pytest
from click.testing import CliRunner

from airplane_mode import __version__
from airplane_mode.cli import cli


@pytest.fixture
def runner(isolated_db, monkeypatch):
    monkeypatch.setenv("HOME", str(isolated_db / "home"))
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_writes_config_and_setting(runner, isolated_db):
    result = runner.invoke(cli, ["init"])
    assert result.exit_code == 0, result.output
    assert (isolated_db / "home" / ".airplane-mode" / "config.yaml").exists()
    assert "Airplane Mode is ON" in result.output

    result = runner.invoke(cli, ["init"])
    assert "Config already exists" in result.output


def test_status_on_off(runner):
    assert "Airplane Mode: ON" in runner.invoke(cli, ["status"]).output

    result = runner.invoke(cli, ["off"])
    assert result.exit_code == 0, result.output
    assert "Airplane Mode: OFF" in runner.invoke(cli, ["status"]).output

    runner.invoke(cli, ["on"])
    assert "Airplane Mode: ON" in runner.invoke(cli, ["status"]).output


def test_check(runner):
    assert runner.invoke(cli, ["check", "http://localhost/api"]).output.startswith("allow")
    result = runner.invoke(cli, ["check", "https://example.com/"])
    assert result.output.startswith("deny")
    assert "Airplane Mode is enabled" in result.output

    runner.invoke(cli, ["off"])
    assert runner.invoke(cli, ["check", "https://example.com/"]).output.startswith("allow")


def test_uninstall_restores_default(runner):
    runner.invoke(cli, ["off"])
    assert runner.invoke(cli, ["uninstall"]).exit_code == 0
    assert "Airplane Mode: ON" in runner.invoke(cli, ["status"]).output
