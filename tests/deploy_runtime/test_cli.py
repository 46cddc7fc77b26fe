"""Tests for the ``shipwright describe`` command."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from loguru import logger

from shipwright.cli import main


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """A site home with a repository and a script directory, wired via SHIPWRIGHT_*."""
    home = tmp_path / "home"
    (home / "site" / "repository").mkdir(parents=True)
    scripts = tmp_path / "scripts"
    scripts.mkdir()

    monkeypatch.setenv("SHIPWRIGHT_ROOT_PATH", str(home))
    monkeypatch.setenv("SHIPWRIGHT_SCRIPT_PATH", str(scripts))
    yield home
    # setup_logging bound loguru to the runner's stderr.
    logger.remove()


def _describe(*args: str) -> dict:
    result = CliRunner().invoke(main, ["describe", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_describe_starter(site: Path) -> None:
    repository = site / "site" / "repository"

    data = _describe()

    assert data["command"].endswith("starter.sh") or data["command"].endswith("starter.cmd")
    assert data["working_directory"] == str(repository)
    assert data["idle_timeout"] == 60.0
    env = data["environment_variables"]
    assert env["DEPLOYMENT_SOURCE"] == str(repository)
    assert env["DEPLOYMENT_TARGET"] == str(site / "site" / "wwwroot")
    assert env["HOME"] == str(site)
    assert env["EnableNuGetPackageRestore"] == "true"
    assert "IN_PLACE_DEPLOYMENT" not in env


def test_describe_uses_deployment_file_and_overrides(site: Path) -> None:
    repository = site / "site" / "repository"
    (repository / ".deployment").write_text(
        "[config]\nSCM_COMMAND_IDLE_TIMEOUT = 300\nKUDU_SYNC_CMD = from-file\nproject = app\n",
        encoding="utf-8",
    )

    data = _describe("--set", "KUDU_SYNC_CMD=from-cli", "--target", str(repository / "app"))

    assert data["idle_timeout"] == 300.0
    assert data["environment_variables"]["KUDU_SYNC_CMD"] == "from-cli"
    assert data["value_sources"]["KUDU_SYNC_CMD"] == "override"
    assert data["environment_variables"]["IN_PLACE_DEPLOYMENT"] == "1"


def test_describe_ignores_deployment_file(site: Path) -> None:
    repository = site / "site" / "repository"
    (repository / ".deployment").write_text("[config]\nSCM_COMMAND_IDLE_TIMEOUT = 300\n", encoding="utf-8")

    data = _describe("--no-deployment-file")

    assert data["idle_timeout"] == 60.0


def test_describe_generic_command(site: Path) -> None:
    data = _describe("--command", "/usr/bin/make", "--working-dir", "/tmp", "--idle-timeout", "15")

    assert data["command"] == "/usr/bin/make"
    assert data["working_directory"] == "/tmp"
    assert data["idle_timeout"] == 15.0
    assert "DEPLOYMENT_SOURCE" not in data["environment_variables"]


def test_describe_rejects_bad_assignment(site: Path) -> None:
    result = CliRunner().invoke(main, ["describe", "--set", "NOVALUE"])

    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_describe_without_script_path(site: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHIPWRIGHT_SCRIPT_PATH")

    result = CliRunner().invoke(main, ["describe"])

    assert result.exit_code == 1
    assert "script_path" in result.output


def test_describe_invalid_idle_timeout(site: Path) -> None:
    result = CliRunner().invoke(main, ["describe", "--set", "SCM_COMMAND_IDLE_TIMEOUT=soon"])

    assert result.exit_code == 1
    assert "SCM_COMMAND_IDLE_TIMEOUT" in result.output


def test_describe_headerless_deployment_file(site: Path) -> None:
    (site / "site" / "repository" / ".deployment").write_text("command = deploy.sh\n", encoding="utf-8")

    result = CliRunner().invoke(main, ["describe"])

    assert result.exit_code == 1
    assert "Cannot read deployment file" in result.output
    assert "Traceback" not in result.output


def test_describe_deployment_file_repeated_key(site: Path) -> None:
    (site / "site" / "repository" / ".deployment").write_text(
        "[config]\nKUDU_SYNC_CMD = first\nKUDU_SYNC_CMD = second\n", encoding="utf-8"
    )

    data = _describe()

    assert data["environment_variables"]["KUDU_SYNC_CMD"] == "second"
