from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import respx
from typer.testing import CliRunner

from cli.main import app
from tests.conftest import SOURCE

URL = f"{SOURCE}/v3-flatcontainer/foo/index.json"

cli_runner = CliRunner()


def test_run_without_project_file_exits_with_error() -> None:
    result = cli_runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "##[error]😭 project file not found" in result.output


def test_check_reports_publish_decision(monkeypatch: pytest.MonkeyPatch, project_file: Path) -> None:
    monkeypatch.setenv("INPUT_PROJECT_FILE_PATH", str(project_file))
    monkeypatch.setenv("INPUT_NUGET_SOURCE", SOURCE)

    with respx.mock(assert_all_called=True) as mock:
        mock.get(URL).mock(return_value=httpx.Response(404))
        result = cli_runner.invoke(app, ["check"])

    assert result.exit_code == 0, result.output
    assert "Version: 2.1.0" in result.output
    assert "publish" in result.output
    assert "::set-output" not in result.output


def test_check_with_static_version_option(project_file: Path) -> None:
    with respx.mock(assert_all_called=True) as mock:
        mock.get(URL).mock(return_value=httpx.Response(200, json={"versions": ["3.0.0"]}))
        result = cli_runner.invoke(
            app,
            ["check", "--project-file", str(project_file), "--nuget-source", SOURCE, "--version-static", "3.0.0"],
        )

    assert result.exit_code == 0, result.output
    assert "Version: 3.0.0" in result.output
    assert "skip" in result.output


def test_check_fails_on_network_error(project_file: Path) -> None:
    with respx.mock(assert_all_called=True) as mock:
        mock.get(URL).mock(side_effect=httpx.ConnectError("no route to host"))
        result = cli_runner.invoke(app, ["check", "--project-file", str(project_file), "--nuget-source", SOURCE])

    assert result.exit_code == 1
    assert "##[error]😭 error: no route to host" in result.output


def test_run_skips_when_version_exists(monkeypatch: pytest.MonkeyPatch, project_file: Path) -> None:
    monkeypatch.setenv("INPUT_PROJECT_FILE_PATH", str(project_file))
    monkeypatch.setenv("NUGET_SOURCE", SOURCE)
    monkeypatch.setenv("INPUT_NUGET_KEY", "k3y")

    with respx.mock(assert_all_called=True) as mock:
        mock.get(URL).mock(return_value=httpx.Response(200, json={"versions": ["2.0.0", "2.1.0"]}))
        result = cli_runner.invoke(app, ["run"])

    assert result.exit_code == 0, result.output
    assert "Last published version: 2.1.0 - Published packages: 2" in result.output
    assert "executing:" not in result.output


def test_run_warns_on_inconclusive_status(monkeypatch: pytest.MonkeyPatch, project_file: Path) -> None:
    monkeypatch.setenv("INPUT_PROJECT_FILE_PATH", str(project_file))
    monkeypatch.setenv("INPUT_NUGET_SOURCE", SOURCE)

    with respx.mock(assert_all_called=True) as mock:
        mock.get(URL).mock(return_value=httpx.Response(500))
        result = cli_runner.invoke(app, ["run"])

    assert result.exit_code == 0, result.output
    assert f"##[warning]😢 error calling nuget api '{URL}' with status code: '500'" in result.output
