from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import pytest

from core.config import PublishSettings, resolve_settings
from core.domain.models import CommandResult, RegistryLookup
from core.services.hooks import WorkflowHooks

if TYPE_CHECKING:
    from collections.abc import Callable

_INPUT_NAMES = (
    "PROJECT_FILE_PATH",
    "BUILD_CONFIGURATION",
    "BUILD_PLATFORM",
    "PACKAGE_NAME",
    "VERSION_FILE_PATH",
    "VERSION_REGEX",
    "VERSION_GROUP",
    "VERSION_STATIC",
    "TAG_COMMIT",
    "TAG_FORMAT",
    "NUGET_KEY",
    "NUGET_SOURCE",
    "NUSPEC_FILE",
    "INCLUDE_SYMBOLS",
    "HTTP_TIMEOUT_SECONDS",
)

SOURCE = "https://api.nuget.test"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run every test in an empty directory with no workflow inputs set."""

    for name in _INPUT_NAMES:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"INPUT_{name}", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    path = tmp_path / "Foo.csproj"
    path.write_text(
        '<Project Sdk="Microsoft.NET.Sdk">\n'
        "  <PropertyGroup>\n"
        "    <TargetFramework>net8.0</TargetFramework>\n"
        "    <Version>2.1.0</Version>\n"
        "  </PropertyGroup>\n"
        "</Project>\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_settings(project_file: Path) -> Callable[..., PublishSettings]:
    def _make(**overrides: object) -> PublishSettings:
        values: dict[str, object] = {"project_file_path": project_file, "nuget_source": SOURCE}
        values.update(overrides)
        return resolve_settings(**values)

    return _make


class FakeRunner:
    """In-memory `CommandRunner`: records calls and fakes dotnet artifacts."""

    def __init__(
        self,
        *,
        produce: Sequence[str] = ("Foo.2.1.0.nupkg",),
        push_output: str = "Your package was pushed.\n",
        push_exit_code: int = 0,
        exit_codes: dict[str, int] | None = None,
    ) -> None:
        self.produce = list(produce)
        self.push_output = push_output
        self.push_exit_code = push_exit_code
        self.exit_codes = exit_codes or {}
        self.calls: list[list[str]] = []

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> CommandResult:
        cmd = list(args)
        self.calls.append(cmd)
        key = " ".join(cmd[:2])

        if cmd[:3] == ["dotnet", "nuget", "push"]:
            return CommandResult(args=cmd, exit_code=self.push_exit_code, output=self.push_output)

        exit_code = self.exit_codes.get(key, 0)
        if key == "dotnet pack" and exit_code == 0:
            out_dir = cwd or Path.cwd()
            for name in self.produce:
                (out_dir / name).write_bytes(b"PK")
        return CommandResult(args=cmd, exit_code=exit_code)

    def commands(self) -> list[str]:
        return [" ".join(call[:3]) for call in self.calls]


class RecordingSink:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def set_output(self, name: str, value: str) -> None:
        self.values[name] = value


class StaticRegistry:
    """Registry double returning a fixed lookup (or raising)."""

    def __init__(self, lookup: RegistryLookup | None = None, error: Exception | None = None) -> None:
        self.lookup_result = lookup
        self.error = error
        self.requested: list[str] = []

    async def lookup(self, package_name: str) -> RegistryLookup:
        self.requested.append(package_name)
        if self.error is not None:
            raise self.error
        assert self.lookup_result is not None
        return self.lookup_result


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def hooks() -> WorkflowHooks:
    return WorkflowHooks()
