"""Publicación con la CLI de dotnet (build -> pack -> nuget push).

Por qué un adaptador:
- `dotnet` es una caja negra: aquí solo vive su contrato de invocación y
  cómo leer su salida.
- Se prueba con un `CommandRunner` falso, sin subprocess real.
"""

from __future__ import annotations

import re
from pathlib import Path

from adapters.command_runner import mask_secrets
from core.config import PublishSettings
from core.domain.models import PublishOutcome
from core.errors import MissingCredentialWarning, PublishToolError
from core.interfaces.publishing import CommandRunner
from core.services.hooks import WorkflowHooks

PACKAGE_SUFFIX = ".nupkg"
SYMBOLS_SUFFIX = ".snupkg"
_ERROR_LINE = re.compile(r"error.*")


def find_packages(directory: Path) -> list[Path]:
    """Artefactos `.nupkg`/`.snupkg` del directorio, ordenados por nombre."""

    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix in (PACKAGE_SUFFIX, SYMBOLS_SUFFIX)
    )


def find_push_error(output: str) -> str | None:
    """Primer fragmento `error...` de la salida del push, o None."""

    match = _ERROR_LINE.search(output)
    return match.group(0) if match else None


class DotnetPublisher:
    """Compila, empaqueta y sube el paquete al registry configurado."""

    def __init__(
        self,
        settings: PublishSettings,
        runner: CommandRunner,
        *,
        workdir: Path | None = None,
        hooks: WorkflowHooks | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._workdir = (workdir or Path.cwd()).resolve()
        self._hooks = hooks or WorkflowHooks()

    def build_args(self) -> list[str]:
        s = self._settings
        return [
            "dotnet",
            "build",
            "--configuration",
            s.build_configuration,
            str(s.project_file.resolve()),
            f"-property:Platform={s.build_platform}",
        ]

    def pack_args(self) -> list[str]:
        s = self._settings
        args = ["dotnet", "pack"]
        if s.include_symbols:
            args += ["--include-symbols", "-property:SymbolPackageFormat=snupkg"]
        if s.nuspec_file:
            args.append(f"-property:NuspecFile={s.nuspec_file.resolve()}")
        args += [
            "--no-build",
            "--configuration",
            s.build_configuration,
            str(s.project_file.resolve()),
            f"-property:Platform={s.build_platform}",
            "--output",
            ".",
        ]
        return args

    def push_args(self, api_key: str) -> list[str]:
        s = self._settings
        source = s.nuget_source.strip().rstrip("/")
        args = [
            "dotnet",
            "nuget",
            "push",
            f"*{PACKAGE_SUFFIX}",
            "--source",
            f"{source}/v3/index.json",
            "--api-key",
            api_key,
            "--skip-duplicate",
        ]
        if not s.include_symbols:
            args.append("--no-symbols")
        return args

    def _remove_stale_packages(self) -> None:
        for stale in find_packages(self._workdir):
            stale.unlink()

    def _run_step(self, name: str, args: list[str]) -> None:
        result = self._runner.run(args, cwd=self._workdir)
        if result.exit_code != 0:
            raise PublishToolError(f"dotnet {name} failed with exit code {result.exit_code}")

    def publish(self, version: str) -> PublishOutcome:
        s = self._settings
        self._hooks.emit_info(f"✨ found new version ({version}) of {s.package_id}")

        api_key = s.api_key
        if not api_key:
            self._hooks.emit_warning(MissingCredentialWarning())
            return PublishOutcome.skipped("no API key configured")

        self._hooks.emit_info(f"NuGet Source: {s.nuget_source}")

        self._remove_stale_packages()
        self._run_step("build", self.build_args())
        self._run_step("pack", self.pack_args())

        packages = find_packages(self._workdir)
        self._hooks.emit_info(f"Generated Package(s): {', '.join(p.name for p in packages)}")

        primary = [p for p in packages if p.suffix == PACKAGE_SUFFIX]
        symbols = [p for p in packages if p.suffix == SYMBOLS_SUFFIX]
        if not primary:
            raise PublishToolError(f"no {PACKAGE_SUFFIX} produced in {self._workdir}")

        result = self._runner.run(self.push_args(api_key), cwd=self._workdir, capture=True)
        output = mask_secrets(result.output, [api_key])
        if output:
            self._hooks.emit_info(output.rstrip())

        error_line = find_push_error(output)
        if error_line is not None:
            raise PublishToolError(error_line)
        if result.exit_code != 0:
            self._hooks.emit_warning(f"dotnet nuget push exited with code {result.exit_code}")

        package = primary[0]
        symbols_package = symbols[0] if symbols else None
        return PublishOutcome.published(
            package_name=package.name,
            package_path=str(package.resolve()),
            symbols_package_name=symbols_package.name if symbols_package else None,
            symbols_package_path=str(symbols_package.resolve()) if symbols_package else None,
        )
