"""CLI (Typer) del publicador condicional de NuGet.

Comandos:
- `run`: workflow completo (versión -> registry -> build/pack/push -> tag).
- `check`: igual hasta la decisión, sin publicar nada.

Los inputs llegan por entorno (`INPUT_*` en GitHub Actions); las opciones de
la CLI, si se pasan, tienen prioridad.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
from rich.console import Console

from adapters.command_runner import SubprocessRunner
from adapters.dotnet_publisher import DotnetPublisher
from adapters.git_tagger import GitTagger
from adapters.nuget_registry import NuGetRegistryClient
from adapters.workflow_output import build_output_sink
from cli.ui_components import build_check_table, build_console_hooks, print_error
from core.config import PublishSettings, resolve_settings
from core.errors import ConfigurationError
from core.services.hooks import WorkflowHooks
from core.services.publish_workflow import PublishWorkflow, WorkflowResult

app = typer.Typer(no_args_is_help=True, help="Publish a NuGet package when its version is new.")

_console = Console()

ProjectOption = typer.Option(None, "--project-file", help="Project file to build and pack.")
VersionOption = typer.Option(None, "--version-static", help="Use this version instead of reading a file.")
SourceOption = typer.Option(None, "--nuget-source", help="NuGet registry base URL.")


def _load_settings(
    project_file: Path | None,
    version_static: str | None,
    nuget_source: str | None,
) -> PublishSettings:
    try:
        return resolve_settings(
            project_file_path=project_file,
            version_static=version_static,
            nuget_source=nuget_source,
        )
    except ConfigurationError as exc:
        print_error(_console, str(exc))
        raise typer.Exit(code=1) from exc


def build_workflow(settings: PublishSettings, hooks: WorkflowHooks) -> PublishWorkflow:
    runner = SubprocessRunner(echo=hooks.emit_info, secrets=[settings.api_key])
    return PublishWorkflow(
        settings=settings,
        registry=NuGetRegistryClient(settings),
        publisher=DotnetPublisher(settings, runner, hooks=hooks),
        tagger=GitTagger(settings, runner, hooks=hooks),
        sink=build_output_sink(settings),
        hooks=hooks,
    )


def _exit_on_failure(result: WorkflowResult) -> None:
    if result.failed:
        print_error(_console, str(result.error))
        raise typer.Exit(code=1)


@app.command(name="run")
def run_command(
    project_file: Path | None = ProjectOption,
    version_static: str | None = VersionOption,
    nuget_source: str | None = SourceOption,
) -> None:
    """Publish the package (and tag the commit) if the version is not in the registry."""

    settings = _load_settings(project_file, version_static, nuget_source)
    hooks = build_console_hooks(_console)
    result = asyncio.run(build_workflow(settings, hooks).run())
    _exit_on_failure(result)


@app.command(name="check")
def check_command(
    project_file: Path | None = ProjectOption,
    version_static: str | None = VersionOption,
    nuget_source: str | None = SourceOption,
) -> None:
    """Show the version, the registry state and the decision without publishing."""

    settings = _load_settings(project_file, version_static, nuget_source)
    hooks = build_console_hooks(_console)
    result = asyncio.run(build_workflow(settings, hooks).run(dry_run=True))

    _console.print(build_check_table(result, settings.package_id))
    _exit_on_failure(result)


def run() -> None:
    # Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    app()
