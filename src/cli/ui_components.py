"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Las líneas de log usan las anotaciones de GitHub Actions (`##[warning]`,
  `##[error]`), así que se imprimen sin markup de Rich.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from core.services.hooks import WorkflowHooks
from core.services.publish_workflow import WorkflowResult


def print_line(console: Console, message: str) -> None:
    console.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)


def print_warning(console: Console, message: str) -> None:
    print_line(console, f"##[warning]😢 {message}")


def print_error(console: Console, message: str) -> None:
    print_line(console, f"##[error]😭 {message}")


def build_console_hooks(console: Console) -> WorkflowHooks:
    """Hooks que vuelcan el progreso del workflow en la consola."""

    return WorkflowHooks(
        info=lambda message: print_line(console, message),
        warning=lambda message: print_warning(console, message),
    )


def build_check_table(result: WorkflowResult, package_name: str) -> Table:
    """Tabla resumen del comando `check` (nada se publica)."""

    table = Table(title="NuGet publish check")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Package", package_name)
    table.add_row("Version", result.version or "-")
    if result.lookup is not None:
        status = result.lookup.status.value
        if result.lookup.status_code is not None:
            status = f"{status} (HTTP {result.lookup.status_code})"
        table.add_row("Registry", status)
        table.add_row("Latest published", result.lookup.latest_version or "-")
    if result.decision is not None:
        verdict = "publish" if result.decision.publish else "skip"
        table.add_row("Decision", f"{verdict}: {result.decision.reason}")
    if result.error is not None:
        table.add_row("Error", str(result.error))
    return table
