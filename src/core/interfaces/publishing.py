"""Contratos de los colaboradores externos del flujo de publicación.

Por qué Protocol:
- Define contratos estructurales (duck typing) sin herencia rígida.
- El workflow depende de estas abstracciones; los tests sustituyen
  subprocess, red y salida de Actions por fakes en memoria.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import CommandResult, PublishOutcome, RegistryLookup


@runtime_checkable
class CommandRunner(Protocol):
    """Ejecuta un comando externo y devuelve exit code + salida capturada.

    Reglas de diseño:
    - Síncrono y bloqueante: las herramientas corren una tras otra.
    - Con `capture=False` la salida va directa al log del proceso.
    """

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> CommandResult:
        ...


@runtime_checkable
class WorkflowOutputSink(Protocol):
    """Destino de los valores de salida (`KEY` -> `value`), separado del log."""

    def set_output(self, name: str, value: str) -> None:
        ...


@runtime_checkable
class RegistryClient(Protocol):
    """Consulta de versiones publicadas. Único punto asíncrono del flujo."""

    async def lookup(self, package_name: str) -> RegistryLookup:
        ...


@runtime_checkable
class PackagePublisher(Protocol):
    def publish(self, version: str) -> PublishOutcome:
        ...


@runtime_checkable
class CommitTagger(Protocol):
    def tag(self, version: str) -> str:
        """Crea y sube el tag; devuelve su nombre."""

        ...
