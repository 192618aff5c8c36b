"""Salida de valores del workflow (outputs de GitHub Actions).

Por qué separado del log:
- Los outputs son datos para pasos posteriores, no mensajes para humanos.
- Otro entorno de CI puede redirigirlos sin tocar el Core.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from core.config import PublishSettings
from core.interfaces.publishing import WorkflowOutputSink


class SetOutputCommandSink:
    """Escribe `::set-output name=KEY::value` en stdout (protocolo clásico)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def set_output(self, name: str, value: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(f"::set-output name={name}::{value}\n")
        stream.flush()


class GithubOutputFileSink:
    """Añade `KEY=value` al fichero apuntado por `$GITHUB_OUTPUT`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def set_output(self, name: str, value: str) -> None:
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(f"{name}={value}\n")


def build_output_sink(settings: PublishSettings) -> WorkflowOutputSink:
    if settings.github_output is not None:
        return GithubOutputFileSink(settings.github_output)
    return SetOutputCommandSink()
