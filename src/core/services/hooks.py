"""Callbacks de progreso para capas de UI.

El core y los adaptadores nunca imprimen: informan a través de estos hooks y la
CLI decide cómo se ven las líneas en el log de Actions. Los warnings también se
guardan en `warnings` para que el resultado del workflow pueda listarlos.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class WorkflowHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    info: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    warnings: list[str] = field(default_factory=list)

    def emit_info(self, message: str) -> None:
        if self.info:
            self.info(message)

    def emit_warning(self, message: Warning | str) -> None:
        text = str(message)
        self.warnings.append(text)
        if self.warning:
            self.warning(text)
