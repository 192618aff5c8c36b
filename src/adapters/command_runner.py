"""Shared subprocess runner for the dotnet and git adapters."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Sequence

from core.domain.models import CommandResult
from core.errors import PublishToolError

MASK = "***"


def mask_secrets(text: str, secrets: Sequence[str | None]) -> str:
    for secret in secrets:
        if secret:
            text = text.replace(secret, MASK)
    return text


class SubprocessRunner:
    """Runs one external command at a time, never through a shell.

    `echo` receives the `executing: [...]` line before each call; values in
    `secrets` are masked in that line.
    """

    def __init__(
        self,
        *,
        echo: Callable[[str], None] | None = None,
        secrets: Sequence[str | None] = (),
    ) -> None:
        self._echo = echo
        self._secrets = list(secrets)

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> CommandResult:
        cmd = [str(arg) for arg in args]
        if self._echo:
            self._echo(f"executing: [{mask_secrets(' '.join(cmd), self._secrets)}]")

        try:
            if capture:
                # Only stdout is captured; stderr stays attached to the log.
                proc = subprocess.run(
                    cmd,
                    cwd=cwd,
                    stdout=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                )
                return CommandResult(args=cmd, exit_code=proc.returncode, output=proc.stdout or "")
            proc = subprocess.run(cmd, cwd=cwd)
        except FileNotFoundError as exc:
            raise PublishToolError(f"command not found: {cmd[0]}") from exc
        return CommandResult(args=cmd, exit_code=proc.returncode)
