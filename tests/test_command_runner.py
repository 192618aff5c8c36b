from __future__ import annotations

import sys
from pathlib import Path

import pytest

from adapters.command_runner import SubprocessRunner, mask_secrets
from core.errors import PublishToolError


def test_mask_secrets_ignores_empty_values() -> None:
    assert mask_secrets("push --api-key abc123", ["abc123", None, ""]) == "push --api-key ***"


def test_captured_output_and_exit_code(tmp_path: Path) -> None:
    lines: list[str] = []
    runner = SubprocessRunner(echo=lines.append, secrets=["s3cret"])

    result = runner.run(
        [sys.executable, "-c", "import os, sys; print(os.getcwd()); sys.exit(3)", "s3cret"],
        cwd=tmp_path,
        capture=True,
    )

    assert result.exit_code == 3
    assert Path(result.output.strip()).resolve() == tmp_path.resolve()
    assert len(lines) == 1
    assert lines[0].startswith("executing: [")
    assert "s3cret" not in lines[0]


def test_uncaptured_run_reports_exit_code() -> None:
    result = SubprocessRunner().run([sys.executable, "-c", "pass"])

    assert result.exit_code == 0
    assert result.output == ""


def test_missing_executable() -> None:
    with pytest.raises(PublishToolError, match="command not found"):
        SubprocessRunner().run(["definitely-not-a-real-tool-1b2c3d"])
