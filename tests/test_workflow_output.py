from __future__ import annotations

import io
from pathlib import Path

from adapters.workflow_output import GithubOutputFileSink, SetOutputCommandSink, build_output_sink


def test_set_output_command_lines() -> None:
    stream = io.StringIO()
    sink = SetOutputCommandSink(stream)

    sink.set_output("PACKAGE_NAME", "Foo.2.1.0.nupkg")
    sink.set_output("VERSION", "v2.1.0")

    assert stream.getvalue() == (
        "::set-output name=PACKAGE_NAME::Foo.2.1.0.nupkg\n"
        "::set-output name=VERSION::v2.1.0\n"
    )


def test_github_output_file_is_appended(tmp_path: Path) -> None:
    output = tmp_path / "github_output"
    output.write_text("previous=1\n", encoding="utf-8")

    GithubOutputFileSink(output).set_output("VERSION", "v2.1.0")

    assert output.read_text(encoding="utf-8") == "previous=1\nVERSION=v2.1.0\n"


def test_sink_selection(make_settings, tmp_path: Path) -> None:
    assert isinstance(build_output_sink(make_settings()), SetOutputCommandSink)
    assert isinstance(
        build_output_sink(make_settings(github_output=tmp_path / "out")),
        GithubOutputFileSink,
    )
