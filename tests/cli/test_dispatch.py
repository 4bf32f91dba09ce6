# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : test_dispatch.py
#   file_relpath : tests/cli/test_dispatch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: one executable serving the ``/opt/resource/{check,in,out}`` links."""

from __future__ import annotations

import io
import json
import sys
from typing import TYPE_CHECKING

import pytest

from keyval.cli.main import main
from keyval.core.exit_codes import ExitCode
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


def _run_main(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    *,
    prog: str,
    argv: list[str],
    request: object,
) -> tuple[int, str, str]:
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(request)))
    with pytest.raises(SystemExit) as excinfo:
        main(argv, prog=prog)
    captured = capsys.readouterr()
    code = excinfo.value.code
    return (code if isinstance(code, int) else 0), captured.out, captured.err


@mark_cli
def test_dispatch_check_by_program_name(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """``/opt/resource/check`` runs the check verb."""
    code, out, _ = _run_main(
        monkeypatch,
        capsys,
        prog="/opt/resource/check",
        argv=[],
        request={"source": {}, "version": {"a": "1"}},
    )

    assert code == ExitCode.SUCCESS
    assert json.loads(out) == [{"a": "1"}]


@mark_cli
def test_dispatch_out_by_program_name(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    concourse_env: dict[str, str],
    tmp_path: Path,
) -> None:
    """``/opt/resource/out DIR`` runs the out verb with DIR."""
    assert concourse_env
    code, out, _ = _run_main(
        monkeypatch,
        capsys,
        prog="/opt/resource/out",
        argv=[str(tmp_path)],
        request={"params": {"mapping": '{"id": build_id}'}},
    )

    assert code == ExitCode.SUCCESS
    assert json.loads(out)["version"] == {"id": "1234"}


@mark_cli
def test_dispatch_in_failure_exit_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    """Failures keep their exit codes when dispatched by program name."""
    code, out, err = _run_main(
        monkeypatch, capsys, prog="/opt/resource/in", argv=[str(tmp_path)], request={}
    )

    assert code == ExitCode.USAGE_ERROR
    assert out == ""
    assert "'version': required" in err


@mark_cli
def test_other_program_names_behave_like_the_group(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Any other name parses the arguments as ``keyval`` would."""
    code, out, _ = _run_main(
        monkeypatch,
        capsys,
        prog="keyval-resource",
        argv=["check"],
        request={"source": {}},
    )

    assert code == ExitCode.SUCCESS
    assert json.loads(out) == []
