# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running KeyVal the way Concourse does.

Concourse writes one JSON request to stdin and parses stdout as the response,
so these helpers take the request as a Python object and the tests read
``result.stdout`` (never ``result.output``, which also carries stderr log
lines).

`run_cli_in()` changes the process working directory to ``tmp_path`` before
invoking the CLI so that ``file()`` calls in ``check`` mappings, which resolve
against the working directory, see the test's files.
"""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from keyval.cli.main import cli
from keyval.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


def _encode(request: object | None) -> str | None:
    if request is None or isinstance(request, str):
        return request
    return json.dumps(request)


def run_cli(argv: str | Sequence[str] | None, *, request: object | None = None) -> Result:
    """Invoke the CLI without changing the working directory.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["in", "/tmp/x"]``.
        request (object | None): Request written to stdin; non-strings are JSON encoded.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=_encode(request), obj={})


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    request: object | None = None,
) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (str | Sequence[str] | None): CLI argument vector.
        request (object | None): Request written to stdin; non-strings are JSON encoded.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return run_cli(argv, request=request)
    finally:
        os.chdir(cwd)


def response(result: Result) -> Any:
    """Decode the JSON response printed on stdout."""
    return json.loads(result.stdout)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


def assert_failed_without_response(result: Result) -> None:
    """Assert that a failed run printed nothing on stdout and explained itself on stderr."""
    assert result.exit_code != ExitCode.SUCCESS
    assert result.stdout == ""
    assert "error:" in result.stderr.lower()
