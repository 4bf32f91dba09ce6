# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the KeyVal test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs.

Notes:
    Tests should never depend on the developer's real environment. Pipeline
    and resource tests pass an explicit ``environ`` mapping (see `build_env`);
    CLI tests, which necessarily read ``os.environ``, use `concourse_env`
    to install a controlled set of Concourse variables.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from keyval.config import logging
from keyval.context.build import BuildEnv
from keyval.expression.jinja import JinjaEvaluator

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


# The environment used by the put → get scenarios throughout the suite.
BUILD_ENV: dict[str, str] = {
    BuildEnv.BUILD_ID.value: "1234",
    BuildEnv.BUILD_NAME.value: "1",
    BuildEnv.BUILD_JOB_NAME.value: "first",
    BuildEnv.BUILD_PIPELINE_NAME.value: "test",
    BuildEnv.BUILD_TEAM_NAME.value: "main",
    BuildEnv.ATC_EXTERNAL_URL.value: "https://concourse.example.com",
}

# The build context document `build_context(BUILD_ENV)` must produce.
BUILD_CONTEXT: dict[str, str] = {
    "build_id": "1234",
    "build_name": "1",
    "build_job": "first",
    "build_pipeline": "test",
    "build_team": "main",
    "build_url": "https://concourse.example.com/builds/1234",
}

REF: str = "5541858611c514f02fd7e3f34d3fcad17908d933"


@pytest.fixture(autouse=True)
def silence_keyval_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure KeyVal's runtime log level is not forced via env during tests.

    CLI invocations reconfigure the root logger against the runner's streams;
    the session configuration is restored afterwards.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("KEYVAL_LOG_LEVEL", raising=False)
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)


def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure verbose (TRACE) logging for the test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def build_env() -> dict[str, str]:
    """Return a fresh copy of the scenario environment."""
    return dict(BUILD_ENV)


@pytest.fixture
def concourse_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Install the scenario environment into ``os.environ``.

    Optional variables are removed so the developer's shell cannot leak into
    the build context.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture used to set environment variables.

    Returns:
        dict[str, str]: The installed variables.
    """
    for var in BuildEnv:
        monkeypatch.delenv(var.value, raising=False)
    for name, value in BUILD_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(BUILD_ENV)


@pytest.fixture
def evaluator(tmp_path: Path, build_env: dict[str, str]) -> JinjaEvaluator:
    """Return an evaluator reading files under ``tmp_path``."""
    return JinjaEvaluator(base_dir=tmp_path, environ=build_env)


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Create ``tmp_path/repo/ref`` holding a git commit hash (no trailing newline).

    Returns:
        Path: ``tmp_path`` (the working directory containing ``repo/``).
    """
    (tmp_path / "repo").mkdir()
    (tmp_path / "repo" / "ref").write_text(REF, encoding="utf-8")
    return tmp_path
