# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : test_build_context.py
#   file_relpath : tests/context/test_build_context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build context document: keys, optional entries and environment isolation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from keyval.context.build import build_context, build_url
from tests.conftest import BUILD_CONTEXT

if TYPE_CHECKING:
    import pytest


def test_build_context_from_full_environment(build_env: dict[str, str]) -> None:
    """All required keys are read and ``build_url`` is computed."""
    assert build_context(build_env) == BUILD_CONTEXT


def test_missing_variables_yield_empty_strings() -> None:
    """Unset variables are empty strings, never errors."""
    doc = build_context({})

    assert doc == {
        "build_id": "",
        "build_name": "",
        "build_job": "",
        "build_pipeline": "",
        "build_team": "",
        "build_url": "/builds/",
    }


def test_optional_keys_present_only_when_non_empty(build_env: dict[str, str]) -> None:
    """``build_instance_vars`` and ``build_created_by`` are omitted when empty."""
    build_env["BUILD_PIPELINE_INSTANCE_VARS"] = ""
    build_env["BUILD_CREATED_BY"] = ""
    doc = build_context(build_env)
    assert "build_instance_vars" not in doc
    assert "build_created_by" not in doc

    build_env["BUILD_PIPELINE_INSTANCE_VARS"] = '{"branch":"main"}'
    build_env["BUILD_CREATED_BY"] = "alice"
    doc = build_context(build_env)
    assert doc["build_instance_vars"] == '{"branch":"main"}'
    assert doc["build_created_by"] == "alice"


def test_build_context_defaults_to_process_environment(
    concourse_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without an explicit mapping, ``os.environ`` is read."""
    monkeypatch.setenv("BUILD_CREATED_BY", "bob")

    doc = build_context()

    assert doc == {**BUILD_CONTEXT, "build_created_by": "bob"}


def test_build_context_returns_fresh_document(build_env: dict[str, str]) -> None:
    """Callers may mutate the returned document without affecting later calls."""
    first = build_context(build_env)
    first["build_id"] = "mutated"

    assert build_context(build_env)["build_id"] == "1234"


def test_build_url_format() -> None:
    """``build_url`` joins the external URL and the build id."""
    assert build_url("https://ci.example.com", "42") == "https://ci.example.com/builds/42"
