# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : build.py
#   file_relpath : src/keyval/context/build.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build context document builder.

Concourse exposes build metadata to resource scripts through environment
variables. This module is the only place that reads them: everything else in
KeyVal works on the plain ``dict[str, str]`` returned by
[`build_context`][keyval.context.build.build_context], which keeps the pipeline a
pure function of its explicit inputs.

Document keys:

| Key                   | Variable                       | Notes                      |
|-----------------------|--------------------------------|----------------------------|
| `build_id`            | `BUILD_ID`                     |                            |
| `build_name`          | `BUILD_NAME`                   |                            |
| `build_job`           | `BUILD_JOB_NAME`               |                            |
| `build_pipeline`      | `BUILD_PIPELINE_NAME`          |                            |
| `build_team`          | `BUILD_TEAM_NAME`              |                            |
| `build_instance_vars` | `BUILD_PIPELINE_INSTANCE_VARS` | omitted when empty         |
| `build_created_by`    | `BUILD_CREATED_BY`             | omitted when empty         |
| `build_url`           | `ATC_EXTERNAL_URL`, `BUILD_ID` | `{url}/builds/{id}`        |
"""

from __future__ import annotations

import os
from enum import Enum
from typing import TYPE_CHECKING

from keyval.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from keyval.config.logging import KeyvalLogger

logger: KeyvalLogger = get_logger(__name__)


class BuildEnv(str, Enum):
    """Environment variables Concourse sets for resource scripts."""

    BUILD_ID = "BUILD_ID"
    BUILD_NAME = "BUILD_NAME"
    BUILD_JOB_NAME = "BUILD_JOB_NAME"
    BUILD_PIPELINE_NAME = "BUILD_PIPELINE_NAME"
    BUILD_TEAM_NAME = "BUILD_TEAM_NAME"
    BUILD_PIPELINE_INSTANCE_VARS = "BUILD_PIPELINE_INSTANCE_VARS"
    BUILD_CREATED_BY = "BUILD_CREATED_BY"
    ATC_EXTERNAL_URL = "ATC_EXTERNAL_URL"


# Document key -> variable, always present (empty string when unset).
_REQUIRED_KEYS: tuple[tuple[str, BuildEnv], ...] = (
    ("build_id", BuildEnv.BUILD_ID),
    ("build_name", BuildEnv.BUILD_NAME),
    ("build_job", BuildEnv.BUILD_JOB_NAME),
    ("build_pipeline", BuildEnv.BUILD_PIPELINE_NAME),
    ("build_team", BuildEnv.BUILD_TEAM_NAME),
)

# Document key -> variable, omitted when the variable is empty.
_OPTIONAL_KEYS: tuple[tuple[str, BuildEnv], ...] = (
    ("build_instance_vars", BuildEnv.BUILD_PIPELINE_INSTANCE_VARS),
    ("build_created_by", BuildEnv.BUILD_CREATED_BY),
)


def build_url(external_url: str, build_id: str) -> str:
    """Return the web UI URL of a build."""
    return f"{external_url}/builds/{build_id}"


def build_context(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the build context document for the current invocation.

    Args:
        environ (Mapping[str, str] | None): Environment to read; defaults to ``os.environ``.

    Returns:
        dict[str, str]: A fresh document; callers may mutate it freely.
    """
    env: Mapping[str, str] = os.environ if environ is None else environ

    doc: dict[str, str] = {key: env.get(var.value, "") for key, var in _REQUIRED_KEYS}
    doc["build_url"] = build_url(
        env.get(BuildEnv.ATC_EXTERNAL_URL.value, ""),
        env.get(BuildEnv.BUILD_ID.value, ""),
    )
    for key, var in _OPTIONAL_KEYS:
        value: str = env.get(var.value, "")
        if value:
            doc[key] = value

    logger.trace("build context: %s", doc)
    return doc
