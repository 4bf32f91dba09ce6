# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/context/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build context: the environment-derived facts available to every mapping."""

from __future__ import annotations

from keyval.context.build import BuildEnv, build_context

__all__: list[str] = ["BuildEnv", "build_context"]
