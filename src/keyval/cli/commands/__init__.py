# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click commands for the resource verbs (``check``, ``in``, ``out``) and ``version``."""

from __future__ import annotations
