# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime configuration helpers (logging)."""

from __future__ import annotations
