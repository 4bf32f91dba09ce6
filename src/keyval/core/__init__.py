# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core domain types: versions, requests, errors and exit codes.

Nothing in this package depends on Click or on the process environment.
"""

from __future__ import annotations
