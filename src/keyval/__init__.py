# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal Resource package.

KeyVal is a Concourse resource type that carries arbitrary key/value data
between the jobs of a pipeline. Versions are produced by evaluating mapping
expressions against the build context, and ``get`` steps can project the
version into additional files.
"""

from __future__ import annotations
