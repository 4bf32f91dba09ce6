# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version projection and file materialization.

- [`projector`][keyval.pipeline.projector]: mapping + document → `Version`.
- [`materializer`][keyval.pipeline.materializer]: file mappings + document → files.
- [`writer`][keyval.pipeline.writer]: low-level output file writes.
"""

from __future__ import annotations

from keyval.pipeline.materializer import encode_result, materialize
from keyval.pipeline.projector import Projection, project

__all__: list[str] = ["Projection", "encode_result", "materialize", "project"]
