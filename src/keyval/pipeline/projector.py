# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : projector.py
#   file_relpath : src/keyval/pipeline/projector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version projector: evaluate a mapping into a validated `Version`.

Steps:
    1. compile the mapping ([`CompileError`][keyval.core.errors.CompileError]);
    2. evaluate it against the input document
       ([`EvaluationError`][keyval.core.errors.EvaluationError]);
    3. require an object with string keys
       ([`ShapeError`][keyval.core.errors.ShapeError]);
    4. require string values, reporting *every* offending key at once
       ([`ValidationError`][keyval.core.errors.ValidationError]).

The metadata returned alongside the version is derived from the *input*
document, not from the version.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from keyval.config.logging import get_logger
from keyval.core.errors import ShapeError
from keyval.core.model import MetadataEntry, Version, metadata_from
from keyval.core.values import ResultKind, classify, type_name

if TYPE_CHECKING:
    from keyval.config.logging import KeyvalLogger
    from keyval.expression.protocols import CompiledExpression, Evaluator

logger: KeyvalLogger = get_logger(__name__)


@dataclass(frozen=True)
class Projection:
    """Result of [`project`][keyval.pipeline.projector.project].

    Attributes:
        version (Version): The new version.
        metadata (list[MetadataEntry]): String-valued entries of the input document.
    """

    version: Version
    metadata: list[MetadataEntry]


def project(
    mapping: str,
    document: Mapping[str, object],
    *,
    evaluator: Evaluator,
    role: str,
) -> Projection:
    """Evaluate ``mapping`` against ``document`` and validate the result as a version.

    Args:
        mapping (str): Mapping expression source.
        document (Mapping[str, object]): Input document.
        evaluator (Evaluator): Expression evaluator.
        role (str): Mapping role named in error messages (``initial`` or ``put``).

    Returns:
        Projection: The validated version and the input document's metadata.

    Raises:
        ShapeError: If the result is not an object with string keys.
    """
    expr: CompiledExpression = evaluator.compile(mapping, role=role)
    raw: object = evaluator.evaluate(expr, document)

    if classify(raw) is not ResultKind.MAPPING:
        raise ShapeError(role, type_name(raw))
    data = cast("Mapping[object, object]", raw)
    if not all(isinstance(k, str) for k in data):
        raise ShapeError(role, "object with non-string keys")

    # Raises ValidationError naming every non-string value.
    version: Version = Version.from_mapping(cast("Mapping[str, object]", data), role=role)
    logger.info("%s mapping produced version with keys: %s", role, sorted(version))
    return Projection(version=version, metadata=metadata_from(document))
