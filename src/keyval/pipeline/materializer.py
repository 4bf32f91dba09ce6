# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : materializer.py
#   file_relpath : src/keyval/pipeline/materializer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File materializer: evaluate per-file mappings and write the results.

Each entry of ``params.files`` maps an output file name to a mapping
expression. The expression is evaluated against the build context overlaid
with the version, and its result becomes the file content:

- strings are written UTF-8 encoded, bytes verbatim;
- other results depend on the [`FilesPolicy`][keyval.core.model.FilesPolicy]:
    - ``strict``: rejected with
      [`UnsupportedTypeError`][keyval.core.errors.UnsupportedTypeError];
    - ``extension`` (default): serialized by file extension, ``.json`` as JSON and
      ``.yml``/``.yaml`` as YAML; any other extension raises
      [`UnknownExtensionError`][keyval.core.errors.UnknownExtensionError].

Files are processed in sorted name order and the first failure aborts the
run (fail-fast). Files written before the failure are left in place.
"""

from __future__ import annotations

import json
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, cast

import yaml

from keyval.config.logging import get_logger
from keyval.core.errors import UnknownExtensionError, UnsupportedTypeError
from keyval.core.model import FilesPolicy
from keyval.core.values import ResultKind, classify, type_name
from keyval.pipeline.writer import WriteResult, write_bytes

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from keyval.config.logging import KeyvalLogger
    from keyval.expression.protocols import CompiledExpression, Evaluator

logger: KeyvalLogger = get_logger(__name__)


def file_role(filename: str) -> str:
    """Return the mapping role used in error messages for ``filename``."""
    return f"file '{filename}'"


def _encode_utf8(filename: str, text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise UnsupportedTypeError(filename, "string", f"not encodable as UTF-8: {exc}") from exc


def _serialize_by_extension(filename: str, value: object) -> bytes:
    ext: str = PurePosixPath(filename).suffix.lower()
    if ext == ".json":
        try:
            text: str = json.dumps(value, indent=2, sort_keys=True) + "\n"
        except (TypeError, ValueError) as exc:
            raise UnsupportedTypeError(
                filename, type_name(value), f"cannot serialize as json: {exc}"
            ) from exc
        return _encode_utf8(filename, text)
    if ext in (".yml", ".yaml"):
        try:
            text = yaml.safe_dump(
                value, default_flow_style=False, sort_keys=True, allow_unicode=True
            )
        except yaml.YAMLError as exc:
            raise UnsupportedTypeError(
                filename, type_name(value), f"cannot serialize as yaml: {exc}"
            ) from exc
        return _encode_utf8(filename, text)
    raise UnknownExtensionError(filename, type_name(value))


def encode_result(filename: str, value: object, *, policy: FilesPolicy) -> bytes:
    """Turn a file mapping result into file content.

    Args:
        filename (str): Output file name (its extension selects the serializer).
        value (object): The mapping result.
        policy (FilesPolicy): Coercion policy for non-text results.

    Returns:
        bytes: The file content.

    Raises:
        UnsupportedTypeError: If the value cannot be encoded under ``policy``.
        UnknownExtensionError: If no serializer matches the file extension.
    """
    match classify(value):
        case ResultKind.TEXT:
            return _encode_utf8(filename, cast("str", value))
        case ResultKind.BYTES:
            return bytes(cast("bytes", value))
        case _ if policy is FilesPolicy.STRICT:
            raise UnsupportedTypeError(filename, type_name(value))
        case _:
            return _serialize_by_extension(filename, value)


def materialize(
    files: Mapping[str, str],
    document: Mapping[str, object],
    output_dir: Path,
    *,
    evaluator: Evaluator,
    policy: FilesPolicy = FilesPolicy.EXTENSION,
) -> list[Path]:
    """Evaluate each file mapping against ``document`` and write the results.

    Args:
        files (Mapping[str, str]): Output file name → mapping expression.
        document (Mapping[str, object]): Build context overlaid with the version.
        output_dir (Path): Directory the files are written to.
        evaluator (Evaluator): Expression evaluator.
        policy (FilesPolicy): Coercion policy for non-text results.

    Returns:
        list[Path]: Paths written, in processing order.
    """
    written: list[Path] = []
    for filename in sorted(files):
        role: str = file_role(filename)
        expr: CompiledExpression = evaluator.compile(files[filename], role=role)
        value: object = evaluator.evaluate(expr, document)
        data: bytes = encode_result(filename, value, policy=policy)
        result: WriteResult = write_bytes(output_dir, filename, data)
        logger.info("materialized %s (%d bytes)", filename, result.bytes_written)
        written.append(result.path)
    return written
