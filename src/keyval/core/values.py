# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : values.py
#   file_relpath : src/keyval/core/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Closed classification of mapping evaluation results.

Mapping expressions return dynamically typed values. Instead of scattering
``isinstance`` chains over the pipeline, every result is classified once into a
[`ResultKind`][keyval.core.values.ResultKind] and consumers ``match`` on the kind.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class ResultKind(str, Enum):
    """The kinds of value a mapping expression can produce.

    Attributes:
        TEXT: A ``str``.
        BYTES: A ``bytes``/``bytearray``.
        MAPPING: A mapping (JSON object).
        SEQUENCE: A list or tuple (JSON array).
        SCALAR: Numbers, booleans and any other object.
        NULL: ``None``.
    """

    TEXT = "text"
    BYTES = "bytes"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    NULL = "null"


def classify(value: object) -> ResultKind:
    """Return the [`ResultKind`][keyval.core.values.ResultKind] of ``value``."""
    if value is None:
        return ResultKind.NULL
    if isinstance(value, str):
        return ResultKind.TEXT
    if isinstance(value, (bytes, bytearray)):
        return ResultKind.BYTES
    if isinstance(value, Mapping):
        return ResultKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ResultKind.SEQUENCE
    return ResultKind.SCALAR


def type_name(value: object) -> str:
    """Return a user-facing type label for ``value``.

    Labels use JSON vocabulary where one exists (``string``, ``object``,
    ``array``, ``number``, ``bool``, ``null``) and fall back to the Python class
    name otherwise, e.g. ``datetime``.

    Args:
        value (object): The value to describe.

    Returns:
        str: The type label used in error messages.
    """
    match classify(value):
        case ResultKind.TEXT:
            return "string"
        case ResultKind.BYTES:
            return "bytes"
        case ResultKind.MAPPING:
            return "object"
        case ResultKind.SEQUENCE:
            return "array"
        case ResultKind.NULL:
            return "null"
        case ResultKind.SCALAR:
            if isinstance(value, bool):
                return "bool"
            if isinstance(value, (int, float)):
                return "number"
            return type(value).__name__
