# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : errors.py
#   file_relpath : src/keyval/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Domain exceptions raised while producing or projecting versions.

These exceptions are Click-free so the pipeline can be used (and tested)
without the CLI. Every exception carries the exit code the CLI should use and a
message naming the mapping role, file or key at fault, so an operator can find
the faulty piece of pipeline configuration from the build log alone.

Mapping roles used in messages:
    - ``initial``: ``source.initial_mapping`` evaluated by ``check``.
    - ``put``: ``params.mapping`` evaluated by ``out``.
    - ``file 'NAME'``: a ``params.files`` entry evaluated by ``in``.
    - ``version``: a version object received from Concourse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from keyval.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Sequence

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".json", ".yml", ".yaml")


class KeyvalError(Exception):
    """Base class for all KeyVal errors."""

    exit_code: ClassVar[ExitCode] = ExitCode.FAILURE


class RequestError(KeyvalError):
    """The request read from stdin is malformed.

    Args:
        field (str): Dotted path of the offending request field (e.g. ``params.files``).
        detail (str): What is wrong with it.
    """

    exit_code = ExitCode.USAGE_ERROR

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"invalid request field '{field}': {detail}")


class CompileError(KeyvalError):
    """A mapping expression is syntactically or semantically invalid."""

    exit_code = ExitCode.CONFIG_ERROR

    def __init__(self, role: str, detail: str) -> None:
        self.role = role
        self.detail = detail
        super().__init__(f"error parsing {role} mapping: {detail}")


class EvaluationError(KeyvalError):
    """A mapping expression failed while being evaluated."""

    exit_code = ExitCode.DATA_ERROR

    def __init__(self, role: str, detail: str) -> None:
        self.role = role
        self.detail = detail
        super().__init__(f"error executing {role} mapping: {detail}")


class ShapeError(KeyvalError):
    """A mapping returned something other than an object where one was required."""

    exit_code = ExitCode.DATA_ERROR

    def __init__(self, role: str, type_name: str) -> None:
        self.role = role
        self.type_name = type_name
        super().__init__(
            f"{role} mapping returned invalid result, expected object, got: {type_name}"
        )


@dataclass(frozen=True)
class Violation:
    """A single non-string value found in a version mapping."""

    key: str
    type_name: str

    def describe(self) -> str:
        """Return the one-line description used in `ValidationError` messages."""
        return f"invalid version key '{self.key}', expected string value, got: {self.type_name}"


class ValidationError(KeyvalError):
    """One or more values of a version mapping are not strings.

    All violations are collected before this is raised; ``violations`` holds
    every offending key in sorted order.
    """

    exit_code = ExitCode.DATA_ERROR

    def __init__(self, role: str, violations: Sequence[Violation]) -> None:
        self.role = role
        self.violations: tuple[Violation, ...] = tuple(sorted(violations, key=lambda v: v.key))
        details: str = "; ".join(v.describe() for v in self.violations)
        super().__init__(f"{role} mapping returned invalid result: {details}")

    @property
    def keys(self) -> list[str]:
        """Return the offending keys."""
        return [v.key for v in self.violations]


class UnsupportedTypeError(KeyvalError):
    """A file mapping result cannot be turned into file content."""

    exit_code = ExitCode.DATA_ERROR

    def __init__(self, filename: str, type_name: str, detail: str | None = None) -> None:
        self.filename = filename
        self.type_name = type_name
        reason: str = detail or "expected string or bytes"
        super().__init__(
            f"unsupported result ({type_name}) returned by '{filename}' file mapping: {reason}"
        )


class UnknownExtensionError(KeyvalError):
    """A structured file mapping result has no serializer for the file's extension."""

    exit_code = ExitCode.CONFIG_ERROR

    def __init__(self, filename: str, type_name: str) -> None:
        self.filename = filename
        self.type_name = type_name
        super().__init__(
            f"unclear how to serialize result ({type_name}) returned by '{filename}' "
            f"file mapping: try adding a supported file extension "
            f"({', '.join(SUPPORTED_EXTENSIONS)})"
        )


class OutputIOError(KeyvalError):
    """An output file could not be created or written."""

    exit_code = ExitCode.IO_ERROR

    def __init__(self, filename: str, detail: str) -> None:
        self.filename = filename
        self.detail = detail
        super().__init__(f"error writing '{filename}' file: {detail}")
