# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : model.py
#   file_relpath : src/keyval/core/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Request and response model for the KeyVal resource.

Concourse sends every resource invocation a JSON object on stdin::

    {"source": {...}, "version": {...}, "params": {...}}

This module decodes that object into immutable, validated dataclasses:

- [`Version`][keyval.core.model.Version]: a string → string mapping.
- [`Source`][keyval.core.model.Source]: resource configuration.
- [`GetParams`][keyval.core.model.GetParams] / [`PutParams`][keyval.core.model.PutParams].
- [`Response`][keyval.core.model.Response]: the ``{version, metadata}`` reply of ``in``/``out``.

Decoding errors raise [`RequestError`][keyval.core.errors.RequestError] naming the
offending field. Non-string version values raise an aggregated
[`ValidationError`][keyval.core.errors.ValidationError].
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, cast

from keyval.config.logging import KeyvalLogger, get_logger
from keyval.constants import IDENTITY_MAPPING
from keyval.core.errors import RequestError, ShapeError, ValidationError, Violation
from keyval.core.guards import JsonObject, is_json_object, is_str_mapping, string_items
from keyval.core.values import type_name

logger: KeyvalLogger = get_logger(__name__)


def collect_violations(data: Mapping[str, object]) -> list[Violation]:
    """Return one `Violation` per non-string value in ``data``.

    The whole mapping is scanned; nothing is skipped after the first hit.
    """
    return [
        Violation(key=k, type_name=type_name(v)) for k, v in data.items() if not isinstance(v, str)
    ]


@dataclass(frozen=True, eq=False)
class Version(Mapping[str, str]):
    """Immutable key/value data passed between the jobs of a pipeline.

    A `Version` behaves like a read-only ``Mapping[str, str]`` and compares
    equal to any mapping with the same items.

    Attributes:
        data (Mapping[str, str]): The version entries (read-only view).
    """

    data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Snapshot the caller's mapping so later mutation cannot leak in.
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def __getitem__(self, key: str) -> str:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Version({dict(self.data)!r})"

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], *, role: str = "version") -> Version:
        """Build a `Version`, validating that every value is a string.

        Args:
            data (Mapping[str, object]): Candidate version entries.
            role (str): Mapping role named in error messages.

        Returns:
            Version: The validated version.

        Raises:
            ValidationError: If one or more values are not strings (all are reported).
        """
        violations: list[Violation] = collect_violations(data)
        if violations:
            raise ValidationError(role, violations)
        return cls(cast("Mapping[str, str]", data))

    @classmethod
    def from_json(cls, obj: object) -> Version:
        """Decode the ``version`` field of a request.

        Args:
            obj (object): The decoded JSON value.

        Returns:
            Version: The decoded version.

        Raises:
            ShapeError: If ``obj`` is not a JSON object.
        """
        if not is_json_object(obj):
            raise ShapeError("version", type_name(obj))
        return cls.from_mapping(obj)

    def to_dict(self) -> dict[str, str]:
        """Return a plain ``dict`` copy suitable for JSON serialization."""
        return dict(self.data)


@dataclass(frozen=True)
class MetadataEntry:
    """A ``{name, value}`` pair displayed by Concourse next to a version."""

    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON shape expected by Concourse."""
        return {"name": self.name, "value": self.value}


def metadata_from(document: Mapping[str, object]) -> list[MetadataEntry]:
    """Return the string-valued entries of ``document`` as name-sorted metadata."""
    return [MetadataEntry(name=k, value=v) for k, v in sorted(string_items(document).items())]


class FilesPolicy(str, Enum):
    """How `in` turns non-text file mapping results into bytes.

    Attributes:
        EXTENSION: Serialize structured results as JSON or YAML, chosen by the
            output file's extension.
        STRICT: Only strings and bytes are accepted.
    """

    EXTENSION = "extension"
    STRICT = "strict"


def _optional_str(obj: JsonObject, key: str, *, prefix: str) -> str:
    value: Any = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RequestError(f"{prefix}.{key}", f"expected string, got: {type_name(value)}")
    return value


def _optional_object(obj: object, name: str) -> JsonObject:
    if obj is None:
        return {}
    if not is_json_object(obj):
        raise RequestError(name, f"expected object, got: {type_name(obj)}")
    return obj


@dataclass(frozen=True)
class Source:
    """Resource configuration (the ``source`` block of the resource definition).

    Attributes:
        initial_mapping (str): Mapping evaluated by ``check`` when there is no prior version.
        archive (Mapping[str, Any] | None): Archive configuration. Accepted for
            compatibility; versions are not archived.
        files_policy (FilesPolicy): Coercion policy for ``in`` file mappings.
    """

    initial_mapping: str = ""
    archive: Mapping[str, Any] | None = None
    files_policy: FilesPolicy = FilesPolicy.EXTENSION

    @classmethod
    def from_json(cls, obj: object) -> Source:
        """Decode the ``source`` field of a request (``null`` yields defaults).

        Raises:
            RequestError: If a field has the wrong type or an unknown policy is named.
        """
        raw: JsonObject = _optional_object(obj, "source")
        initial_mapping: str = _optional_str(raw, "initial_mapping", prefix="source")

        archive_raw: Any = raw.get("archive")
        archive: Mapping[str, Any] | None = None
        if archive_raw is not None:
            archive = MappingProxyType(dict(_optional_object(archive_raw, "source.archive")))

        policy_raw: str = _optional_str(raw, "files_policy", prefix="source")
        try:
            files_policy = FilesPolicy(policy_raw) if policy_raw else FilesPolicy.EXTENSION
        except ValueError:
            choices: str = ", ".join(p.value for p in FilesPolicy)
            raise RequestError(
                "source.files_policy", f"unknown policy '{policy_raw}' (expected one of: {choices})"
            ) from None

        return cls(initial_mapping=initial_mapping, archive=archive, files_policy=files_policy)


@dataclass(frozen=True)
class GetParams:
    """Parameters of a ``get`` step.

    Attributes:
        files (Mapping[str, str]): Output filename → mapping expression.
    """

    files: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, obj: object) -> GetParams:
        """Decode the ``params`` field of an ``in`` request.

        Raises:
            RequestError: If ``files`` is not an object of strings.
        """
        raw: JsonObject = _optional_object(obj, "params")
        files: Any = raw.get("files")
        if files is None:
            return cls()
        if not is_str_mapping(files):
            raise RequestError(
                "params.files", "expected an object mapping file names to mapping strings"
            )
        return cls(files=MappingProxyType(dict(files)))


@dataclass(frozen=True)
class PutParams:
    """Parameters of a ``put`` step.

    Attributes:
        mapping (str): Mapping producing the new version; empty means identity.
    """

    mapping: str = ""

    @property
    def effective_mapping(self) -> str:
        """Return the configured mapping, or the identity mapping when empty."""
        return self.mapping or IDENTITY_MAPPING

    @classmethod
    def from_json(cls, obj: object) -> PutParams:
        """Decode the ``params`` field of an ``out`` request.

        Raises:
            RequestError: If ``mapping`` is not a string.
        """
        raw: JsonObject = _optional_object(obj, "params")
        return cls(mapping=_optional_str(raw, "mapping", prefix="params"))


@dataclass(frozen=True)
class Request:
    """A decoded resource request.

    Attributes:
        source (Source): Resource configuration.
        version (Version | None): The version, when the request carries one.
        params (JsonObject): Undecoded step parameters; decode with
            `GetParams.from_json` or `PutParams.from_json`.
    """

    source: Source
    version: Version | None
    params: JsonObject

    def require_version(self) -> Version:
        """Return the request's version.

        Raises:
            RequestError: If the request has no version.
        """
        if self.version is None:
            raise RequestError("version", "required")
        return self.version


def parse_request(payload: str | bytes) -> Request:
    """Decode a raw stdin payload into a [`Request`][keyval.core.model.Request].

    Args:
        payload (str | bytes): The JSON text read from stdin.

    Returns:
        Request: The decoded request.

    Raises:
        RequestError: If the payload is not a JSON object or a field is malformed.
    """
    try:
        doc: Any = json.loads(payload)
    except ValueError as exc:
        raise RequestError("<stdin>", f"not valid JSON: {exc}") from exc
    if not is_json_object(doc):
        raise RequestError("<stdin>", f"expected object, got: {type_name(doc)}")

    source: Source = Source.from_json(doc.get("source"))
    if source.archive is not None:
        logger.warning("source.archive is configured but version archiving is not supported")

    version_raw: Any = doc.get("version")
    version: Version | None = None
    if version_raw is not None:
        try:
            version = Version.from_json(version_raw)
        except ShapeError as exc:
            raise RequestError("version", str(exc)) from exc

    params: JsonObject = _optional_object(doc.get("params"), "params")
    logger.debug(
        "decoded request: source=%s version=%s params=%s", source, version, sorted(params)
    )
    return Request(source=source, version=version, params=params)


@dataclass(frozen=True)
class Response:
    """The ``{version, metadata}`` reply of ``in`` and ``out``."""

    version: Version
    metadata: list[MetadataEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Return the JSON shape expected by Concourse."""
        return {
            "version": self.version.to_dict(),
            "metadata": [m.to_dict() for m in self.metadata],
        }
