# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : test_model.py
#   file_relpath : tests/core/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Request decoding, version validation and response shapes."""

from __future__ import annotations

import json
import logging

import pytest

from keyval.core.errors import RequestError, ShapeError, ValidationError
from keyval.core.exit_codes import ExitCode
from keyval.core.model import (
    FilesPolicy,
    GetParams,
    MetadataEntry,
    PutParams,
    Response,
    Source,
    Version,
    metadata_from,
    parse_request,
)


def test_version_is_a_read_only_snapshot() -> None:
    """Mutating the source dict after construction does not change the version."""
    data: dict[str, str] = {"a": "1"}
    v = Version(data)
    data["a"] = "2"

    assert v["a"] == "1"
    assert v == {"a": "1"}
    with pytest.raises(TypeError):
        v.data["a"] = "3"  # type: ignore[index]


def test_version_from_mapping_reports_every_violation() -> None:
    """All non-string values are reported, sorted by key."""
    with pytest.raises(ValidationError) as excinfo:
        Version.from_mapping({"z": 1, "ok": "x", "a": None, "m": [1]}, role="put")

    err = excinfo.value
    assert err.keys == ["a", "m", "z"]
    assert err.exit_code == ExitCode.DATA_ERROR
    msg = str(err)
    assert msg.startswith("put mapping returned invalid result")
    assert "invalid version key 'a', expected string value, got: null" in msg
    assert "invalid version key 'm', expected string value, got: array" in msg
    assert "invalid version key 'z', expected string value, got: number" in msg
    assert "'ok'" not in msg


def test_version_from_json_rejects_non_objects() -> None:
    """A version must be a JSON object."""
    with pytest.raises(ShapeError, match="expected object, got: array"):
        Version.from_json(["a"])


def test_empty_version_is_valid() -> None:
    """``{}`` is a legal version."""
    assert Version.from_mapping({}).to_dict() == {}


def test_metadata_from_is_sorted_and_string_only() -> None:
    """Metadata entries are name-sorted and skip non-string values."""
    entries = metadata_from({"b": "2", "a": "1", "n": 3})

    assert entries == [MetadataEntry("a", "1"), MetadataEntry("b", "2")]


def test_source_defaults_from_null() -> None:
    """A missing ``source`` block yields the defaults."""
    source = Source.from_json(None)

    assert source.initial_mapping == ""
    assert source.archive is None
    assert source.files_policy is FilesPolicy.EXTENSION


def test_source_decodes_all_fields() -> None:
    """Known fields are decoded; the archive block is kept as configured."""
    source = Source.from_json(
        {
            "initial_mapping": '{"a": "b"}',
            "archive": {"url": "https://example.com"},
            "files_policy": "strict",
        }
    )

    assert source.initial_mapping == '{"a": "b"}'
    assert source.archive is not None and source.archive["url"] == "https://example.com"
    assert source.files_policy is FilesPolicy.STRICT


def test_source_rejects_unknown_policy() -> None:
    """An unknown ``files_policy`` names the field and the valid choices."""
    with pytest.raises(RequestError) as excinfo:
        Source.from_json({"files_policy": "loose"})

    assert excinfo.value.field == "source.files_policy"
    assert "extension, strict" in str(excinfo.value)


def test_source_rejects_non_string_mapping() -> None:
    """``initial_mapping`` must be a string."""
    with pytest.raises(RequestError, match="source.initial_mapping"):
        Source.from_json({"initial_mapping": 42})


def test_get_params_files() -> None:
    """``files`` must map names to mapping strings."""
    assert GetParams.from_json(None).files == {}
    assert dict(GetParams.from_json({"files": {"a.txt": "build_id"}}).files) == {
        "a.txt": "build_id"
    }
    with pytest.raises(RequestError, match="params.files"):
        GetParams.from_json({"files": {"a.txt": 1}})
    with pytest.raises(RequestError, match="params.files"):
        GetParams.from_json({"files": ["a.txt"]})


def test_put_params_identity_when_empty() -> None:
    """An empty or missing mapping falls back to the identity mapping."""
    assert PutParams.from_json(None).effective_mapping == "this"
    assert PutParams.from_json({"mapping": ""}).effective_mapping == "this"
    assert PutParams.from_json({"mapping": "{}"}).effective_mapping == "{}"


def test_parse_request_full() -> None:
    """A complete ``in`` request decodes into its parts."""
    request = parse_request(
        json.dumps(
            {
                "source": {},
                "version": {"a": "1"},
                "params": {"files": {"x": "a"}},
            }
        )
    )

    assert request.version == {"a": "1"}
    assert request.require_version() == {"a": "1"}
    assert request.params == {"files": {"x": "a"}}


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ("not json", "<stdin>"),
        ("[]", "<stdin>"),
        ('{"source": []}', "source"),
        ('{"version": "abc"}', "version"),
        ('{"params": 1}', "params"),
    ],
)
def test_parse_request_errors_name_the_field(payload: str, field: str) -> None:
    """Malformed requests raise `RequestError` naming the offending field."""
    with pytest.raises(RequestError) as excinfo:
        parse_request(payload)

    assert excinfo.value.field == field
    assert excinfo.value.exit_code == ExitCode.USAGE_ERROR


def test_parse_request_version_values_must_be_strings() -> None:
    """A version with non-string values is a validation failure, not a shape failure."""
    with pytest.raises(ValidationError) as excinfo:
        parse_request('{"version": {"a": 1}}')

    assert excinfo.value.keys == ["a"]


def test_require_version_when_missing() -> None:
    """``in`` needs a version; its absence is a request error."""
    with pytest.raises(RequestError, match="'version': required"):
        parse_request("{}").require_version()


def test_archive_is_accepted_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    """A configured archive does not fail the request."""
    with caplog.at_level(logging.WARNING):
        request = parse_request('{"source": {"archive": {"url": "x"}}}')

    assert request.source.archive is not None
    assert "archiving is not supported" in caplog.text


def test_response_to_dict() -> None:
    """Responses use the ``{version, metadata: [{name, value}]}`` shape."""
    resp = Response(Version({"a": "1"}), [MetadataEntry("build_id", "1234")])

    assert resp.to_dict() == {
        "version": {"a": "1"},
        "metadata": [{"name": "build_id", "value": "1234"}],
    }
