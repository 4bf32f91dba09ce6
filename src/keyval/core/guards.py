# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : guards.py
#   file_relpath : src/keyval/core/guards.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type guards for JSON values decoded from a Concourse request.

These `TypeGuard`-based predicates help Pyright narrow values coming out of
`json.loads()` (which are typed as `Any`) into the plain-Python shapes used by
[`keyval.core.model`][keyval.core.model].
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeGuard

JsonObject = dict[str, Any]


def is_json_object(obj: object) -> TypeGuard[JsonObject]:
    """Type guard for a decoded JSON object.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[JsonObject]: ``True`` if ``obj`` is a ``dict`` with string keys.
    """
    return isinstance(obj, dict) and all(isinstance(k, str) for k in obj)


def is_mapping(obj: object) -> TypeGuard[Mapping[object, object]]:
    """Type guard for a Mapping value.

    Checks only that the value is a ``Mapping``; does not validate item types.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[Mapping[object, object]]: True if obj is a Mapping.
    """
    return isinstance(obj, Mapping)


def is_str_mapping(obj: object) -> TypeGuard[Mapping[str, str]]:
    """Type guard for a mapping whose keys and values are all strings.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[Mapping[str, str]]: True if obj is a ``Mapping[str, str]``.
    """
    return is_mapping(obj) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in obj.items()
    )


def string_items(obj: Mapping[str, object]) -> dict[str, str]:
    """Return the string-valued entries of ``obj`` (other entries are dropped)."""
    return {k: v for k, v in obj.items() if isinstance(v, str)}
