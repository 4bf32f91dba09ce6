# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : functions.py
#   file_relpath : src/keyval/expression/functions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Functions and filters available to mapping expressions.

Functions (called by name):

| Function                 | Result                                               |
|--------------------------|------------------------------------------------------|
| `ksuid()`                | 27 character K-Sortable Unique IDentifier            |
| `uuid_v4()`              | random UUID string                                   |
| `now()`                  | current UTC time, ISO 8601                           |
| `timestamp_unix()`       | current Unix time in seconds (number)                |
| `file(path)`             | UTF-8 text of a file under the working directory     |
| `env(name, default="")`  | value of an environment variable                     |

Filters (applied with ``|``):

| Filter        | Result                                      |
|---------------|---------------------------------------------|
| `format_json` | JSON text (2-space indent)                  |
| `format_yaml` | YAML text (block style)                     |
| `parse_json`  | value decoded from JSON text                |
| `parse_yaml`  | value decoded from YAML text                |
| `b64encode`   | base64 text of a string or bytes            |
| `b64decode`   | bytes decoded from base64 text              |
| `bytes`       | UTF-8 encoded bytes of a string             |
"""

from __future__ import annotations

import base64
import json
import os
import secrets
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Final

import yaml

if TYPE_CHECKING:
    from collections.abc import Mapping

# KSUID layout: 4-byte timestamp (seconds since KSUID_EPOCH) + 16 random bytes,
# base62-encoded and left-padded to 27 characters.
KSUID_EPOCH: Final[int] = 1_400_000_000
KSUID_PAYLOAD_BYTES: Final[int] = 16
KSUID_LENGTH: Final[int] = 27
_BASE62: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def ksuid(*, at: float | None = None) -> str:
    """Return a new KSUID string.

    Args:
        at (float | None): Unix timestamp to embed; defaults to the current time.

    Returns:
        str: A 27 character base62 identifier that sorts by creation time.

    Raises:
        ValueError: If ``at`` falls outside the 32-bit range after the KSUID epoch.
    """
    ts: int = int(time.time() if at is None else at) - KSUID_EPOCH
    if not 0 <= ts < 2**32:
        raise ValueError(f"timestamp {at} is outside the KSUID range")
    raw: bytes = ts.to_bytes(4, "big") + secrets.token_bytes(KSUID_PAYLOAD_BYTES)
    n: int = int.from_bytes(raw, "big")
    chars: list[str] = []
    while n:
        n, rem = divmod(n, 62)
        chars.append(_BASE62[rem])
    return "".join(reversed(chars)).rjust(KSUID_LENGTH, "0")


def uuid_v4() -> str:
    """Return a random UUID (version 4) string."""
    return str(uuid.uuid4())


def now() -> str:
    """Return the current UTC time in ISO 8601 format."""
    return datetime.now(timezone.utc).isoformat()


def timestamp_unix() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


def make_file_reader(base_dir: Path | None) -> Callable[[str], str]:
    """Return the ``file(path)`` function bound to ``base_dir``.

    Relative paths resolve against ``base_dir`` (or the process working
    directory when ``None``).
    """
    root: Path = base_dir if base_dir is not None else Path.cwd()

    def file(path: str) -> str:
        target: Path = Path(path)
        if not target.is_absolute():
            target = root / target
        return target.read_text(encoding="utf-8")

    return file


def make_env_reader(environ: Mapping[str, str] | None) -> Callable[..., str]:
    """Return the ``env(name, default="")`` function bound to ``environ``."""
    source: Mapping[str, str] = os.environ if environ is None else environ

    def env(name: str, default: str = "") -> str:
        return source.get(name, default)

    return env


def format_json(value: Any, indent: int | None = 2) -> str:
    """Serialize ``value`` as JSON text."""
    return json.dumps(value, indent=indent, sort_keys=True)


def format_yaml(value: Any) -> str:
    """Serialize ``value`` as block-style YAML text."""
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=True, allow_unicode=True)


def parse_json(text: str | bytes) -> Any:
    """Decode JSON text."""
    return json.loads(text)


def parse_yaml(text: str | bytes) -> Any:
    """Decode YAML text (safe loader)."""
    return yaml.safe_load(text)


def b64encode(value: str | bytes) -> str:
    """Return the base64 text of a string (UTF-8 encoded) or bytes."""
    data: bytes = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str | bytes) -> bytes:
    """Decode base64 text into bytes."""
    return base64.b64decode(text, validate=True)


def to_bytes(value: str) -> bytes:
    """Encode a string as UTF-8 bytes."""
    return str(value).encode("utf-8")


def default_functions(
    *,
    base_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Callable[..., Any]]:
    """Return the functions exposed to every mapping.

    Args:
        base_dir (Path | None): Directory relative ``file()`` paths resolve against.
        environ (Mapping[str, str] | None): Environment visible to ``env()``.

    Returns:
        dict[str, Callable[..., Any]]: Function name → callable.
    """
    return {
        "ksuid": ksuid,
        "uuid_v4": uuid_v4,
        "now": now,
        "timestamp_unix": timestamp_unix,
        "file": make_file_reader(base_dir),
        "env": make_env_reader(environ),
    }


DEFAULT_FILTERS: Final[dict[str, Callable[..., Any]]] = {
    "format_json": format_json,
    "format_yaml": format_yaml,
    "parse_json": parse_json,
    "parse_yaml": parse_yaml,
    "b64encode": b64encode,
    "b64decode": b64decode,
    "bytes": to_bytes,
}
