# topmark:header:start
#
#   file         : io.py
#   file_relpath : src/keyval/cli/io.py
#   project      : KeyVal Resource
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""STDIN/STDOUT framing of the Concourse resource protocol.

- `read_request()`: read and decode the JSON request from stdin.
- `serialize_json_object()`: pretty-print the response for stdout.
"""

from __future__ import annotations

import json
import sys
from typing import IO

from keyval.config.logging import KeyvalLogger, get_logger
from keyval.core.errors import RequestError
from keyval.core.model import Request, parse_request

logger: KeyvalLogger = get_logger(__name__)


def read_request(stream: IO[str] | None = None) -> Request:
    """Read the whole request from ``stream`` (default: stdin) and decode it.

    Args:
        stream (IO[str] | None): Input stream; defaults to ``sys.stdin``.

    Returns:
        Request: The decoded request.

    Raises:
        RequestError: If the input is empty or malformed.
    """
    src: IO[str] = stream or sys.stdin
    data: str = src.read()
    if not data.strip():
        raise RequestError("<stdin>", "no request received")
    logger.trace("request: %s", data)
    return parse_request(data)


def serialize_json_object(obj: object) -> str:
    """Serialize an object to pretty-printed JSON (no trailing newline).

    Args:
        obj (object): The object to serialize.

    Returns:
        str: A pretty-printed JSON string.
    """
    return json.dumps(obj, indent=2)
