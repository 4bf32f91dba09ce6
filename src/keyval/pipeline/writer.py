# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : writer.py
#   file_relpath : src/keyval/pipeline/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output file writes for the ``in`` step.

This module is the single place where KeyVal writes into the step's output
directory. Writes are not transactional: if a later write fails, files written
earlier stay on disk (Concourse discards the directory of a failed step).

Files are created (or truncated) with mode ``0o777`` before umask, matching
what Concourse resource images conventionally produce.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from keyval.config.logging import KeyvalLogger, get_logger
from keyval.constants import OUTPUT_FILE_MODE
from keyval.core.errors import OutputIOError

logger: KeyvalLogger = get_logger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Structured result of a write operation."""

    path: Path
    bytes_written: int


def resolve_output_path(output_dir: Path, filename: str) -> Path:
    """Resolve ``filename`` inside ``output_dir``.

    Args:
        output_dir (Path): The step's output directory.
        filename (str): Relative file name, may contain subdirectories.

    Returns:
        Path: The target path.

    Raises:
        OutputIOError: If ``filename`` is empty, absolute, or escapes ``output_dir``.
    """
    if not filename or Path(filename).is_absolute():
        raise OutputIOError(filename, "file name must be a non-empty relative path")
    root: Path = output_dir.resolve()
    target: Path = (root / filename).resolve()
    if target == root or root not in target.parents:
        raise OutputIOError(filename, f"path escapes the output directory {output_dir}")
    return target


def write_bytes(output_dir: Path, filename: str, data: bytes) -> WriteResult:
    """Create or truncate ``output_dir/filename`` and write ``data`` to it.

    Missing parent directories are created.

    Args:
        output_dir (Path): The step's output directory.
        filename (str): Relative file name.
        data (bytes): File content.

    Returns:
        WriteResult: The written path and byte count.

    Raises:
        OutputIOError: If the file cannot be created or written.
    """
    target: Path = resolve_output_path(output_dir, filename)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd: int = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTPUT_FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except OSError as exc:
        raise OutputIOError(filename, exc.strerror or str(exc)) from exc
    logger.debug("wrote %d bytes to %s", len(data), target)
    return WriteResult(path=target, bytes_written=len(data))


def write_json(output_dir: Path, filename: str, data: object) -> WriteResult:
    """Write ``data`` as pretty-printed JSON (2-space indent, trailing newline).

    Args:
        output_dir (Path): The step's output directory.
        filename (str): Relative file name.
        data (object): JSON-serializable value.

    Returns:
        WriteResult: The written path and byte count.
    """
    text: str = json.dumps(data, indent=2) + "\n"
    return write_bytes(output_dir, filename, text.encode("utf-8"))
