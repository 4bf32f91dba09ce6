# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : errors.py
#   file_relpath : src/keyval/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the KeyVal CLI.

Usage:
    Commands run their work inside [`translate_errors`][keyval.cli.errors.translate_errors],
    which turns domain errors ([`KeyvalError`][keyval.core.errors.KeyvalError]) into
    Click exceptions carrying the matching [`ExitCode`][keyval.core.exit_codes.ExitCode].

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from keyval.cli.console import ClickConsole
from keyval.config.logging import get_logger
from keyval.core.errors import KeyvalError
from keyval.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Iterator

    from keyval.config.logging import KeyvalLogger

logger: KeyvalLogger = get_logger(__name__)


class KeyvalCliError(click.ClickException):
    """Base class for all KeyVal CLI errors."""

    exit_code = ExitCode.FAILURE

    def __init__(self, message: str, *, exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code

    @classmethod
    def from_error(cls, exc: KeyvalError) -> KeyvalCliError:
        """Wrap a domain error, keeping its message and exit code."""
        return cls(str(exc), exit_code=exc.exit_code)

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error on stderr using the project console.

        Click calls this after the command context has been torn down, so a
        console found on a still-active context is preferred and a plain
        (uncolored) one is used otherwise.
        """
        console: ClickConsole | None = None
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
        if console is None:
            console = ClickConsole(enable_color=False, err=file)
        console.error(f"error: {self.format_message()}")


class KeyvalUsageError(KeyvalCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class KeyvalUnexpectedError(KeyvalCliError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


@contextmanager
def translate_errors(verb: str) -> Iterator[None]:
    """Convert exceptions raised by a resource verb into Click exceptions.

    Args:
        verb (str): The verb being run, used in log messages.

    Raises:
        KeyvalCliError: For domain errors, with the domain exit code.
        KeyvalUnexpectedError: For any other exception (logged with traceback).
    """
    try:
        yield
    except click.ClickException:
        raise
    except KeyvalError as exc:
        logger.debug("%s failed: %r", verb, exc)
        raise KeyvalCliError.from_error(exc) from exc
    except Exception as exc:
        logger.exception("Unexpected error while running %s: %s", verb, exc)
        raise KeyvalUnexpectedError(f"unexpected error during {verb}: {exc}") from exc
