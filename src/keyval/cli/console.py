# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : console.py
#   file_relpath : src/keyval/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console abstraction for program output.

Concourse parses stdout as the resource response, so `ClickConsole.print`
is reserved for that JSON document. Human-readable messages go to stderr
through `error`, and diagnostics go through `logging`.
"""

from __future__ import annotations

import sys
from typing import IO

import click


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, enables ANSI color codes on stderr messages.
        out (IO[str] | None): Stream for the protocol response. Defaults to `sys.stdout`.
        err (IO[str] | None): Stream for messages. Defaults to `sys.stderr`.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: IO[str] | None = None,
        err: IO[str] | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write to stdout (the protocol response)."""
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=False)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="bright_red"
        )
