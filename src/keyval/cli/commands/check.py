# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : check.py
#   file_relpath : src/keyval/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal `check` command.

Reads ``{source, version?}`` from stdin and prints a JSON array of versions:
the prior version unchanged, or the version produced by
``source.initial_mapping`` when there is none.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from keyval.cli.errors import translate_errors
from keyval.cli.io import read_request, serialize_json_object
from keyval.resource import Resource

if TYPE_CHECKING:
    from keyval.cli.console import ClickConsole
    from keyval.core.model import Request, Version


@click.command(
    name="check",
    help="Report versions (reads the request from stdin).",
)
@click.pass_context
def check_command(ctx: click.Context) -> None:
    """Run the ``check`` verb.

    Args:
        ctx (click.Context): Current Click context (holds the console).
    """
    console: ClickConsole = ctx.obj["console"]
    with translate_errors("check"):
        request: Request = read_request()
        versions: list[Version] = Resource(request.source).check(request.version)
    console.print(serialize_json_object([v.to_dict() for v in versions]))
