# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : version.py
#   file_relpath : src/keyval/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal `version` command.

Prints the KeyVal version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from keyval.cli.io import serialize_json_object
from keyval.constants import KEYVAL_VERSION

if TYPE_CHECKING:
    from keyval.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of KeyVal.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print a JSON object.")
@click.pass_context
def version_command(ctx: click.Context, *, as_json: bool = False) -> None:
    """Show the current version of KeyVal.

    Args:
        ctx (click.Context): Current Click context (holds the console).
        as_json (bool): Print ``{"version": ...}`` instead of plain text.
    """
    console: ClickConsole = ctx.obj["console"]
    if as_json:
        console.print(serialize_json_object({"version": KEYVAL_VERSION}))
    else:
        console.print(KEYVAL_VERSION)
