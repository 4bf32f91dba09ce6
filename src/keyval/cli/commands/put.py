# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : put.py
#   file_relpath : src/keyval/cli/commands/put.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal `out` command.

Reads ``{source, params?}`` from stdin, evaluates ``params.mapping`` (identity
when empty) against the build context, and prints ``{version, metadata}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from keyval.cli.errors import translate_errors
from keyval.cli.io import read_request, serialize_json_object
from keyval.cli.options import working_directory_argument
from keyval.core.model import PutParams
from keyval.resource import Resource

if TYPE_CHECKING:
    from pathlib import Path

    from keyval.cli.console import ClickConsole
    from keyval.core.model import Request, Response


@click.command(
    name="out",
    help="Create a new version (reads the request from stdin; DIRECTORY holds build inputs).",
)
@working_directory_argument
@click.pass_context
def out_command(ctx: click.Context, directory: Path) -> None:
    """Run the ``out`` verb.

    Args:
        ctx (click.Context): Current Click context (holds the console).
        directory (Path): Working directory supplied by Concourse.
    """
    console: ClickConsole = ctx.obj["console"]
    with translate_errors("out"):
        request: Request = read_request()
        response: Response = Resource(request.source).put(
            directory,
            PutParams.from_json(request.params),
        )
    console.print(serialize_json_object(response.to_dict()))
