# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : get.py
#   file_relpath : src/keyval/cli/commands/get.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal `in` command.

Reads ``{source, version, params?}`` from stdin, writes ``version.json``,
``metadata.json`` and any ``params.files`` into DIRECTORY, and prints
``{version, metadata}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from keyval.cli.errors import translate_errors
from keyval.cli.io import read_request, serialize_json_object
from keyval.cli.options import working_directory_argument
from keyval.core.model import GetParams
from keyval.resource import Resource

if TYPE_CHECKING:
    from pathlib import Path

    from keyval.cli.console import ClickConsole
    from keyval.core.model import Request, Response


@click.command(
    name="in",
    help="Fetch a version into DIRECTORY (reads the request from stdin).",
)
@working_directory_argument
@click.pass_context
def in_command(ctx: click.Context, directory: Path) -> None:
    """Run the ``in`` verb.

    Args:
        ctx (click.Context): Current Click context (holds the console).
        directory (Path): Output directory supplied by Concourse.
    """
    console: ClickConsole = ctx.obj["console"]
    with translate_errors("in"):
        request: Request = read_request()
        response: Response = Resource(request.source).get(
            request.require_version(),
            directory,
            GetParams.from_json(request.params),
        )
    console.print(serialize_json_object(response.to_dict()))
