# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : main.py
#   file_relpath : src/keyval/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal CLI entry points.

Key ideas:
- Group-level options (verbosity) are initialized once, placed into ``ctx.obj``.
- Each resource verb is a real subcommand: ``keyval check``, ``keyval in DIR``,
  ``keyval out DIR``.
- [`main`][keyval.cli.main.main] lets one executable serve the
  ``/opt/resource/{check,in,out}`` symlinks by dispatching on ``argv[0]``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from keyval.cli.commands.check import check_command
from keyval.cli.commands.get import in_command
from keyval.cli.commands.put import out_command
from keyval.cli.commands.version import version_command
from keyval.cli.console import ClickConsole
from keyval.cli.options import common_verbose_options, resolve_verbosity
from keyval.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

    from keyval.config.logging import KeyvalLogger

logger: KeyvalLogger = get_logger(__name__)

# Executable names Concourse invokes; each maps to a subcommand of `cli`.
VERB_NAMES: tuple[str, ...] = ("check", "in", "out")


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int) -> None:
    """Initialize shared state (logging & console) on the Click context.

    ``KEYVAL_LOG_LEVEL`` takes precedence over ``-v``/``-q``.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
    """
    ctx.ensure_object(dict)

    level_cli: int = resolve_verbosity(verbose, quiet)
    level_env: int | None = resolve_env_log_level()
    level: int = level_env if level_env is not None else level_cli
    ctx.obj["log_level"] = level
    setup_logging(level=level)

    ctx.obj.setdefault("console", ClickConsole())


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="KeyVal: a Concourse resource carrying key/value data between jobs.",
)
@common_verbose_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Entry point for the KeyVal CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet)


cli.add_command(check_command)

cli.add_command(in_command)

cli.add_command(out_command)

cli.add_command(version_command)


def main(argv: Sequence[str] | None = None, *, prog: str | None = None) -> None:
    """Run KeyVal, selecting the verb from the executable name.

    When invoked as ``check``, ``in`` or ``out`` (typically through a
    ``/opt/resource/*`` symlink), the matching subcommand is run with the
    remaining arguments. Any other name behaves like the ``keyval`` group.

    Args:
        argv (Sequence[str] | None): Arguments after the program name; defaults to ``sys.argv[1:]``.
        prog (str | None): Program path; defaults to ``sys.argv[0]``.
    """
    args: list[str] = list(sys.argv[1:] if argv is None else argv)
    name: str = Path(prog if prog is not None else sys.argv[0]).name
    if name in VERB_NAMES:
        logger.debug("dispatching on executable name: %s", name)
        cli.main(args=[name, *args], prog_name="keyval")
    else:
        cli.main(args=args)


if __name__ == "__main__":
    cli()
