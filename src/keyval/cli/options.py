# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : options.py
#   file_relpath : src/keyval/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared Click options and their resolution helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click

from keyval.cli.errors import KeyvalUsageError
from keyval.config.logging import DEFAULT_LEVEL, TRACE_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level based on verbose and quiet counts.

    Args:
        verbose_count (int): Number of times the verbose flag (-v) is passed.
        quiet_count (int): Number of times the quiet flag (-q) is passed.

    Returns:
        int: The logging level.

    Raises:
        KeyvalUsageError: If both verbose and quiet flags are used simultaneously.

    Behavior:
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        One -q flag sets ERROR level, two or more set CRITICAL.
        Default level is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise KeyvalUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 2:
        return logging.CRITICAL
    if quiet_count == 1:
        return logging.ERROR
    return DEFAULT_LEVEL


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity on stderr. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Reduce log verbosity on stderr. Specify twice for even less.",
    )(f)
    return f


def working_directory_argument(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the DIRECTORY argument Concourse passes to ``in`` and ``out``.

    Args:
        f (Callable[P, R]): The Click command function to decorate.

    Returns:
        Callable[P, R]: The decorated function.
    """
    return click.argument(
        "directory",
        type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    )(f)
