# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __init__.py
#   file_relpath : src/keyval/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal CLI package: the Concourse resource protocol runtime.

This package groups the Click commands implementing the resource protocol
(stdin request → stdout JSON response) and their supporting utilities.

Typical usage:
    The console script entry points are defined in ``pyproject.toml`` as::

        [project.scripts]
        keyval = "keyval.cli.main:cli"
        keyval-resource = "keyval.cli.main:main"

    A resource image symlinks ``/opt/resource/{check,in,out}`` to
    ``keyval-resource``, which dispatches on the name it was invoked under.

All subcommands live in [`keyval.cli.commands`][keyval.cli.commands].
"""

from __future__ import annotations

__all__: list[str] = []
