# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : __main__.py
#   file_relpath : src/keyval/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running KeyVal via ``python -m keyval``.

Delegates to [`keyval.cli.main.cli`][keyval.cli.main.cli], the same click
group exposed as the ``keyval`` console script.

Examples:
    Run a put step by hand::

        echo '{"source": {}, "params": {"mapping": "this"}}' | python -m keyval out /tmp/work
"""

from __future__ import annotations

from keyval.cli.main import cli

if __name__ == "__main__":
    cli()
