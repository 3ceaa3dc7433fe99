"""
fieldspread CLI package.

- commands.py: expand, check and backends commands
- utils.py: Shared utilities
"""

from __future__ import annotations

import typer

from fieldspread._version import get_version

from .commands import backends_command, check_command, expand_command
from .utils import configure_logging, version_callback

app = typer.Typer(
    help="""fieldspread - field-level record composition

Commands:
  • expand: emit python or rust code for one invocation
  • check: show how a field list resolves
  • backends: list dialects and entry points
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """fieldspread CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="expand")(expand_command)
app.command(name="check")(check_command)
app.command(name="backends")(backends_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "get_version", "main", "version_callback"]
