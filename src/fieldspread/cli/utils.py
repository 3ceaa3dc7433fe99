"""
fieldspread CLI utilities.

Shared helpers used across CLI command modules.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console

from fieldspread._version import get_version

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        from fieldspread.backends import BackendRegistry

        typer.echo(f"fieldspread version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo("")
        typer.echo(f"Dialects: {', '.join(BackendRegistry.dialects())}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Log to stderr at DEBUG with --verbose, else at LOG_LEVEL (default WARNING)."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def read_source(source: str | None, file: Path | None) -> tuple[str, str]:
    """
    Get invocation text from the argument, a file, or stdin.

    Returns:
        (text, source name for error locations)
    """
    if source is not None and file is not None:
        typer.echo("Give the invocation either as an argument or with --file, not both", err=True)
        raise typer.Exit(code=1)
    if source is not None:
        return source, "<argument>"
    if file is not None:
        try:
            return file.read_text(encoding="utf-8"), str(file)
        except OSError as e:
            typer.echo(f"Cannot read {file}: {e}", err=True)
            raise typer.Exit(code=1)
    if sys.stdin.isatty():
        typer.echo("No invocation given: pass it as an argument, with --file, or on stdin", err=True)
        raise typer.Exit(code=1)
    return sys.stdin.read(), "<stdin>"
