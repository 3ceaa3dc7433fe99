"""
Expansion commands for the fieldspread CLI.

- expand: Expand one invocation and print the emitted code
- check: Parse and resolve a field list and show the resolved table
- backends: List registered backends
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.syntax import Syntax
from rich.table import Table

from fieldspread.api import expand
from fieldspread.backends import BackendRegistry
from fieldspread.core.config import load_settings
from fieldspread.core.errors import FieldspreadError
from fieldspread.core.ir import InvocationKind
from fieldspread.core.parser import parse_field_list
from fieldspread.core.resolver import resolve

from .utils import console, read_source

KIND_HELP = "Entry point: " + ", ".join(kind.value for kind in InvocationKind)


def expand_command(
    kind: str = typer.Argument(..., help=KIND_HELP),
    source: str | None = typer.Argument(
        None, help="Invocation text (read from --file or stdin when omitted)"
    ),
    file: Path | None = typer.Option(None, "--file", "-f", help="Read the invocation from a file"),
    dialect: str | None = typer.Option(
        None, "--dialect", "-d", help="Host language: python or rust (default from config)"
    ),
    config: Path | None = typer.Option(None, "--config", help="Settings file to use"),
    plain: bool = typer.Option(False, "--plain", help="Print without syntax highlighting"),
) -> None:
    """
    Expand one invocation and print the emitted code.

    Example:
        fieldspread expand spread "Foo { { one, +three } in foo, >two }"
    """
    text, name = read_source(source, file)
    try:
        settings = load_settings(config)
        expansion = expand(kind, text, dialect, settings, file=name)
    except FieldspreadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    rendered = expansion.render()
    if plain or not console.is_terminal:
        typer.echo(rendered, nl=False)
    else:
        console.print(Syntax(rendered, expansion.dialect, theme="monokai"))


def check_command(
    source: str | None = typer.Argument(None, help="Field list text"),
    file: Path | None = typer.Option(None, "--file", "-f", help="Read the field list from a file"),
    base_allowed: bool = typer.Option(
        False, "--base-allowed", help="Accept a trailing `..base` fallback"
    ),
    dialect: str = typer.Option("python", "--dialect", "-d", help="Syntax of embedded expressions"),
) -> None:
    """
    Parse and resolve a field list, showing where every field comes from.
    """
    text, name = read_source(source, file)
    try:
        composition = parse_field_list(text, allow_base=base_allowed, dialect=dialect, file=name)
        table = resolve(composition, text=text, file=name)
    except FieldspreadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output = Table(title="Resolved fields")
    output.add_column("Field", style="bold")
    output.add_column("Modifier")
    output.add_column("Source", no_wrap=True)
    output.add_column("Origin", style="dim")
    for resolved in table.fields:
        entry = resolved.entry
        if resolved.group is not None:
            value = f"{resolved.group.source}.{entry.name}"
        else:
            value = entry.value.text if entry.value is not None else entry.name
        output.add_row(resolved.target, str(entry.modifier) or "-", value, resolved.origin)
    console.print(output)

    if table.base is not None:
        console.print(f"Other fields fall back to [bold]{table.base}[/bold]")
    console.print(f"\n[dim]{len(table)} field(s), {len(table.groups)} group(s)[/dim]")


def backends_command() -> None:
    """List registered backends."""
    output = Table(title="Backends")
    output.add_column("Dialect", no_wrap=True)
    output.add_column("Entry point", no_wrap=True)
    output.add_column("Backend", style="dim")
    for dialect, kind in BackendRegistry.list_backends():
        backend = BackendRegistry.get(dialect, kind)
        output.add_row(dialect, kind.value, f"{backend.__module__}.{backend.__name__}")
    console.print(output)
