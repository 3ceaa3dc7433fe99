"""
Composition resolver.

Merges the direct entries and source groups of a composition into one
ordered, conflict-checked field table. The same resolver serves every backend.

Resolution runs in two passes:
1. explicit claims, in source order, where a second claim of a target is an
   error whatever its kind (group or direct);
2. the `..base` fallback, which only ever covers targets nobody claimed.
The fallback never takes part in duplicate detection.
"""

from __future__ import annotations

import logging

from . import ir
from .errors import DuplicateFieldError, ErrorContext, source_line

logger = logging.getLogger(__name__)


def describe_origin(entry: ir.FieldEntry, group: ir.SourceGroup | None) -> str:
    """Human-readable description of where a claim comes from."""
    where = f"{entry.line}:{entry.column}"
    if group is not None:
        return f"`{entry}` in group from `{group.source}` at {where}"
    return f"field `{entry}` at {where}"


def resolve(
    composition: ir.Composition,
    *,
    text: str | None = None,
    file: str = "<input>",
) -> ir.ResolvedFieldTable:
    """
    Resolve a composition into a field table.

    Args:
        composition: Parsed field list
        text: Original invocation text, used for error snippets
        file: Source name for error locations

    Returns:
        Immutable ResolvedFieldTable.

    Raises:
        DuplicateFieldError: If two explicit entries claim the same target.
    """
    claims: dict[str, ir.ResolvedField] = {}

    # Pass 1: explicit claims
    for item in composition.items:
        if isinstance(item, ir.SourceGroup):
            pairs = [(entry, item) for entry in item.entries]
        else:
            pairs = [(item, None)]

        for entry, group in pairs:
            origin = describe_origin(entry, group)
            first = claims.get(entry.target)
            if first is not None:
                context = ErrorContext(
                    file=file,
                    line=entry.line,
                    column=entry.column,
                    snippet=source_line(text, entry.line) if text else None,
                )
                raise DuplicateFieldError(entry.target, first.origin, origin, context)
            claims[entry.target] = ir.ResolvedField(
                target=entry.target, entry=entry, group=group, origin=origin
            )

    # Pass 2: the base covers whatever is left, which only the host can enumerate
    table = ir.ResolvedFieldTable(
        fields=list(claims.values()),
        groups=composition.groups,
        base=composition.base,
    )
    logger.debug(
        "Resolved %d fields from %d groups%s",
        len(table),
        len(table.groups),
        " with base fallback" if table.base is not None else "",
    )
    return table
