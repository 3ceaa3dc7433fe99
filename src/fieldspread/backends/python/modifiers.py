"""
Modifier rendering for the python dialect.

Python has no borrows, so `&` and `&mut` pass the object itself; the
transforms that need more than an expression go through the runtime module.
"""

from __future__ import annotations

import logging

from fieldspread.core import ir

logger = logging.getLogger(__name__)


def apply_modifier(
    modifier: ir.Modifier,
    value: str,
    *,
    alias: str,
    target: str | None = None,
    field: str | None = None,
) -> str:
    """
    Wrap `value` in the transform `modifier` names.

    Args:
        modifier: Modifier of the entry
        value: Untransformed value expression
        alias: Name the runtime module is imported under
        target: Class or callable whose annotation `>` converts to
        field: Field or parameter name looked up on `target`

    Returns:
        Transformed value expression.
    """
    kind = modifier.kind
    if kind in (ir.ModifierKind.DIRECT, ir.ModifierKind.REF, ir.ModifierKind.REF_MUT):
        return value
    if kind in (ir.ModifierKind.CUSTOM, ir.ModifierKind.CUSTOM_REF, ir.ModifierKind.CUSTOM_REF_MUT):
        return f"{modifier.path}({value})"

    if kind in (ir.ModifierKind.CLONE, ir.ModifierKind.CLONE_INTO):
        value = f"{alias}.clone({value})"
    if kind in (ir.ModifierKind.INTO, ir.ModifierKind.CLONE_INTO):
        if target is None or field is None:
            # Nothing declares a type to convert to
            logger.debug("`%s` on %s has no conversion target, value kept", modifier, value)
            return value
        value = f"{alias}.into({value}, {target}, {field!r})"
    return value


def needs_runtime(modifier: ir.Modifier) -> bool:
    """Whether the rendered transform calls into the runtime module."""
    return modifier.kind in (
        ir.ModifierKind.CLONE,
        ir.ModifierKind.INTO,
        ir.ModifierKind.CLONE_INTO,
    )
