"""
Modifier rendering for the rust dialect.
"""

from __future__ import annotations

from fieldspread.core import ir

_QUOTES = "\"'"
_OPEN = "([{"
_CLOSE = ")]}"
# Characters that end an operand when they appear outside brackets
_OPERATOR_CHARS = set(" \t\n+-*/%&|^!<>=?,;")


def is_atomic(value: str) -> bool:
    """
    Whether `value` binds tighter than a method call or a prefix `&`.

    Paths, field accesses, calls, indexing and literals are atomic; anything
    with a top-level operator, cast or space is not.
    """
    if not value or value[0] in "&*!-":
        return False
    depth = 0
    quote = None
    i = 0
    while i < len(value):
        char = value[i]
        if quote is not None:
            if char == "\\":
                i += 1
            elif char == quote:
                quote = None
        elif char == '"':
            quote = char
        elif char == "'" and i + 2 < len(value) and value[i + 2] == "'":
            # char literal such as 'a'
            i += 2
        elif char == "'" and i + 3 < len(value) and value[i + 1] == "\\":
            quote = char
        elif char in _OPEN:
            depth += 1
        elif char in _CLOSE:
            depth -= 1
        elif depth == 0 and (char in _OPERATOR_CHARS or (char == "." and value[i + 1 : i + 2] == ".")):
            return False
        i += 1
    return depth == 0 and quote is None


def atom(value: str) -> str:
    """`value`, parenthesized unless it is atomic."""
    return value if is_atomic(value) else f"({value})"


def apply_modifier(modifier: ir.Modifier, value: str) -> str:
    """Wrap `value` in the transform `modifier` names."""
    kind = modifier.kind
    if kind == ir.ModifierKind.DIRECT:
        return value
    if kind == ir.ModifierKind.REF:
        return f"&{atom(value)}"
    if kind == ir.ModifierKind.REF_MUT:
        return f"&mut {atom(value)}"
    if kind == ir.ModifierKind.CLONE:
        return f"{atom(value)}.clone()"
    if kind == ir.ModifierKind.INTO:
        return f"{atom(value)}.into()"
    if kind == ir.ModifierKind.CLONE_INTO:
        return f"{atom(value)}.clone().into()"
    if kind == ir.ModifierKind.CUSTOM:
        return f"{modifier.path}({value})"
    if kind == ir.ModifierKind.CUSTOM_REF:
        return f"{modifier.path}(&{atom(value)})"
    return f"{modifier.path}(&mut {atom(value)})"


def reference_prefix(modifier: ir.Modifier | None) -> str:
    """Type prefix of a `self` receiver: `&`, `&mut ` or nothing."""
    if modifier is None or not modifier.is_reference:
        return ""
    if modifier.kind == ir.ModifierKind.REF_MUT:
        return "&mut "
    return "&"
