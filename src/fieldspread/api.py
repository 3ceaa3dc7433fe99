"""
Library entry points.

`expand` runs the whole pipeline for one invocation: tokenize, parse,
resolve, and render with the backend registered for the dialect.

Example:
    >>> import fieldspread
    >>> expansion = fieldspread.spread("Point { +x, y: 2 }")
    >>> expansion.evaluate({"Point": Point, "x": 1})
    Point(x=1, y=2)
"""

from __future__ import annotations

import logging
from typing import Any

from .backends import BackendRegistry, Expansion
from .core import ir
from .core.config import ExpansionSettings
from .core.errors import BackendError
from .core.parser import parse_invocation

logger = logging.getLogger(__name__)


def expand(
    kind: ir.InvocationKind | str,
    source: str,
    dialect: str | None = None,
    settings: ExpansionSettings | None = None,
    *,
    file: str = "<input>",
) -> Expansion:
    """
    Expand one invocation.

    Args:
        kind: Entry point (`spread`, `anon`, `slet`, `clone`, `fn_struct`,
            `assert_fields_eq`)
        source: Invocation text
        dialect: Host language; overrides `settings.dialect`
        settings: Expansion settings, defaults if None
        file: Source name for error locations

    Returns:
        The emitted code.

    Raises:
        FieldSyntaxError: If the invocation is malformed.
        DuplicateFieldError: If two entries claim the same field.
        BackendError: If the kind or dialect is unknown.
    """
    settings = settings or ExpansionSettings()
    dialect = dialect or settings.dialect
    if dialect not in BackendRegistry.dialects():
        raise BackendError(
            f"Unknown dialect '{dialect}'; expected one of {', '.join(BackendRegistry.dialects())}"
        )
    if dialect != settings.dialect:
        settings = settings.model_copy(update={"dialect": dialect})

    backend_cls = BackendRegistry.get(dialect, kind)
    invocation = parse_invocation(backend_cls.kind, source, dialect=dialect, file=file)
    expansion = backend_cls(invocation, settings, source, file).generate()
    logger.debug(
        "Expanded %s (%s): %d statements, %s expression",
        backend_cls.kind,
        dialect,
        len(expansion.statements),
        "with" if expansion.expression is not None else "no",
    )
    return expansion


def spread(source: str, **kwargs: Any) -> Expansion:
    """Struct update: `TargetType { <field-list>, ..base }`."""
    return expand(ir.InvocationKind.SPREAD, source, **kwargs)


def anon(source: str, **kwargs: Any) -> Expansion:
    """Anonymous record: `<field-list>`."""
    return expand(ir.InvocationKind.ANON, source, **kwargs)


def slet(source: str, **kwargs: Any) -> Expansion:
    """Rebinding: `<field-list-of-bare-names>`."""
    return expand(ir.InvocationKind.SLET, source, **kwargs)


def clone(source: str, **kwargs: Any) -> Expansion:
    """Rebinding that clones every name: `a, mut b`."""
    return expand(ir.InvocationKind.CLONE, source, **kwargs)


def fn_struct(source: str, **kwargs: Any) -> Expansion:
    """Argument holder: `struct Name for fn target(<args>) -> ReturnType`."""
    return expand(ir.InvocationKind.FN_STRUCT, source, **kwargs)


def assert_fields_eq(source: str, **kwargs: Any) -> Expansion:
    """Field equality assertion: `actual, expected, [field, ...], fmt...`."""
    return expand(ir.InvocationKind.ASSERT_FIELDS_EQ, source, **kwargs)
