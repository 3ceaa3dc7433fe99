"""
Runtime support for code emitted by the python dialect.

Emitted python code imports this module under a short alias (`_fs` unless
configured otherwise) and calls into it for the few modifier transforms and
wrappers that have no single-expression python equivalent:

- `clone`: the `+` modifier, a deep copy
- `into`: the `>` modifier, a conversion to the target's declared type
- `struct_update`: construction with a `..base` fallback
- `FieldChecks`: the per-field equality assertion and its final report
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import textwrap
import typing
from typing import Any, TypeVar

from pydantic import TypeAdapter
from rich.pretty import pretty_repr

logger = logging.getLogger(__name__)

T = TypeVar("T")


def clone(value: T) -> T:
    """Return a copy of `value` sharing no mutable state with it."""
    return copy.deepcopy(value)


def type_hints(target: Any) -> dict[str, Any]:
    """Resolved annotations of a class or callable; empty when there are none."""
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError) as e:
        # Unresolvable forward references leave the fields untyped
        logger.debug("Cannot resolve annotations of %r: %s", target, e)
        return {}


def into(value: Any, target: Any, name: str) -> Any:
    """
    Convert `value` to the type `target` declares for `name`.

    `target` is a record class (field annotation) or a callable (parameter
    annotation). Untyped and generic targets take the value unchanged.

    Raises:
        pydantic.ValidationError: If the value cannot be converted.
    """
    annotation = type_hints(target).get(name, Any)
    if annotation is Any or isinstance(annotation, TypeVar):
        return value
    return TypeAdapter(annotation).validate_python(value)


def record_fields(cls: type) -> list[str]:
    """Names of the fields a record class takes as keyword arguments."""
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls) if f.init]
    model_fields = getattr(cls, "model_fields", None)
    if isinstance(model_fields, dict):
        return list(model_fields)
    namedtuple_fields = getattr(cls, "_fields", None)
    if isinstance(namedtuple_fields, tuple):
        return list(namedtuple_fields)
    return [name for name in type_hints(cls) if not name.startswith("_")]


def struct_update(cls: type[T], base: Any, /, **fields: Any) -> T:
    """
    Build `cls(**fields)`, taking every field not given from `base`.

    Fields `base` does not have are left out, so the constructor reports them.
    """
    for name in record_fields(cls):
        if name not in fields and hasattr(base, name):
            fields[name] = getattr(base, name)
    return cls(**fields)


class FieldChecks:
    """
    Per-field equality checks between two aggregates, reported together.

    Example:
        checks = FieldChecks(actual, expected)
        checks.check("bar", actual.bar, expected.bar)
        checks.check("baz", actual.baz, expected.baz)
        checks.report("unexpected fields in {}", actual)
    """

    def __init__(self, actual: Any, expected: Any) -> None:
        self.actual = actual
        self.expected = expected
        self.checked: list[str] = []
        self.mismatches: list[tuple[str, Any, Any]] = []

    def check(self, name: str, actual_value: Any, expected_value: Any) -> None:
        self.checked.append(name)
        if not actual_value == expected_value:
            self.mismatches.append((name, actual_value, expected_value))

    @property
    def passed(self) -> bool:
        return not self.mismatches

    def report(self, message: str | None = None, *args: Any) -> None:
        """Raise AssertionError describing every mismatch, if there is any."""
        if self.passed:
            return
        raise AssertionError(self.format(message, *args))

    def format(self, message: str | None = None, *args: Any) -> str:
        names = ", ".join(name for name, _, _ in self.mismatches)
        lines = [f"assertion `actual == expected` failed for field(s) {names}"]
        if message is not None:
            lines.append(message.format(*args) if args else message)
        for name, actual_value, expected_value in self.mismatches:
            lines.append(f"  {name}: {actual_value!r} != {expected_value!r}")
        lines.append("  actual:")
        lines.append(textwrap.indent(pretty_repr(self.actual), "    "))
        lines.append("  expected:")
        lines.append(textwrap.indent(pretty_repr(self.expected), "    "))
        return "\n".join(lines)
