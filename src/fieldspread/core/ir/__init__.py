"""
fieldspread Internal Representation (IR).

Immutable pydantic models describing parsed invocations and their resolved
field tables. Everything here is built fresh per invocation.
"""

from .composition import Composition, Expression, FieldEntry, SourceGroup
from .invocations import (
    AnonRecord,
    AssertFields,
    FnArg,
    FnStruct,
    GenericParam,
    Invocation,
    InvocationKind,
    Rebinding,
    StructUpdate,
)
from .modifiers import DIRECT, Modifier, ModifierKind
from .resolved import ResolvedField, ResolvedFieldTable

__all__ = [
    # Modifiers
    "DIRECT",
    "Modifier",
    "ModifierKind",
    # Composition
    "Composition",
    "Expression",
    "FieldEntry",
    "SourceGroup",
    # Invocations
    "AnonRecord",
    "AssertFields",
    "FnArg",
    "FnStruct",
    "GenericParam",
    "Invocation",
    "InvocationKind",
    "Rebinding",
    "StructUpdate",
    # Resolution
    "ResolvedField",
    "ResolvedFieldTable",
]
