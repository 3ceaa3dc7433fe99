"""
Invocation types for fieldspread IR.

One model per entry point. Each wraps a composition (or, for the argument
holder, a function signature) together with the entry-specific data the
matching backend needs.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .composition import Composition, Expression
from .modifiers import DIRECT, Modifier


class InvocationKind(StrEnum):
    """The five entry points, plus the clone shorthand of rebinding."""

    SPREAD = "spread"
    ANON = "anon"
    SLET = "slet"
    CLONE = "clone"
    FN_STRUCT = "fn_struct"
    ASSERT_FIELDS_EQ = "assert_fields_eq"


class StructUpdate(BaseModel):
    """`TargetType { <field-list>, ..base }`."""

    type_path: Expression
    composition: Composition

    model_config = ConfigDict(frozen=True)


class AnonRecord(BaseModel):
    """`<field-list>` building a value of a synthesized record type."""

    composition: Composition

    model_config = ConfigDict(frozen=True)


class Rebinding(BaseModel):
    """`<field-list-of-bare-names>` rebinding locals in the enclosing scope."""

    composition: Composition

    model_config = ConfigDict(frozen=True)


class GenericParam(BaseModel):
    """
    One generic parameter, kept as written.

    Examples:
        - T: Clone: GenericParam(decl="T: Clone", name="T")
        - 'a: GenericParam(decl="'a", name="'a")
        - const N: usize: GenericParam(decl="const N: usize", name="N")
    """

    decl: str
    name: str

    model_config = ConfigDict(frozen=True)


class FnArg(BaseModel):
    """One argument of the holder's target function."""

    name: str
    modifier: Modifier = DIRECT
    type: str | None = Field(default=None, description="Declared type; None makes it generic")
    default: Expression | None = None
    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)


class FnStruct(BaseModel):
    """
    `struct Name for fn target(<args>) -> ReturnType`.

    Attributes:
        name: Holder type name
        visibility: Rust visibility such as `pub` or `pub(crate)`
        call_by_ref: `&Name` makes `call` borrow the holder instead of consuming it
        generics: Holder type parameters
        where_clause: Holder where clause, without the `where` keyword
        call_generics: Type parameters of `call`, from `for<...>`
        call_where: Where clause of `call`
        path: Path of the target function or method
        receiver: Modifier of a leading `self` argument, if any
        args: Remaining arguments in order
        return_type: Declared return type
    """

    name: str
    visibility: str | None = None
    call_by_ref: bool = False
    generics: list[GenericParam] = Field(default_factory=list)
    where_clause: str | None = None
    call_generics: list[GenericParam] = Field(default_factory=list)
    call_where: str | None = None
    path: str
    receiver: Modifier | None = None
    args: list[FnArg] = Field(default_factory=list)
    return_type: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_defaults(self) -> bool:
        """Whether the holder gets a default constructor."""
        return bool(self.args) and all(arg.default is not None for arg in self.args)

    @property
    def receiver_type(self) -> str:
        """The path with its last segment (the method name) removed."""
        if self.path.startswith("<") and " as " in self.path:
            # `<T as Trait>::method` is called on `T`
            return self.path[1:].split(" as ", 1)[0].strip()
        for sep in ("::", "."):
            if sep in self.path:
                return self.path.rsplit(sep, 1)[0]
        return self.path


class AssertFields(BaseModel):
    """
    `actual, expected, [f, ...], fmt...` or `actual, { <field-list> }, fmt...`.

    Exactly one of `expected` and `anon` is set.
    """

    actual: Expression
    expected: Expression | None = None
    anon: Composition | None = None
    fields: list[str]
    format_args: list[Expression] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


Invocation = StructUpdate | AnonRecord | Rebinding | FnStruct | AssertFields
