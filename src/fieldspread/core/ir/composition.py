"""
Composition types for fieldspread IR.

A composition is the parsed form of one field list: direct entries and
source groups in their original order, plus an optional base record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .modifiers import DIRECT, Modifier


class Expression(BaseModel):
    """
    Raw host-language expression text with its source location.

    The engine never evaluates or rewrites expressions; it only moves them.
    """

    text: str
    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class FieldEntry(BaseModel):
    """
    One entry of a field list.

    Examples:
        - name: FieldEntry(name="name")
        - +name: FieldEntry(name="name", modifier=Modifier(kind=CLONE))
        - >count: 3: FieldEntry(name="count", modifier=..., value=Expression(text="3"))
        - { total: amount } in order: FieldEntry(name="amount", rename="total")
        - mut &name: FieldEntry(name="name", modifier=..., mutable=True)
    """

    name: str = Field(description="Source field name, or local name for direct entries")
    modifier: Modifier = DIRECT
    rename: str | None = Field(default=None, description="Target field name when it differs")
    value: Expression | None = Field(default=None, description="Value of `name: expr` entries")
    mutable: bool = Field(default=False, description="`mut` prefix (rebinding only)")
    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)

    @property
    def target(self) -> str:
        """The target field this entry populates."""
        return self.rename or self.name

    def __str__(self) -> str:
        modifier = str(self.modifier)
        if modifier.endswith("mut"):
            modifier += " "
        text = f"{'mut ' if self.mutable else ''}{modifier}{self.name}"
        if self.rename:
            return f"{self.rename}: {text}"
        if self.value is not None:
            return f"{text}: {self.value}"
        return text


class SourceGroup(BaseModel):
    """
    Fields taken from one source expression: `{ a, +b } in source`.

    The source is bound once, under `binding_name()` unless an earlier group
    of the same table took that name, so that it is evaluated a
    single time however many fields are taken from it.
    """

    entries: list[FieldEntry]
    source: Expression
    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)

    def binding_name(self, prefix: str = "__") -> str:
        """Identifier the source is bound to, e.g. `__one_three`."""
        return prefix + "_".join(entry.name for entry in self.entries)

    def __str__(self) -> str:
        return "{ " + ", ".join(str(e) for e in self.entries) + f" }} in {self.source}"


class Composition(BaseModel):
    """
    The full parsed field list of one invocation.

    Attributes:
        items: Direct entries and source groups in source order
        base: `..base` fallback, struct update only
    """

    items: list[FieldEntry | SourceGroup] = Field(default_factory=list)
    base: Expression | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def direct_entries(self) -> list[FieldEntry]:
        return [item for item in self.items if isinstance(item, FieldEntry)]

    @property
    def groups(self) -> list[SourceGroup]:
        return [item for item in self.items if isinstance(item, SourceGroup)]

    @property
    def entries(self) -> list[FieldEntry]:
        """Every field entry, flattening groups, in source order."""
        flat: list[FieldEntry] = []
        for item in self.items:
            if isinstance(item, SourceGroup):
                flat.extend(item.entries)
            else:
                flat.append(item)
        return flat

    @property
    def is_empty(self) -> bool:
        return not self.items
