"""
Field modifier types for fieldspread IR.

A modifier describes how a field's value is obtained from its source. The set
is closed; each dialect renders every kind.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ModifierKind(StrEnum):
    """Enumeration of field modifiers, valued by their prefix syntax."""

    DIRECT = ""
    CLONE = "+"
    REF = "&"
    REF_MUT = "&mut"
    INTO = ">"
    CLONE_INTO = "+>"
    CUSTOM = "[path]"
    CUSTOM_REF = "[path]&"
    CUSTOM_REF_MUT = "[path]&mut"


_CUSTOM_KINDS = frozenset(
    {ModifierKind.CUSTOM, ModifierKind.CUSTOM_REF, ModifierKind.CUSTOM_REF_MUT}
)


class Modifier(BaseModel):
    """
    A modifier applied to one field entry.

    Examples:
        - +name: Modifier(kind=CLONE)
        - >name: Modifier(kind=INTO)
        - [str.upper]name: Modifier(kind=CUSTOM, path="str.upper")
        - [Cow::Borrowed]&name: Modifier(kind=CUSTOM_REF, path="Cow::Borrowed")
    """

    kind: ModifierKind = ModifierKind.DIRECT
    path: str | None = Field(default=None, description="Function path for custom modifiers")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_path(self) -> Modifier:
        """Custom modifiers carry a path, the others never do."""
        if self.is_custom and not self.path:
            raise ValueError(f"Modifier {self.kind.name} requires a function path")
        if not self.is_custom and self.path is not None:
            raise ValueError(f"Modifier {self.kind.name} does not take a function path")
        return self

    @property
    def is_custom(self) -> bool:
        return self.kind in _CUSTOM_KINDS

    @property
    def is_direct(self) -> bool:
        return self.kind == ModifierKind.DIRECT

    @property
    def is_reference(self) -> bool:
        """True when the value is borrowed rather than moved or copied."""
        return self.kind in (
            ModifierKind.REF,
            ModifierKind.REF_MUT,
            ModifierKind.CUSTOM_REF,
            ModifierKind.CUSTOM_REF_MUT,
        )

    def __str__(self) -> str:
        if self.is_custom:
            return self.kind.value.replace("path", self.path or "")
        return self.kind.value


DIRECT = Modifier()
