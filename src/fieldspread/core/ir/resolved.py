"""
Resolved field table for fieldspread IR.

Output of the composition resolver and the single input shape every backend
renders from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .composition import Expression, FieldEntry, SourceGroup


class ResolvedField(BaseModel):
    """
    One explicitly claimed target field.

    Attributes:
        target: Target field name (unique in the table)
        entry: The entry that claimed it
        group: The group the entry came from, None for direct entries
        origin: Human-readable description of the claim, used in diagnostics
    """

    target: str
    entry: FieldEntry
    group: SourceGroup | None = None
    origin: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_grouped(self) -> bool:
        return self.group is not None


class ResolvedFieldTable(BaseModel):
    """
    Ordered, conflict-free mapping from target field name to its claim.

    Fields not listed fall back to `base` when one is present; otherwise they
    are left for the host language to reject.
    """

    fields: list[ResolvedField] = Field(default_factory=list)
    groups: list[SourceGroup] = Field(default_factory=list)
    base: Expression | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def names(self) -> list[str]:
        return [f.target for f in self.fields]

    def __getitem__(self, target: str) -> ResolvedField:
        for resolved in self.fields:
            if resolved.target == target:
                return resolved
        raise KeyError(target)

    def __contains__(self, target: object) -> bool:
        return target in self.names

    def __len__(self) -> int:
        return len(self.fields)

    def falls_back_to_base(self, target: str) -> bool:
        """Whether `target` would be filled from the base record."""
        return self.base is not None and target not in self

    def binding_names(self, prefix: str = "__") -> list[str]:
        """
        Distinct identifiers for the group sources, in group order.

        A group keeps its natural name (`__one_three`) unless an earlier group
        already took it; then its index is appended until the name is free.
        """
        names: list[str] = []
        for index, group in enumerate(self.groups):
            name = group.binding_name(prefix)
            while name in names:
                name = f"{name}_{index}"
            names.append(name)
        return names

    def binding_of(self, group: SourceGroup, prefix: str = "__") -> str:
        return self.binding_names(prefix)[self.groups.index(group)]
