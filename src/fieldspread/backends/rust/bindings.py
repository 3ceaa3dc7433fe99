"""
Rust rebinding backends: `slet` and its `clone` shorthand.
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .modifiers import apply_modifier


@BackendRegistry.register("rust", ir.InvocationKind.SLET)
class RebindingBackend(Backend):
    """One `let` per name, shadowing the outer binding with its transformed value."""

    invocation_type = ir.Rebinding

    def generate(self) -> Expansion:
        invocation: ir.Rebinding = self.invocation
        expansion = self.new_expansion()
        table = self.resolve(invocation.composition)

        lines = []
        for resolved in table.fields:
            entry = resolved.entry
            binding = f"mut {entry.name}" if entry.mutable else entry.name
            value = apply_modifier(entry.modifier, entry.name)
            lines.append(f"let {binding} = {value};")
        expansion.statements.append("\n".join(lines))
        return expansion


@BackendRegistry.register("rust", ir.InvocationKind.CLONE)
class CloneBackend(RebindingBackend):
    pass
