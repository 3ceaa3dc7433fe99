"""
Python rebinding backends: `slet` and its `clone` shorthand.

Each name is rebound to its own transformed value in the enclosing scope.
`mut` has no meaning in python and is dropped.
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import BackendRegistry, Expansion
from .modifiers import apply_modifier, needs_runtime
from .records import RecordBackend


@BackendRegistry.register("python", ir.InvocationKind.SLET)
class RebindingBackend(RecordBackend):
    invocation_type = ir.Rebinding

    def generate(self) -> Expansion:
        invocation: ir.Rebinding = self.invocation
        expansion = self.new_expansion()
        table = self.resolve(invocation.composition)

        lines = []
        for resolved in table.fields:
            entry = resolved.entry
            value = apply_modifier(entry.modifier, entry.name, alias=self.settings.runtime_alias)
            # `>` alone has no target type to convert to here
            if needs_runtime(entry.modifier) and value != entry.name:
                expansion.add_import(self.runtime_import())
            lines.append(f"{entry.name} = {value}")
        expansion.statements.append("\n".join(lines))
        return expansion


@BackendRegistry.register("python", ir.InvocationKind.CLONE)
class CloneBackend(RebindingBackend):
    """Rebinding where every name carries the clone modifier."""

    pass
