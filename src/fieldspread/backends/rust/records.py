"""
Rust record backends: struct update and anonymous records.

Group sources are evaluated once into block locals, then the struct literal is
built in resolved-table order with `..base` last.

Example output for `Foo { { +one, &three } in &foo, >two }`:

    {
        let __one_three = &foo;
        Foo {
            one: __one_three.one.clone(),
            three: &__one_three.three,
            two: two.into(),
        }
    }
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .modifiers import apply_modifier

ALLOW_NAMING = "#[allow(non_camel_case_types)]"


class RecordBackend(Backend):
    """Shared rendering of a resolved table as a struct literal."""

    def field_inits(self, table: ir.ResolvedFieldTable) -> list[str]:
        inits = []
        for resolved in table.fields:
            value = apply_modifier(resolved.entry.modifier, self.source_of(table, resolved))
            if value == resolved.target:
                inits.append(f"{value},")
            else:
                inits.append(f"{resolved.target}: {value},")
        if table.base is not None:
            inits.append(f"..{table.base}")
        return inits

    def literal(self, type_path: str, table: ir.ResolvedFieldTable) -> str:
        inits = self.field_inits(table)
        if not inits:
            return f"{type_path} {{}}"
        body = self.indent("\n".join(inits))
        return f"{type_path} {{\n{body}\n}}"

    def group_bindings(self, table: ir.ResolvedFieldTable) -> list[str]:
        return [f"let {self.binding(table, group)} = {group.source};" for group in table.groups]

    def block(self, parts: list[str]) -> str:
        return "{\n" + self.indent("\n".join(parts)) + "\n}"


@BackendRegistry.register("rust", ir.InvocationKind.SPREAD)
class StructUpdateBackend(RecordBackend):
    invocation_type = ir.StructUpdate

    def generate(self) -> Expansion:
        invocation: ir.StructUpdate = self.invocation
        expansion = self.new_expansion()
        table = self.resolve(invocation.composition)

        literal = self.literal(invocation.type_path.text, table)
        bindings = self.group_bindings(table)
        expansion.expression = self.block([*bindings, literal]) if bindings else literal
        return expansion


@BackendRegistry.register("rust", ir.InvocationKind.ANON)
class AnonRecordBackend(RecordBackend):
    """
    Declares a block-local struct generic over one type parameter per field,
    each parameter named after its field, and builds a value of it.
    """

    invocation_type = ir.AnonRecord

    def define_type(self, table: ir.ResolvedFieldTable) -> str:
        name = self.settings.anon_type_name
        fields = "\n".join(f"{field}: {field}," for field in table.names)
        return "\n".join(
            [
                ALLOW_NAMING,
                "#[derive(Copy, Clone, Debug, PartialEq, Eq)]",
                f"struct {name}<{', '.join(table.names)}> {{",
                self.indent(fields),
                "}",
            ]
        )

    def generate(self) -> Expansion:
        invocation: ir.AnonRecord = self.invocation
        expansion = self.new_expansion()
        table = self.resolve(invocation.composition)

        parts = [self.define_type(table), ""]
        parts.extend(self.group_bindings(table))
        parts.append(self.literal(self.settings.anon_type_name, table))
        expansion.expression = self.block(parts)
        return expansion
