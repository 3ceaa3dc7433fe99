"""
Rust field-assertion backend (`assert_fields_eq`).

Both sides are projected onto a block-local `Fields` struct of references to
the named fields, so a single `assert_eq!` compares exactly those fields and
its failure message prints both projections.
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .records import ALLOW_NAMING, AnonRecordBackend


@BackendRegistry.register("rust", ir.InvocationKind.ASSERT_FIELDS_EQ)
class AssertFieldsBackend(Backend):
    invocation_type = ir.AssertFields

    def projection(self, side: str, fields: list[str]) -> str:
        inits = "\n".join(f"{name}: &({side}.{name})," for name in fields)
        return f"let {side} = Fields {{\n{self.indent(inits)}\n}};"

    def generate(self) -> Expansion:
        assertion: ir.AssertFields = self.invocation
        expansion = self.new_expansion()
        fields = assertion.fields

        parts = []
        if assertion.anon is not None:
            record = AnonRecordBackend(
                ir.AnonRecord(composition=assertion.anon), self.settings, self.text, self.file
            ).generate()
            parts.append(f"let right = {record.expression};")
            parts.append("")
            right = "right"
        else:
            assert assertion.expected is not None
            right = assertion.expected.text

        generics = ", ".join(["'a", *fields])
        struct_fields = "\n".join(f"{name}: &'a {name}," for name in fields)
        parts.extend(
            [
                ALLOW_NAMING,
                "#[derive(Debug, PartialEq, Eq)]",
                f"struct Fields<{generics}> {{",
                self.indent(struct_fields),
                "}",
                "",
                f"let left = &{assertion.actual};",
                self.projection("left", fields),
                "",
                f"let right = &{right};",
                self.projection("right", fields),
                "",
            ]
        )
        args = ["left", "right", *(arg.text for arg in assertion.format_args)]
        parts.append(f"assert_eq!({', '.join(args)});")

        expansion.statements.append("{\n" + self.indent("\n".join(parts)) + "\n}")
        return expansion
