"""
Python field-assertion backend (`assert_fields_eq`).

Both sides are evaluated once, each named field is compared on its own, and
every mismatch is reported together by `FieldChecks.report`.
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .records import RUNTIME_MODULE, AnonRecordBackend


@BackendRegistry.register("python", ir.InvocationKind.ASSERT_FIELDS_EQ)
class AssertFieldsBackend(Backend):
    invocation_type = ir.AssertFields

    def generate(self) -> Expansion:
        assertion: ir.AssertFields = self.invocation
        expansion = self.new_expansion()
        alias = self.settings.runtime_alias
        prefix = self.settings.binding_prefix
        left, right, checks = f"{prefix}actual", f"{prefix}expected", f"{prefix}checks"

        expansion.add_import(f"import {RUNTIME_MODULE} as {alias}")
        if assertion.anon is not None:
            record = AnonRecordBackend(
                ir.AnonRecord(composition=assertion.anon), self.settings, self.text, self.file
            ).generate()
            for line in record.imports:
                expansion.add_import(line)
            expansion.statements.extend(record.statements)
            expected = record.expression
        else:
            assert assertion.expected is not None
            expected = assertion.expected.text

        lines = [
            f"{left} = {assertion.actual}",
            f"{right} = {expected}",
            f"{checks} = {alias}.FieldChecks({left}, {right})",
        ]
        lines.extend(
            f'{checks}.check("{name}", {left}.{name}, {right}.{name})'
            for name in assertion.fields
        )
        message = ", ".join(arg.text for arg in assertion.format_args)
        lines.append(f"{checks}.report({message})")
        expansion.statements.append("\n".join(lines))
        return expansion
