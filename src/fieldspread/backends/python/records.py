"""
Python record backends: struct update and anonymous records.

Group sources become module-level bindings evaluated once each; the record is
built with keyword arguments in resolved-table order.

Example output for `Foo { { one, +three } in foo, >two }`:

    import fieldspread.runtime as _fs

    __one_three = foo

    Foo(
        one=__one_three.one,
        three=_fs.clone(__one_three.three),
        two=_fs.into(two, Foo, 'two'),
    )
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .modifiers import apply_modifier, needs_runtime

RUNTIME_MODULE = "fieldspread.runtime"


class RecordBackend(Backend):
    """Shared rendering of a resolved table as constructor keywords."""

    def runtime_import(self) -> str:
        return f"import {RUNTIME_MODULE} as {self.settings.runtime_alias}"

    def bind_groups(self, expansion: Expansion, table: ir.ResolvedFieldTable) -> None:
        for group in table.groups:
            expansion.statements.append(f"{self.binding(table, group)} = {group.source}")

    def keywords(self, expansion: Expansion, table: ir.ResolvedFieldTable, target: str) -> list[str]:
        keywords = []
        for resolved in table.fields:
            modifier = resolved.entry.modifier
            if needs_runtime(modifier):
                expansion.add_import(self.runtime_import())
            value = apply_modifier(
                modifier,
                self.source_of(table, resolved),
                alias=self.settings.runtime_alias,
                target=target,
                field=resolved.target,
            )
            keywords.append(f"{resolved.target}={value}")
        return keywords

    def call(self, callee: str, args: list[str]) -> str:
        if not args:
            return f"{callee}()"
        body = self.indent("\n".join(f"{arg}," for arg in args))
        return f"{callee}(\n{body}\n)"


@BackendRegistry.register("python", ir.InvocationKind.SPREAD)
class StructUpdateBackend(RecordBackend):
    """Builds a value of a named record class."""

    invocation_type = ir.StructUpdate

    def generate(self) -> Expansion:
        invocation: ir.StructUpdate = self.invocation
        expansion = self.new_expansion()
        table = self.resolve(invocation.composition)
        type_path = invocation.type_path.text

        self.bind_groups(expansion, table)
        keywords = self.keywords(expansion, table, type_path)

        if table.base is None:
            expansion.expression = self.call(type_path, keywords)
        else:
            expansion.add_import(self.runtime_import())
            alias = self.settings.runtime_alias
            args = [type_path, table.base.text, *keywords]
            expansion.expression = self.call(f"{alias}.struct_update", args)
        return expansion


@BackendRegistry.register("python", ir.InvocationKind.ANON)
class AnonRecordBackend(RecordBackend):
    """
    Builds a value of a record class synthesized at the call site.

    The class is a dataclass generic over one type variable per field, so
    equality and repr come for free and every field keeps its value's type.
    """

    invocation_type = ir.AnonRecord

    def type_var(self, field: str) -> str:
        return f"_{self.settings.anon_type_name}_{field}"

    def define_type(self, table: ir.ResolvedFieldTable) -> list[str]:
        name = self.settings.anon_type_name
        type_vars = [self.type_var(field) for field in table.names]
        lines = [f'{var} = typing.TypeVar("{var}")' for var in type_vars]
        lines.append("")
        lines.append("")
        lines.append("@dataclasses.dataclass")
        lines.append(f"class {name}(typing.Generic[{', '.join(type_vars)}]):")
        lines.extend(
            self.indent(f"{field}: {var}") for field, var in zip(table.names, type_vars)
        )
        return lines

    def generate(self) -> Expansion:
        invocation: ir.AnonRecord = self.invocation
        expansion = self.new_expansion()
        table = self.resolve(invocation.composition)
        name = self.settings.anon_type_name

        expansion.add_import("import dataclasses")
        expansion.add_import("import typing")
        expansion.statements.append("\n".join(self.define_type(table)))
        self.bind_groups(expansion, table)
        expansion.expression = self.call(name, self.keywords(expansion, table, name))
        return expansion
