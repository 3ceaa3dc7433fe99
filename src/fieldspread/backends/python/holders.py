"""
Python argument-holder backend (`fn_struct`).

The holder is a dataclass with one field per argument and a `call` method
that forwards the stored arguments, transformed by their modifiers, to the
target function. Untyped arguments get one type variable each.

Example output for `struct Adder for fn add(a: int = 1, b: int = 2) -> int`:

    import dataclasses

    @dataclasses.dataclass
    class Adder:
        a: int = dataclasses.field(default_factory=lambda: 1)
        b: int = dataclasses.field(default_factory=lambda: 2)

        def call(self) -> int:
            return add(self.a, self.b)
"""

from __future__ import annotations

import logging

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .modifiers import apply_modifier, needs_runtime
from .records import RUNTIME_MODULE

logger = logging.getLogger(__name__)


def _type_var_names(params: list[ir.GenericParam]) -> list[str]:
    """Generic parameters that python can express: no lifetimes, no consts."""
    return [
        param.name
        for param in params
        if not param.name.startswith("'") and not param.decl.startswith("const ")
    ]


@BackendRegistry.register("python", ir.InvocationKind.FN_STRUCT)
class FnStructBackend(Backend):
    invocation_type = ir.FnStruct

    def arg_type(self, arg: ir.FnArg) -> str:
        return arg.type if arg.type is not None else f"_{self.invocation.name}_{arg.name}"

    def generate(self) -> Expansion:
        holder: ir.FnStruct = self.invocation
        expansion = self.new_expansion()
        alias = self.settings.runtime_alias

        if holder.where_clause or holder.call_where:
            logger.debug("Where clauses of %s have no python equivalent, dropped", holder.name)

        untyped = [self.arg_type(arg) for arg in holder.args if arg.type is None]
        params = _type_var_names(holder.generics) + untyped
        type_vars = params + _type_var_names(holder.call_generics)
        if type_vars:
            expansion.add_import("import typing")
            expansion.statements.append(
                "\n".join(f'{var} = typing.TypeVar("{var}")' for var in type_vars)
            )

        expansion.add_import("import dataclasses")
        lines = ["@dataclasses.dataclass"]
        if params:
            lines.append(f"class {holder.name}(typing.Generic[{', '.join(params)}]):")
        else:
            lines.append(f"class {holder.name}:")

        call_args = []
        for arg in holder.args:
            field = f"{arg.name}: {self.arg_type(arg)}"
            if arg.default is not None:
                field += f" = dataclasses.field(default_factory=lambda: {arg.default.text})"
            lines.append(self.indent(field))

            if needs_runtime(arg.modifier):
                expansion.add_import(f"import {RUNTIME_MODULE} as {alias}")
            call_args.append(
                apply_modifier(
                    arg.modifier,
                    f"self.{arg.name}",
                    alias=alias,
                    target=holder.path,
                    field=arg.name,
                )
            )

        signature = ["self"]
        if holder.receiver is not None:
            signature.append(f"receiver: {holder.receiver_type}")
            call_args.insert(0, "receiver")
        returns = f" -> {holder.return_type}" if holder.return_type else ""

        if holder.args:
            lines.append("")
        lines.append(self.indent(f"def call({', '.join(signature)}){returns}:"))
        lines.append(self.indent(f"return {holder.path}({', '.join(call_args)})", 2))

        expansion.statements.append("\n".join(lines))
        expansion.expression = holder.name
        return expansion
