"""
Rust argument-holder backend (`fn_struct`).

Emits the holder struct, a `Default` impl when every argument has a default,
and an impl with `call`, which forwards the stored arguments to the target.
Untyped arguments become type parameters named after themselves.
"""

from __future__ import annotations

from fieldspread.core import ir

from ..base import Backend, BackendRegistry, Expansion
from .modifiers import apply_modifier, reference_prefix
from .records import ALLOW_NAMING


def _angle(items: list[str]) -> str:
    return f"<{', '.join(items)}>" if items else ""


def _where(clause: str | None) -> str:
    return f" where {clause}" if clause else ""


@BackendRegistry.register("rust", ir.InvocationKind.FN_STRUCT)
class FnStructBackend(Backend):
    invocation_type = ir.FnStruct

    def generate(self) -> Expansion:
        holder: ir.FnStruct = self.invocation
        expansion = self.new_expansion()

        untyped = [arg.name for arg in holder.args if arg.type is None]
        decls = [param.decl for param in holder.generics] + untyped
        names = [param.name for param in holder.generics] + untyped
        impl_gen = _angle(decls)
        self_type = f"{holder.name}{_angle(names)}"
        where = _where(holder.where_clause)

        fields = "\n".join(f"{arg.name}: {arg.type or arg.name}," for arg in holder.args)
        head = f"struct {holder.name}{impl_gen}{where} {{"
        if holder.visibility:
            head = f"{holder.visibility} {head}"
        struct = [ALLOW_NAMING] if untyped else []
        struct.append(head)
        if fields:
            struct.append(self.indent(fields))
        struct.append("}")
        expansion.statements.append("\n".join(struct))

        if holder.has_defaults:
            inits = "\n".join(f"{arg.name}: {arg.default}," for arg in holder.args)
            default = self.braced("fn default() -> Self", self.braced("Self", inits))
            expansion.statements.append(
                self.braced(f"impl{impl_gen} ::core::default::Default for {self_type}{where}", default)
            )

        params = ["&self" if holder.call_by_ref else "self"]
        forwarded = [apply_modifier(arg.modifier, f"self.{arg.name}") for arg in holder.args]
        if holder.receiver is not None:
            params.append(f"__self: {reference_prefix(holder.receiver)}{holder.receiver_type}")
            forwarded.insert(0, "__self")
        returns = holder.return_type or "()"
        call_gen = _angle([param.decl for param in holder.call_generics])

        signature = (
            f"pub fn call{call_gen}({', '.join(params)}) -> {returns}{_where(holder.call_where)}"
        )
        call = self.braced(signature, f"{holder.path}({', '.join(forwarded)})")
        expansion.statements.append(self.braced(f"impl{impl_gen} {self_type}{where}", call))
        return expansion

    def braced(self, head: str, body: str) -> str:
        return f"{head} {{\n{self.indent(body)}\n}}"
