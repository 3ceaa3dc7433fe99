"""
Base classes for expansion backends.

A backend renders one parsed invocation into an `Expansion` for one dialect.
Backends are registered per (dialect, kind) pair so each one stays a shallow
template over the shared resolved representation.
"""

from __future__ import annotations

import logging
import textwrap
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from fieldspread.core import ir
from fieldspread.core.config import ExpansionSettings
from fieldspread.core.errors import BackendError, UnresolvedReferenceError
from fieldspread.core.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class Expansion:
    """
    Code emitted for one invocation.

    Attributes:
        kind: Entry point that produced it
        dialect: Host language of the code
        imports: Import lines the code needs (python only)
        statements: Statements or items, each possibly spanning several lines
        expression: Trailing value expression, if the invocation produces a value
    """

    kind: ir.InvocationKind
    dialect: str
    imports: list[str] = field(default_factory=list)
    statements: list[str] = field(default_factory=list)
    expression: str | None = None

    def add_import(self, line: str) -> None:
        if line not in self.imports:
            self.imports.append(line)

    def render(self) -> str:
        """The full emitted source."""
        parts: list[str] = []
        if self.imports:
            parts.append("\n".join(self.imports))
        parts.extend(self.statements)
        if self.expression is not None:
            parts.append(self.expression)
        return "\n\n".join(parts) + "\n"

    def evaluate(self, namespace: dict[str, Any] | None = None) -> Any:
        """
        Run python code in `namespace` and return the expression's value.

        Statements (bindings, class definitions, rebindings) take effect in
        `namespace`, which plays the role of the enclosing scope.

        Raises:
            BackendError: If the expansion is not python code.
            UnresolvedReferenceError: If the code names something `namespace` lacks.
        """
        if self.dialect != "python":
            raise BackendError(f"Only python expansions can be evaluated, not {self.dialect}")

        scope = namespace if namespace is not None else {}
        body = "\n".join([*self.imports, *self.statements])
        try:
            exec(compile(body, f"<fieldspread {self.kind}>", "exec"), scope)
            if self.expression is None:
                return None
            return eval(compile(self.expression, f"<fieldspread {self.kind}>", "eval"), scope)
        except NameError as e:
            raise UnresolvedReferenceError(f"Unresolved reference in {self.kind} expansion: {e}") from e


class Backend(ABC):
    """
    Base class for all backends.

    A backend is created for one invocation and renders it once.

    Example:
        @BackendRegistry.register("python", ir.InvocationKind.SLET)
        class RebindingBackend(Backend):
            def generate(self) -> Expansion:
                expansion = self.new_expansion()
                ...
                return expansion
    """

    dialect: ClassVar[str]
    kind: ClassVar[ir.InvocationKind]
    invocation_type: ClassVar[type]

    def __init__(
        self,
        invocation: ir.Invocation,
        settings: ExpansionSettings | None = None,
        text: str | None = None,
        file: str = "<input>",
    ):
        """
        Initialize backend.

        Args:
            invocation: Parsed invocation of this backend's kind
            settings: Expansion settings
            text: Original invocation text, for error snippets
            file: Source name for error locations
        """
        if not isinstance(invocation, self.invocation_type):
            raise BackendError(
                f"{type(self).__name__} expects {self.invocation_type.__name__}, "
                f"got {type(invocation).__name__}"
            )
        self.invocation = invocation
        self.settings = settings or ExpansionSettings(dialect=self.dialect)
        self.text = text
        self.file = file

    @abstractmethod
    def generate(self) -> Expansion:
        """
        Render the invocation.

        Returns:
            Expansion with the emitted code
        """
        pass

    def new_expansion(self) -> Expansion:
        return Expansion(kind=self.kind, dialect=self.dialect)

    def resolve(self, composition: ir.Composition) -> ir.ResolvedFieldTable:
        return resolve(composition, text=self.text, file=self.file)

    def binding(self, table: ir.ResolvedFieldTable, group: ir.SourceGroup) -> str:
        return table.binding_of(group, self.settings.binding_prefix)

    def source_of(self, table: ir.ResolvedFieldTable, resolved: ir.ResolvedField) -> str:
        """The untransformed value expression of a resolved field."""
        entry = resolved.entry
        if resolved.group is not None:
            return f"{self.binding(table, resolved.group)}.{entry.name}"
        if entry.value is not None:
            return entry.value.text
        return entry.name

    def indent(self, text: str, levels: int = 1) -> str:
        return textwrap.indent(text, self.settings.tab * levels)


B = TypeVar("B", bound=type[Backend])


class BackendRegistry:
    """
    Registry of backends.

    Maps (dialect, kind) pairs to backend implementations.
    """

    _backends: dict[tuple[str, ir.InvocationKind], type[Backend]] = {}

    @classmethod
    def register(cls, dialect: str, kind: ir.InvocationKind) -> Callable[[B], B]:
        """Class decorator registering a backend."""

        def decorator(backend: B) -> B:
            backend.dialect = dialect
            backend.kind = kind
            cls._backends[(dialect, kind)] = backend
            return backend

        return decorator

    @classmethod
    def get(cls, dialect: str, kind: ir.InvocationKind | str) -> type[Backend]:
        """
        Get the backend for a dialect and entry point.

        Raises:
            BackendError: If none is registered.
        """
        try:
            kind = ir.InvocationKind(kind)
        except ValueError as e:
            raise BackendError(f"Unknown invocation kind: {kind}") from e
        backend = cls._backends.get((dialect, kind))
        if backend is None:
            raise BackendError(f"No {kind} backend for dialect '{dialect}'")
        return backend

    @classmethod
    def list_backends(cls) -> list[tuple[str, ir.InvocationKind]]:
        """List registered (dialect, kind) pairs."""
        return sorted(cls._backends)

    @classmethod
    def dialects(cls) -> list[str]:
        return sorted({dialect for dialect, _ in cls._backends})
