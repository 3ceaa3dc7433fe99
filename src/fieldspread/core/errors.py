"""
Error types for fieldspread parsing, resolution, and expansion.
"""

from dataclasses import dataclass
from typing import Optional


class FieldspreadError(Exception):
    """Base exception for all fieldspread errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class FieldSyntaxError(FieldspreadError):
    """
    Raised when an invocation cannot be parsed.

    Examples:
    - Unknown modifier symbol
    - Missing `in` after a field group
    - Unbalanced braces
    - `..base` outside the struct update entry
    """

    pass


class DuplicateFieldError(FieldspreadError):
    """
    Raised when two explicit claims target the same field.

    Attributes:
        field: The contested target field name
        first_origin: Description of the claim that came first
        second_origin: Description of the conflicting claim
    """

    def __init__(
        self,
        field: str,
        first_origin: str,
        second_origin: str,
        context: Optional["ErrorContext"] = None,
    ):
        self.field = field
        self.first_origin = first_origin
        self.second_origin = second_origin
        super().__init__(
            f"Duplicate field `{field}`: claimed by {first_origin} and by {second_origin}",
            context,
        )


class UnresolvedReferenceError(FieldspreadError):
    """
    Raised when the host cannot resolve a name referenced by emitted code.

    Examples:
    - Custom modifier path that does not exist
    - Rebinding of a name that is not bound in the enclosing scope
    """

    pass


class BackendError(FieldspreadError):
    """
    Raised when a backend cannot render an invocation.

    Examples:
    - Unknown dialect or backend kind
    - Invocation model handed to the wrong backend
    """

    pass


class ConfigError(FieldspreadError):
    """Raised when a configuration file or value is invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Name of the source the invocation came from
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line showing the error location
    """

    file: str
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "<input>:1:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the offending line with its number and an error marker."""
        if not self.snippet:
            return ""

        prefix = f"{self.line:4d} | "
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{self.snippet}\n{' ' * marker_pos}^^^"


def source_line(text: str, line: int) -> str | None:
    """Return the 1-indexed line of `text`, or None when out of range."""
    lines = text.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return None


def make_syntax_error(
    message: str,
    text: str,
    line: int,
    column: int,
    file: str = "<input>",
) -> FieldSyntaxError:
    """
    Helper to create a FieldSyntaxError with context.

    Args:
        message: Error description
        text: Full invocation text, used to extract the snippet
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Source name

    Returns:
        FieldSyntaxError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=source_line(text, line))
    return FieldSyntaxError(message, context)
