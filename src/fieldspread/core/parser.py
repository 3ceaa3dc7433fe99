"""
Recursive descent parser for field composition invocations.

Grammar:
    field_list   → (item ("," item)* ","?)? ("," ".." expr)?
    item         → group | entry
    group        → "{" entry ("," entry)* ","? "}" "in" expr
    entry        → "mut"? modifier? IDENT (":" expr)?
    modifier     → "&" "mut"? | "+" ">"? | ">" | "[" path "]" ("&" "mut"?)?
    path         → "::"? IDENT (("::" | ".") IDENT)*

Entry points:
    spread       → type_path "{" field_list "}"
    anon         → field_list | "{" field_list "}"
    slet, clone  → field_list of bare names
    fn_struct    → vis? "struct"? "&"? IDENT generics? where? "for" generics? where?
                   "fn" path "(" (arg ("," arg)*)? ")" ("->" type)?
    arg          → modifier? IDENT (":" type)? ("=" expr)?
    assert       → expr "," (expr "," "[" IDENT ("," IDENT)* "]" | "{" field_list "}")
                   ("," expr)*

Expressions and types are host-language text: the parser only balances
brackets to find where they end and keeps their raw source.
"""

from __future__ import annotations

import logging
import re

from . import ir
from .errors import (
    DuplicateFieldError,
    ErrorContext,
    FieldSyntaxError,
    make_syntax_error,
    source_line,
)
from .lexer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

_OPENERS: dict[TokenKind, TokenKind] = {
    TokenKind.LBRACE: TokenKind.RBRACE,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
    TokenKind.LPAREN: TokenKind.RPAREN,
}
_CLOSERS = set(_OPENERS.values())

# Symbols that can only be a mistyped modifier when they start an entry
_MODIFIER_POSITION_SYMBOLS = {
    TokenKind.OP,
    TokenKind.SHR,
    TokenKind.LT,
    TokenKind.ASSIGN,
    TokenKind.COLON,
    TokenKind.DOT,
    TokenKind.PATH_SEP,
    TokenKind.ARROW,
}

# Grammar words that python code may still use as plain identifiers
_SOFT_KEYWORDS = {
    TokenKind.MUT,
    TokenKind.FN,
    TokenKind.STRUCT,
    TokenKind.WHERE,
    TokenKind.PUB,
}

_PARAM_NAME_RE = re.compile(r"^(?:const\s+)?('?[^\W\d]\w*)")


class _Parser:
    """Recursive descent parser over one invocation's tokens."""

    def __init__(self, text: str, dialect: str = "python", file: str = "<input>") -> None:
        self.text = text
        self.file = file
        self.dialect = dialect
        self.tokens = tokenize(text, dialect, file)
        self.pos = 0
        self.allow_mut = False

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def context(self, tok: Token) -> ErrorContext:
        return ErrorContext(
            file=self.file,
            line=tok.line,
            column=tok.column,
            snippet=source_line(self.text, tok.line),
        )

    def error(self, message: str, tok: Token | None = None) -> FieldSyntaxError:
        return FieldSyntaxError(message, self.context(tok or self.current))

    def expect(self, kind: TokenKind, what: str | None = None) -> Token:
        tok = self.current
        if tok.kind != kind:
            found = "end of input" if tok.kind == TokenKind.EOF else repr(tok.value)
            raise self.error(f"Expected {what or kind}, got {found}")
        return self.advance()

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def is_name(self, tok: Token) -> bool:
        if tok.kind == TokenKind.IDENT:
            return True
        return self.dialect == "python" and tok.kind in _SOFT_KEYWORDS

    def expect_name(self, what: str) -> Token:
        if self.is_name(self.current):
            return self.advance()
        return self.expect(TokenKind.IDENT, what)

    def expect_end(self) -> None:
        if self.current.kind != TokenKind.EOF:
            raise self.error(f"Unexpected {self.current.value!r} after invocation")

    def matching_close(self, index: int) -> int | None:
        """Index of the token closing the bracket at `index`, if balanced."""
        depth = 0
        for i in range(index, len(self.tokens)):
            kind = self.tokens[i].kind
            if kind in _OPENERS:
                depth += 1
            elif kind in _CLOSERS:
                depth -= 1
                if depth == 0:
                    return i
        return None

    # -- Raw host-language text --

    def capture(self, stops: set[TokenKind], what: str, angles: bool = False) -> ir.Expression:
        """
        Consume tokens up to a stop token at nesting depth zero.

        With `angles`, `<` and `>` nest as in type syntax; otherwise only a
        turbofish `::<` opens an angle bracket.
        """
        first = self.current
        closers: list[TokenKind] = []
        last: Token | None = None

        while True:
            tok = self.current
            if not closers and tok.kind in stops:
                break
            if tok.kind == TokenKind.EOF:
                if closers:
                    raise self.error(f"Unbalanced brackets in {what}", first)
                break

            if tok.kind in _OPENERS:
                closers.append(_OPENERS[tok.kind])
            elif tok.kind in _CLOSERS:
                if not closers:
                    raise self.error(f"Unbalanced {tok.value!r} in {what}")
                expected = closers.pop()
                if expected != tok.kind:
                    raise self.error(f"Mismatched {tok.value!r} in {what}")
            elif tok.kind == TokenKind.LT and (
                angles or (last is not None and last.kind == TokenKind.PATH_SEP)
            ):
                closers.append(TokenKind.GT)
            elif tok.kind == TokenKind.GT and closers and closers[-1] == TokenKind.GT:
                closers.pop()
            elif tok.kind == TokenKind.SHR and closers and closers[-1] == TokenKind.GT:
                closers.pop()
                if not closers or closers[-1] != TokenKind.GT:
                    # `>>` closes this list and the enclosing one
                    self._split_shr()
                    last = self.tokens[self.pos - 1]
                    continue
                closers.pop()

            last = self.advance()

        if last is None:
            found = "end of input" if first.kind == TokenKind.EOF else repr(first.value)
            raise self.error(f"Expected {what}, got {found}", first)
        return ir.Expression(
            text=self.text[first.pos : last.end], line=first.line, column=first.column
        )

    def _split_shr(self) -> None:
        """Replace the current `>>` with two `>` tokens and step over the first."""
        tok = self.current
        first = Token(TokenKind.GT, ">", tok.pos, tok.pos + 1, tok.line, tok.column)
        second = Token(TokenKind.GT, ">", tok.pos + 1, tok.end, tok.line, tok.column + 1)
        self.tokens[self.pos : self.pos + 1] = [first, second]
        self.pos += 1

    # -- Modifiers and entries --

    def parse_modifier(self) -> ir.Modifier:
        """'&' 'mut'? | '+' '>'? | '>' | '[' path ']' ('&' 'mut'?)? | nothing"""
        tok = self.current

        if self.match(TokenKind.AMP):
            if self.match(TokenKind.MUT):
                return ir.Modifier(kind=ir.ModifierKind.REF_MUT)
            return ir.Modifier(kind=ir.ModifierKind.REF)
        if self.match(TokenKind.PLUS):
            if self.match(TokenKind.GT):
                return ir.Modifier(kind=ir.ModifierKind.CLONE_INTO)
            return ir.Modifier(kind=ir.ModifierKind.CLONE)
        if self.match(TokenKind.GT):
            return ir.Modifier(kind=ir.ModifierKind.INTO)
        if tok.kind == TokenKind.LBRACKET:
            path = self.parse_custom_path()
            if self.match(TokenKind.AMP):
                if self.match(TokenKind.MUT):
                    return ir.Modifier(kind=ir.ModifierKind.CUSTOM_REF_MUT, path=path)
                return ir.Modifier(kind=ir.ModifierKind.CUSTOM_REF, path=path)
            return ir.Modifier(kind=ir.ModifierKind.CUSTOM, path=path)
        if tok.kind in _MODIFIER_POSITION_SYMBOLS:
            raise self.error(f"Unknown modifier {tok.value!r}, expected one of & &mut + +> > [path]")
        return ir.DIRECT

    def parse_custom_path(self) -> str:
        """'[' '::'? IDENT (('::' | '.') IDENT)* ']'"""
        open_tok = self.expect(TokenKind.LBRACKET)
        if self.current.kind == TokenKind.RBRACKET:
            raise self.error("Custom modifier needs a function path between brackets", open_tok)

        start = self.current
        self.match(TokenKind.PATH_SEP)
        self.expect(TokenKind.IDENT, "function path")
        while self.current.kind in (TokenKind.PATH_SEP, TokenKind.DOT):
            self.advance()
            self.expect(TokenKind.IDENT, "function path segment")
        end = self.tokens[self.pos - 1]

        if self.current.kind != TokenKind.RBRACKET:
            raise self.error("Custom modifier must be a plain function path")
        self.advance()
        return self.text[start.pos : end.end]

    def parse_name(self, after: ir.Modifier) -> Token:
        tok = self.current
        if not self.is_name(tok):
            found = "end of input" if tok.kind == TokenKind.EOF else repr(tok.value)
            if after.is_direct:
                raise self.error(f"Expected field name, got {found}")
            raise self.error(f"Expected field name after modifier `{after}`, got {found}")
        return self.advance()

    def mut_is_name(self, stops: set[TokenKind]) -> bool:
        """Whether a leading `mut` is itself the field name (python only)."""
        if self.current.kind != TokenKind.MUT or not self.is_name(self.current):
            return False
        return self.peek(1).kind in stops | {TokenKind.COLON, TokenKind.EOF}

    def parse_entry(self, stops: set[TokenKind], in_group: bool) -> ir.FieldEntry:
        """'mut'? modifier? IDENT (':' expr)?"""
        start = self.current
        mut_tok = None
        if not self.mut_is_name(stops):
            mut_tok = self.match(TokenKind.MUT)
        if mut_tok and not self.allow_mut:
            raise self.error("`mut` is only allowed in rebindings", mut_tok)

        modifier = self.parse_modifier()
        name_tok = self.parse_name(modifier)

        if not self.match(TokenKind.COLON):
            return ir.FieldEntry(
                name=name_tok.value,
                modifier=modifier,
                mutable=mut_tok is not None,
                line=start.line,
                column=start.column,
            )

        if in_group:
            # `target: field` takes source.field into target
            source_tok = self.current
            if not self.is_name(source_tok) or self.peek(1).kind not in stops:
                raise self.error("Only a source field name may follow `:` inside a group")
            self.advance()
            return ir.FieldEntry(
                name=source_tok.value,
                rename=name_tok.value,
                modifier=modifier,
                mutable=mut_tok is not None,
                line=start.line,
                column=start.column,
            )

        value = self.capture(stops, f"value for field `{name_tok.value}`")
        return ir.FieldEntry(
            name=name_tok.value,
            modifier=modifier,
            value=value,
            mutable=mut_tok is not None,
            line=start.line,
            column=start.column,
        )

    # -- Groups and field lists --

    def parse_group(self, terminator: TokenKind) -> ir.SourceGroup:
        """'{' entry (',' entry)* ','? '}' 'in' expr"""
        open_tok = self.expect(TokenKind.LBRACE)
        inner_stops = {TokenKind.COMMA, TokenKind.RBRACE}
        entries: list[ir.FieldEntry] = []

        while self.current.kind != TokenKind.RBRACE:
            if self.current.kind == TokenKind.EOF:
                raise self.error("Unbalanced '{': field group is never closed", open_tok)
            if self.current.kind == TokenKind.LBRACE:
                raise self.error("Field groups cannot be nested")
            entries.append(self.parse_entry(inner_stops, in_group=True))
            if self.current.kind == TokenKind.RBRACE:
                break
            if self.current.kind == TokenKind.EOF:
                raise self.error("Unbalanced '{': field group is never closed", open_tok)
            self.expect(TokenKind.COMMA, "',' between fields")
        self.advance()

        if not entries:
            raise self.error("Field group must list at least one field", open_tok)
        if self.current.kind != TokenKind.IN:
            raise self.error("Expected `in <source>` after field group")
        self.advance()

        source = self.capture({TokenKind.COMMA, terminator}, "source expression after `in`")
        return ir.SourceGroup(
            entries=entries, source=source, line=open_tok.line, column=open_tok.column
        )

    def parse_field_list(self, terminator: TokenKind, allow_base: bool = False) -> ir.Composition:
        """(item (',' item)* ','?)? (',' '..' expr)?"""
        items: list[ir.FieldEntry | ir.SourceGroup] = []
        base: ir.Expression | None = None
        stops = {TokenKind.COMMA, terminator}

        while self.current.kind != terminator:
            tok = self.current
            if tok.kind == TokenKind.EOF:
                raise self.error("Unbalanced braces: field list is never closed")
            if tok.kind == TokenKind.LBRACE:
                items.append(self.parse_group(terminator))
            elif tok.kind == TokenKind.DOTDOT:
                if not allow_base:
                    raise self.error("`..base` is only allowed in struct updates")
                self.advance()
                base = self.capture(stops, "base expression after `..`")
                if self.current.kind == TokenKind.COMMA:
                    raise self.error("`..base` must come last, without a trailing comma")
                break
            elif tok.kind in _CLOSERS:
                raise self.error(f"Unbalanced {tok.value!r}")
            else:
                items.append(self.parse_entry(stops, in_group=False))

            if self.current.kind == terminator:
                break
            self.expect(TokenKind.COMMA, "',' between fields")

        return ir.Composition(items=items, base=base)

    def parse_braced_or_bare_list(self, allow_base: bool = False) -> ir.Composition:
        """A whole-input field list, optionally wrapped in one pair of braces."""
        if self.current.kind == TokenKind.LBRACE:
            close = self.matching_close(self.pos)
            if close is not None and self.tokens[close + 1].kind == TokenKind.EOF:
                self.advance()
                composition = self.parse_field_list(TokenKind.RBRACE, allow_base)
                self.expect(TokenKind.RBRACE, "'}'")
                return composition
        return self.parse_field_list(TokenKind.EOF, allow_base)

    # -- Generics and signatures --

    def parse_generics(self) -> list[ir.GenericParam]:
        """'<' param (',' param)* ','? '>'"""
        self.expect(TokenKind.LT)
        params: list[ir.GenericParam] = []
        while self.current.kind != TokenKind.GT:
            decl = self.capture({TokenKind.COMMA, TokenKind.GT}, "generic parameter", angles=True)
            m = _PARAM_NAME_RE.match(decl.text)
            if not m:
                raise self.error(f"Invalid generic parameter {decl.text!r}")
            params.append(ir.GenericParam(decl=decl.text, name=m.group(1)))
            if self.current.kind == TokenKind.GT:
                break
            self.expect(TokenKind.COMMA, "',' between generic parameters")
        self.advance()
        return params

    def parse_visibility(self) -> str | None:
        """'pub' ('(' ... ')')?"""
        pub = self.match(TokenKind.PUB)
        if not pub:
            return None
        end = pub
        if self.current.kind == TokenKind.LPAREN:
            close = self.matching_close(self.pos)
            if close is None:
                raise self.error("Unbalanced '(' in visibility")
            end = self.tokens[close]
            self.pos = close + 1
        return self.text[pub.pos : end.end]

    def parse_fn_arg(self) -> tuple[ir.FnArg | None, ir.Modifier | None]:
        """modifier? IDENT (':' type)? ('=' expr)?, or a `self` receiver."""
        start = self.current
        modifier = self.parse_modifier()
        name_tok = self.parse_name(modifier)

        if name_tok.value == "self":
            if modifier.kind not in (
                ir.ModifierKind.DIRECT,
                ir.ModifierKind.REF,
                ir.ModifierKind.REF_MUT,
            ):
                raise self.error("Only `&`, `&mut` or no modifier is allowed before `self`", start)
            return None, modifier

        arg_type = None
        if self.match(TokenKind.COLON):
            arg_type = self.capture(
                {TokenKind.COMMA, TokenKind.RPAREN, TokenKind.ASSIGN},
                f"type of argument `{name_tok.value}`",
                angles=True,
            ).text
        default = None
        if self.match(TokenKind.ASSIGN):
            default = self.capture(
                {TokenKind.COMMA, TokenKind.RPAREN}, f"default of argument `{name_tok.value}`"
            )
        arg = ir.FnArg(
            name=name_tok.value,
            modifier=modifier,
            type=arg_type,
            default=default,
            line=start.line,
            column=start.column,
        )
        return arg, None

    # -- Entry points --

    def parse_struct_update(self) -> ir.StructUpdate:
        type_path = self.capture({TokenKind.LBRACE}, "target type", angles=True)
        self.expect(TokenKind.LBRACE, "'{' after target type")
        composition = self.parse_field_list(TokenKind.RBRACE, allow_base=True)
        self.expect(TokenKind.RBRACE, "'}'")
        self.expect_end()
        return ir.StructUpdate(type_path=type_path, composition=composition)

    def parse_anon(self) -> ir.AnonRecord:
        start = self.current
        composition = self.parse_braced_or_bare_list()
        self.expect_end()
        if composition.is_empty:
            raise self.error("Anonymous record must have at least one field", start)
        return ir.AnonRecord(composition=composition)

    def parse_rebinding(self) -> ir.Rebinding:
        start = self.current
        self.allow_mut = True
        composition = self.parse_braced_or_bare_list()
        self.expect_end()

        if composition.is_empty:
            raise self.error("Rebinding must list at least one name", start)
        for item in composition.items:
            if isinstance(item, ir.SourceGroup):
                raise make_syntax_error(
                    "Rebindings take bare names; field groups are not allowed",
                    self.text,
                    item.line,
                    item.column,
                    self.file,
                )
            if item.value is not None:
                raise make_syntax_error(
                    f"Rebinding `{item.name}` cannot take a value; it always rebinds the "
                    "outer value of the same name",
                    self.text,
                    item.line,
                    item.column,
                    self.file,
                )
        return ir.Rebinding(composition=composition)

    def parse_clone(self) -> ir.Rebinding:
        rebinding = self.parse_rebinding()
        entries: list[ir.FieldEntry | ir.SourceGroup] = []
        for entry in rebinding.composition.entries:
            if not entry.modifier.is_direct:
                raise make_syntax_error(
                    f"clone takes bare names, found modifier `{entry.modifier}`",
                    self.text,
                    entry.line,
                    entry.column,
                    self.file,
                )
            clone = ir.Modifier(kind=ir.ModifierKind.CLONE)
            entries.append(entry.model_copy(update={"modifier": clone}))
        return ir.Rebinding(composition=ir.Composition(items=entries))

    def parse_fn_struct(self) -> ir.FnStruct:
        visibility = self.parse_visibility()
        self.match(TokenKind.STRUCT)
        call_by_ref = self.match(TokenKind.AMP) is not None
        name = self.expect(TokenKind.IDENT, "holder name").value

        generics = self.parse_generics() if self.current.kind == TokenKind.LT else []
        where_clause = None
        if self.match(TokenKind.WHERE):
            where_clause = self.capture({TokenKind.FOR}, "where clause", angles=True).text

        self.expect(TokenKind.FOR, "`for`")
        call_generics = self.parse_generics() if self.current.kind == TokenKind.LT else []
        call_where = None
        if self.match(TokenKind.WHERE):
            call_where = self.capture({TokenKind.FN}, "where clause", angles=True).text

        self.expect(TokenKind.FN, "`fn`")
        path_tok = self.current
        path = self.capture({TokenKind.LPAREN}, "function path", angles=True).text
        open_tok = self.expect(TokenKind.LPAREN, "'('")

        args: list[ir.FnArg] = []
        receiver: ir.Modifier | None = None
        while self.current.kind != TokenKind.RPAREN:
            if self.current.kind == TokenKind.EOF:
                raise self.error("Unbalanced '(': argument list is never closed", open_tok)
            arg_tok = self.current
            arg, self_modifier = self.parse_fn_arg()
            if self_modifier is not None:
                if args or receiver is not None:
                    raise self.error("`self` is only allowed once in first position", arg_tok)
                receiver = self_modifier
            else:
                assert arg is not None
                args.append(arg)
            if self.current.kind == TokenKind.RPAREN:
                break
            self.expect(TokenKind.COMMA, "',' between arguments")
        self.advance()

        return_type = None
        if self.match(TokenKind.ARROW):
            return_type = self.capture({TokenKind.EOF}, "return type", angles=True).text
        self.expect_end()

        with_default = sum(1 for arg in args if arg.default is not None)
        if with_default and with_default != len(args):
            raise self.error(
                "Arguments must either all have default values (`= value`) or none have",
                open_tok,
            )

        holder = ir.FnStruct(
            name=name,
            visibility=visibility,
            call_by_ref=call_by_ref,
            generics=generics,
            where_clause=where_clause,
            call_generics=call_generics,
            call_where=call_where,
            path=path,
            receiver=receiver,
            args=args,
            return_type=return_type,
        )
        if receiver is not None and holder.receiver_type == path:
            raise self.error("Cannot use `self` with a function that is not a method", path_tok)
        return holder

    def parse_assert_fields(self) -> ir.AssertFields:
        actual = self.capture({TokenKind.COMMA}, "actual value")
        self.expect(TokenKind.COMMA, "',' after actual value")

        expected = None
        anon = None
        if self.current.kind == TokenKind.LBRACE:
            open_tok = self.advance()
            anon = self.parse_field_list(TokenKind.RBRACE)
            self.expect(TokenKind.RBRACE, "'}'")
            if anon.is_empty:
                raise self.error("Expected fields cannot be empty", open_tok)
            fields = [entry.target for entry in anon.entries]
        else:
            expected = self.capture({TokenKind.COMMA}, "expected value")
            self.expect(TokenKind.COMMA, "',' after expected value")
            fields = self.parse_field_names()

        format_args: list[ir.Expression] = []
        if self.match(TokenKind.COMMA):
            while self.current.kind != TokenKind.EOF:
                format_args.append(self.capture({TokenKind.COMMA}, "message argument"))
                if not self.match(TokenKind.COMMA):
                    break
        self.expect_end()

        return ir.AssertFields(
            actual=actual,
            expected=expected,
            anon=anon,
            fields=fields,
            format_args=format_args,
        )

    def parse_field_names(self) -> list[str]:
        """'[' IDENT (',' IDENT)* ','? ']'"""
        open_tok = self.expect(TokenKind.LBRACKET, "'[' starting the field list")
        names: list[str] = []
        seen: dict[str, Token] = {}
        while self.current.kind != TokenKind.RBRACKET:
            tok = self.expect_name("field name")
            if tok.value in seen:
                first = seen[tok.value]
                raise DuplicateFieldError(
                    tok.value,
                    f"field list entry at {first.line}:{first.column}",
                    f"field list entry at {tok.line}:{tok.column}",
                    self.context(tok),
                )
            seen[tok.value] = tok
            names.append(tok.value)
            if self.current.kind == TokenKind.RBRACKET:
                break
            self.expect(TokenKind.COMMA, "',' between field names")
        self.advance()
        if not names:
            raise self.error("Field list cannot be empty", open_tok)
        return names


# =============================================================================
# Public API
# =============================================================================


def parse_field_list(
    text: str,
    *,
    allow_base: bool = False,
    allow_mut: bool = False,
    dialect: str = "python",
    file: str = "<input>",
) -> ir.Composition:
    """
    Parse a bare (or braced) field list into a composition.

    Args:
        text: Field list source, e.g. "{ +one, &three } in foo, >two"
        allow_base: Accept a trailing `..base`
        allow_mut: Accept `mut` prefixes
        dialect: Host dialect of embedded expressions
        file: Source name for error locations

    Raises:
        FieldSyntaxError: If the field list is malformed.
    """
    parser = _Parser(text, dialect, file)
    parser.allow_mut = allow_mut
    composition = parser.parse_braced_or_bare_list(allow_base)
    parser.expect_end()
    logger.debug("Parsed field list with %d items", len(composition.items))
    return composition


def parse_struct_update(text: str, *, dialect: str = "python", file: str = "<input>") -> ir.StructUpdate:
    """Parse `TargetType { <field-list>, ..base }`."""
    return _Parser(text, dialect, file).parse_struct_update()


def parse_anon(text: str, *, dialect: str = "python", file: str = "<input>") -> ir.AnonRecord:
    """Parse an anonymous record field list."""
    return _Parser(text, dialect, file).parse_anon()


def parse_rebinding(text: str, *, dialect: str = "python", file: str = "<input>") -> ir.Rebinding:
    """Parse a list of bare names to rebind."""
    return _Parser(text, dialect, file).parse_rebinding()


def parse_clone(text: str, *, dialect: str = "python", file: str = "<input>") -> ir.Rebinding:
    """Parse `[mut] name, ...` into a rebinding that clones every name."""
    return _Parser(text, dialect, file).parse_clone()


def parse_fn_struct(text: str, *, dialect: str = "python", file: str = "<input>") -> ir.FnStruct:
    """Parse `struct Name for fn target(<args>) -> ReturnType`."""
    return _Parser(text, dialect, file).parse_fn_struct()


def parse_assert_fields(text: str, *, dialect: str = "python", file: str = "<input>") -> ir.AssertFields:
    """Parse the arguments of a field equality assertion."""
    return _Parser(text, dialect, file).parse_assert_fields()


_ENTRY_PARSERS = {
    ir.InvocationKind.SPREAD: parse_struct_update,
    ir.InvocationKind.ANON: parse_anon,
    ir.InvocationKind.SLET: parse_rebinding,
    ir.InvocationKind.CLONE: parse_clone,
    ir.InvocationKind.FN_STRUCT: parse_fn_struct,
    ir.InvocationKind.ASSERT_FIELDS_EQ: parse_assert_fields,
}


def parse_invocation(
    kind: ir.InvocationKind | str,
    text: str,
    *,
    dialect: str = "python",
    file: str = "<input>",
) -> ir.Invocation:
    """
    Parse `text` with the entry point for `kind`.

    Raises:
        FieldSyntaxError: If the invocation is malformed.
        ValueError: If `kind` names no entry point.
    """
    kind = ir.InvocationKind(kind)
    invocation = _ENTRY_PARSERS[kind](text, dialect=dialect, file=file)
    logger.debug("Parsed %s invocation from %s", kind, file)
    return invocation
