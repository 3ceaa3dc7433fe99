"""Tests for the field composition parser.

Covers:
- Modifier grammar
- Field entries, values and groups
- `..base` placement
- Entry points: struct update, anon, rebinding, clone, fn_struct, assertions
- Syntax errors with locations
"""

from __future__ import annotations

import pytest

from fieldspread.core import ir
from fieldspread.core.errors import DuplicateFieldError, FieldSyntaxError
from fieldspread.core.parser import (
    parse_anon,
    parse_assert_fields,
    parse_clone,
    parse_field_list,
    parse_fn_struct,
    parse_invocation,
    parse_rebinding,
    parse_struct_update,
)

K = ir.ModifierKind


# ============================================================================
# Modifiers
# ============================================================================


class TestModifiers:
    """Every prefix maps to exactly one modifier kind."""

    @pytest.mark.parametrize(
        ("text", "kind"),
        [
            ("name", K.DIRECT),
            ("+name", K.CLONE),
            ("&name", K.REF),
            ("&mut name", K.REF_MUT),
            (">name", K.INTO),
            ("+>name", K.CLONE_INTO),
            ("[str.upper]name", K.CUSTOM),
            ("[Cow::Borrowed]&name", K.CUSTOM_REF),
            ("[f]&mut name", K.CUSTOM_REF_MUT),
        ],
    )
    def test_prefix(self, text: str, kind: K) -> None:
        entry = parse_field_list(text).entries[0]
        assert entry.name == "name"
        assert entry.modifier.kind == kind

    def test_custom_path(self) -> None:
        entry = parse_field_list("[::std::borrow::Cow::Borrowed]&name", dialect="rust").entries[0]
        assert entry.modifier.path == "::std::borrow::Cow::Borrowed"

    def test_modifier_str_round_trips(self) -> None:
        entry = parse_field_list("[Cow::Owned]&mut name").entries[0]
        assert str(entry) == "[Cow::Owned]&mut name"

    @pytest.mark.parametrize("text", ["*name", "-name", "<name", "=name", ">>name"])
    def test_unknown_modifier(self, text: str) -> None:
        with pytest.raises(FieldSyntaxError, match="Unknown modifier"):
            parse_field_list(text)

    def test_empty_custom_path(self) -> None:
        with pytest.raises(FieldSyntaxError, match="function path"):
            parse_field_list("[]name")

    def test_custom_path_must_be_plain(self) -> None:
        with pytest.raises(FieldSyntaxError, match="plain function path"):
            parse_field_list("[f(1)]name")

    def test_modifier_without_name(self) -> None:
        with pytest.raises(FieldSyntaxError, match="after modifier `\\+`"):
            parse_field_list("+, b")


# ============================================================================
# Field lists
# ============================================================================


class TestFieldLists:
    """Entries, values and groups in source order."""

    def test_direct_entries(self) -> None:
        composition = parse_field_list("a, +b, c")
        assert [e.name for e in composition.entries] == ["a", "b", "c"]
        assert composition.groups == []

    def test_trailing_comma(self) -> None:
        assert len(parse_field_list("a, b,").entries) == 2

    def test_value(self) -> None:
        entry = parse_field_list("count: len(items) + 1, b").entries[0]
        assert entry.name == "count"
        assert entry.value is not None
        assert entry.value.text == "len(items) + 1"

    def test_value_keeps_nested_commas(self) -> None:
        entry = parse_field_list("pair: (1, 2), b").entries[0]
        assert entry.value is not None
        assert entry.value.text == "(1, 2)"

    def test_value_keeps_lambda_colon(self) -> None:
        entry = parse_field_list("key: lambda x: x[0]").entries[0]
        assert entry.value is not None
        assert entry.value.text == "lambda x: x[0]"

    def test_group(self) -> None:
        composition = parse_field_list("{ +one, &three } in foo, >two")
        group = composition.groups[0]
        assert [e.name for e in group.entries] == ["one", "three"]
        assert group.source.text == "foo"
        assert group.binding_name() == "__one_three"
        assert [e.name for e in composition.entries] == ["one", "three", "two"]

    def test_group_source_expression(self) -> None:
        composition = parse_field_list("{ a } in load(path, mode='r'), b")
        assert composition.groups[0].source.text == "load(path, mode='r')"

    def test_group_rename(self) -> None:
        entry = parse_field_list("{ +total: amount } in order").entries[0]
        assert entry.name == "amount"
        assert entry.rename == "total"
        assert entry.target == "total"
        assert entry.modifier.kind == K.CLONE

    def test_interleaved_groups(self) -> None:
        composition = parse_field_list("a, { b } in x, c, { d } in y")
        kinds = [type(item).__name__ for item in composition.items]
        assert kinds == ["FieldEntry", "SourceGroup", "FieldEntry", "SourceGroup"]

    def test_braced_list(self) -> None:
        composition = parse_field_list("{ a, b }")
        assert [e.name for e in composition.entries] == ["a", "b"]
        assert composition.groups == []

    def test_locations(self) -> None:
        composition = parse_field_list("a,\n  +b")
        entry = composition.entries[1]
        assert (entry.line, entry.column) == (2, 3)

    def test_base(self) -> None:
        composition = parse_field_list("a, ..defaults()", allow_base=True)
        assert composition.base is not None
        assert composition.base.text == "defaults()"

    def test_base_not_allowed(self) -> None:
        with pytest.raises(FieldSyntaxError, match="only allowed in struct updates"):
            parse_field_list("a, ..base")

    def test_base_must_be_last(self) -> None:
        with pytest.raises(FieldSyntaxError, match="must come last"):
            parse_field_list("..base, a", allow_base=True)

    def test_mut_outside_rebinding(self) -> None:
        with pytest.raises(FieldSyntaxError, match="only allowed in rebindings"):
            parse_field_list("mut a")

    def test_unicode_names(self) -> None:
        composition = parse_field_list("café, { ñ: a } in données")
        assert [e.target for e in composition.entries] == ["café", "ñ"]
        assert composition.groups[0].source.text == "données"


class TestGroupErrors:
    """Malformed groups."""

    def test_missing_in(self) -> None:
        with pytest.raises(FieldSyntaxError, match="Expected `in <source>`"):
            parse_field_list("{ a, b } foo")

    def test_missing_source(self) -> None:
        with pytest.raises(FieldSyntaxError, match="source expression"):
            parse_field_list("{ a } in")

    def test_nested_group(self) -> None:
        with pytest.raises(FieldSyntaxError, match="cannot be nested"):
            parse_field_list("{ { a } in x } in y")

    def test_empty_group(self) -> None:
        with pytest.raises(FieldSyntaxError, match="at least one field"):
            parse_field_list("{ } in x, b")

    def test_unclosed_group(self) -> None:
        with pytest.raises(FieldSyntaxError, match="never closed"):
            parse_field_list("{ a, b")

    def test_value_inside_group(self) -> None:
        with pytest.raises(FieldSyntaxError, match="Only a source field name"):
            parse_field_list("{ a: 1 + 2 } in x")

    def test_error_points_at_token(self) -> None:
        with pytest.raises(FieldSyntaxError) as exc_info:
            parse_field_list("a,\n{ b } x", file="demo.py")
        context = exc_info.value.context
        assert context is not None
        assert (context.file, context.line, context.column) == ("demo.py", 2, 7)
        assert "demo.py:2:7" in str(exc_info.value)


# ============================================================================
# Entry points
# ============================================================================


class TestStructUpdate:
    def test_parse(self) -> None:
        update = parse_struct_update("Foo { { +one, &three } in foo, >two, ..base }")
        assert update.type_path.text == "Foo"
        assert len(update.composition.entries) == 3
        assert update.composition.base is not None
        assert update.composition.base.text == "base"

    def test_generic_type_path(self) -> None:
        update = parse_struct_update("Wrapper::<u8> { a }", dialect="rust")
        assert update.type_path.text == "Wrapper::<u8>"

    def test_missing_brace(self) -> None:
        with pytest.raises(FieldSyntaxError, match="Expected '\\{' after target type"):
            parse_struct_update("Foo")

    def test_trailing_tokens(self) -> None:
        with pytest.raises(FieldSyntaxError, match="after invocation"):
            parse_struct_update("Foo { a } b")


class TestAnon:
    def test_bare_and_braced(self) -> None:
        bare = parse_anon("a, b: 2").composition
        braced = parse_anon("{ a, b: 2 }").composition
        assert [str(e) for e in bare.entries] == [str(e) for e in braced.entries] == ["a", "b: 2"]

    def test_group_only(self) -> None:
        anon = parse_anon("{ a, b } in pair")
        assert len(anon.composition.groups) == 1

    def test_empty(self) -> None:
        with pytest.raises(FieldSyntaxError, match="at least one field"):
            parse_anon("")

    def test_no_base(self) -> None:
        with pytest.raises(FieldSyntaxError, match="only allowed in struct updates"):
            parse_anon("a, ..rest")


class TestRebinding:
    def test_mut_and_modifiers(self) -> None:
        entries = parse_rebinding("mut +a, &b").composition.entries
        assert entries[0].mutable is True
        assert entries[0].modifier.kind == K.CLONE
        assert entries[1].mutable is False

    def test_group_rejected(self) -> None:
        with pytest.raises(FieldSyntaxError, match="bare names"):
            parse_rebinding("{ a } in x")

    def test_value_rejected(self) -> None:
        with pytest.raises(FieldSyntaxError, match="cannot take a value"):
            parse_rebinding("a: 1")

    def test_clone_forces_clone(self) -> None:
        entries = parse_clone("s1, mut s2").composition.entries
        assert [e.modifier.kind for e in entries] == [K.CLONE, K.CLONE]
        assert entries[1].mutable is True

    def test_clone_rejects_modifiers(self) -> None:
        with pytest.raises(FieldSyntaxError, match="bare names"):
            parse_clone("&s1")


class TestFnStruct:
    def test_full_signature(self) -> None:
        holder = parse_fn_struct(
            "pub(crate) struct &Holder<'a, T: Clone> where T: Send "
            "for<U> where U: Copy fn Foo::<T>::bar(&self, a: Vec<Vec<u8>> = vec![], &c: u32 = 3) -> u32",
            dialect="rust",
        )
        assert holder.name == "Holder"
        assert holder.visibility == "pub(crate)"
        assert holder.call_by_ref is True
        assert [p.name for p in holder.generics] == ["'a", "T"]
        assert [p.decl for p in holder.generics] == ["'a", "T: Clone"]
        assert holder.where_clause == "T: Send"
        assert [p.name for p in holder.call_generics] == ["U"]
        assert holder.call_where == "U: Copy"
        assert holder.path == "Foo::<T>::bar"
        assert holder.receiver is not None
        assert holder.receiver.kind == K.REF
        assert holder.receiver_type == "Foo::<T>"
        assert [a.name for a in holder.args] == ["a", "c"]
        assert holder.args[0].type == "Vec<Vec<u8>>"
        assert holder.args[1].modifier.kind == K.REF
        assert holder.return_type == "u32"
        assert holder.has_defaults is True

    def test_struct_keyword_optional(self) -> None:
        holder = parse_fn_struct("Adder for fn add(a: int, b: int)")
        assert holder.name == "Adder"
        assert holder.return_type is None
        assert holder.has_defaults is False

    def test_untyped_argument(self) -> None:
        holder = parse_fn_struct("Holder for fn f(x, y: int)")
        assert holder.args[0].type is None

    def test_qualified_receiver(self) -> None:
        holder = parse_fn_struct("H for fn <Foo as Bar>::baz(self)", dialect="rust")
        assert holder.receiver_type == "Foo"

    def test_mixed_defaults(self) -> None:
        with pytest.raises(FieldSyntaxError, match="all have default values"):
            parse_fn_struct("H for fn f(a: int = 1, b: int)")

    def test_self_not_first(self) -> None:
        with pytest.raises(FieldSyntaxError, match="only allowed once in first position"):
            parse_fn_struct("H for fn T.f(a: int, self)")

    def test_self_with_clone(self) -> None:
        with pytest.raises(FieldSyntaxError, match="before `self`"):
            parse_fn_struct("H for fn T.f(+self)")

    def test_self_on_free_function(self) -> None:
        with pytest.raises(FieldSyntaxError, match="not a method"):
            parse_fn_struct("H for fn f(self)")

    def test_missing_for(self) -> None:
        with pytest.raises(FieldSyntaxError, match="Expected `for`"):
            parse_fn_struct("H fn f()")


class TestAssertFields:
    def test_field_list_form(self) -> None:
        assertion = parse_assert_fields('actual, expected, [bar, baz], "failed: {}", n')
        assert assertion.actual.text == "actual"
        assert assertion.expected is not None
        assert assertion.expected.text == "expected"
        assert assertion.fields == ["bar", "baz"]
        assert [a.text for a in assertion.format_args] == ['"failed: {}"', "n"]

    def test_anon_form(self) -> None:
        assertion = parse_assert_fields('get(), { bar: "x", { baz } in other }')
        assert assertion.expected is None
        assert assertion.anon is not None
        assert assertion.fields == ["bar", "baz"]

    def test_empty_field_list(self) -> None:
        with pytest.raises(FieldSyntaxError, match="cannot be empty"):
            parse_assert_fields("a, b, []")

    def test_empty_anon(self) -> None:
        with pytest.raises(FieldSyntaxError, match="cannot be empty"):
            parse_assert_fields("a, { }")

    def test_repeated_field(self) -> None:
        with pytest.raises(DuplicateFieldError) as exc_info:
            parse_assert_fields("a, b, [bar, bar]")
        assert exc_info.value.field == "bar"


class TestParseInvocation:
    def test_dispatch(self) -> None:
        assert isinstance(parse_invocation("spread", "Foo { a }"), ir.StructUpdate)
        assert isinstance(parse_invocation(ir.InvocationKind.CLONE, "a"), ir.Rebinding)

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            parse_invocation("splat", "a")


class TestGrammarWordsAsNames:
    """`mut`, `fn`, `struct`, `where` and `pub` are plain names in python."""

    def test_field_with_value(self) -> None:
        entry = parse_struct_update("Query { where: 1, +fn }").composition.entries
        assert [(e.name, e.modifier.kind) for e in entry] == [("where", K.DIRECT), ("fn", K.CLONE)]
        assert entry[0].value is not None

    def test_mut_as_group_field(self) -> None:
        group = parse_field_list("{ mut, pub: struct } in x").groups[0]
        assert [(e.name, e.target) for e in group.entries] == [("mut", "mut"), ("struct", "pub")]
        assert group.entries[0].mutable is False

    def test_mut_as_direct_field(self) -> None:
        entries = parse_field_list("a, mut").entries
        assert [e.name for e in entries] == ["a", "mut"]

    def test_mut_prefix_still_rejected_outside_rebinding(self) -> None:
        with pytest.raises(FieldSyntaxError, match="only allowed in rebindings"):
            parse_field_list("mut where")

    def test_rebinding_of_mut_name(self) -> None:
        entries = parse_rebinding("mut fn, mut").composition.entries
        assert [(e.name, e.mutable) for e in entries] == [("fn", True), ("mut", False)]

    def test_assertion_field_names(self) -> None:
        assert parse_assert_fields("a, b, [where, pub]").fields == ["where", "pub"]

    def test_keywords_in_rust(self) -> None:
        with pytest.raises(FieldSyntaxError, match="Expected field name"):
            parse_struct_update("Query { where: 1 }", dialect="rust")
        with pytest.raises(FieldSyntaxError, match="only allowed in rebindings"):
            parse_field_list("{ mut } in x", dialect="rust")
