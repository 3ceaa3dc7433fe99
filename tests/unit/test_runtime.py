"""Tests for the runtime helpers used by emitted python code."""

from __future__ import annotations

import dataclasses
import typing
from typing import NamedTuple

import pytest
from pydantic import BaseModel, ValidationError

from fieldspread import runtime


@dataclasses.dataclass
class Settings:
    name: str
    retries: int = 3
    tags: list[str] = dataclasses.field(default_factory=list)


class Model(BaseModel):
    name: str
    size: float


class Row(NamedTuple):
    left: int
    right: int


T = typing.TypeVar("T")


def convert(count: int, label: typing.Any, item: T) -> None:
    pass


class TestClone:
    def test_deep_copy(self) -> None:
        original = {"a": [1, 2]}
        copy = runtime.clone(original)
        copy["a"].append(3)
        assert original == {"a": [1, 2]}


class TestInto:
    def test_field_annotation(self) -> None:
        assert runtime.into("4", Settings, "retries") == 4

    def test_parameter_annotation(self) -> None:
        assert runtime.into("7", convert, "count") == 7

    def test_any_and_typevar_pass_through(self) -> None:
        value = object()
        assert runtime.into(value, convert, "label") is value
        assert runtime.into(value, convert, "item") is value

    def test_unknown_name_passes_through(self) -> None:
        assert runtime.into("x", Settings, "missing") == "x"

    def test_invalid_value(self) -> None:
        with pytest.raises(ValidationError):
            runtime.into("many", Settings, "retries")


class TestRecordFields:
    def test_dataclass(self) -> None:
        assert runtime.record_fields(Settings) == ["name", "retries", "tags"]

    def test_pydantic_model(self) -> None:
        assert runtime.record_fields(Model) == ["name", "size"]

    def test_namedtuple(self) -> None:
        assert runtime.record_fields(Row) == ["left", "right"]


class TestStructUpdate:
    def test_fills_from_base(self) -> None:
        base = Settings(name="a", retries=5, tags=["x"])
        result = runtime.struct_update(Settings, base, name="b")
        assert result == Settings(name="b", retries=5, tags=["x"])

    def test_pydantic_base(self) -> None:
        result = runtime.struct_update(Model, Model(name="a", size=1.0), size=2.0)
        assert result == Model(name="a", size=2.0)

    def test_base_of_other_type(self) -> None:
        result = runtime.struct_update(Row, Settings(name="n"), left=1, right=2)
        assert result == Row(1, 2)


class TestFieldChecks:
    def test_passes(self) -> None:
        checks = runtime.FieldChecks(Row(1, 2), Row(1, 3))
        checks.check("left", 1, 1)
        checks.report()
        assert checks.passed
        assert checks.checked == ["left"]

    def test_report_lists_every_mismatch(self) -> None:
        checks = runtime.FieldChecks(Row(1, 2), Row(3, 4))
        checks.check("left", 1, 3)
        checks.check("right", 2, 4)
        with pytest.raises(AssertionError) as exc_info:
            checks.report("rows differ for {}", "case")
        message = str(exc_info.value)
        assert message.splitlines()[0] == (
            "assertion `actual == expected` failed for field(s) left, right"
        )
        assert "rows differ for case" in message
        assert "left: 1 != 3" in message
        assert "right: 2 != 4" in message
        assert "Row(left=1, right=2)" in message
        assert "Row(left=3, right=4)" in message

    def test_message_without_args_is_not_formatted(self) -> None:
        checks = runtime.FieldChecks(1, 2)
        checks.check("value", 1, 2)
        assert "{literal}" in checks.format("{literal}")
