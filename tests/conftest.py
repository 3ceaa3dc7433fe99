"""Shared pytest fixtures for fieldspread tests."""

import dataclasses
from pathlib import Path

import pytest

from fieldspread.core.config import DIALECT_ENV_VAR, ExpansionSettings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the caller's environment and config files out of every test."""
    monkeypatch.delenv(DIALECT_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ExpansionSettings:
    """Default (python dialect) settings."""
    return ExpansionSettings()


@pytest.fixture
def rust_settings() -> ExpansionSettings:
    """Rust dialect settings."""
    return ExpansionSettings(dialect="rust")


@dataclasses.dataclass
class Foo:
    """Record used across backend tests."""

    one: list
    two: int
    three: dict
    four: str = "four"


@pytest.fixture
def foo() -> Foo:
    return Foo(one=["a", "b"], two=0, three={"n": 3}, four="x")


@pytest.fixture
def namespace(foo: Foo) -> dict:
    """Enclosing scope handed to Expansion.evaluate."""
    return {"Foo": Foo, "foo": foo}
