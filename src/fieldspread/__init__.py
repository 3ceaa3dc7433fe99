"""
fieldspread - field-level composition of records.

Expands compact field lists (spread, anonymous records, rebinding, argument
holders and field assertions) into plain python or rust code.
"""

from __future__ import annotations

from ._version import get_version
from .api import anon, assert_fields_eq, clone, expand, fn_struct, slet, spread
from .backends import Expansion
from .core import ir
from .core.config import ExpansionSettings, load_settings
from .core.errors import (
    BackendError,
    ConfigError,
    DuplicateFieldError,
    FieldspreadError,
    FieldSyntaxError,
    UnresolvedReferenceError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Pipeline
    "expand",
    "spread",
    "anon",
    "slet",
    "clone",
    "fn_struct",
    "assert_fields_eq",
    "Expansion",
    # Settings
    "ExpansionSettings",
    "load_settings",
    # Errors
    "FieldspreadError",
    "FieldSyntaxError",
    "DuplicateFieldError",
    "UnresolvedReferenceError",
    "BackendError",
    "ConfigError",
]
