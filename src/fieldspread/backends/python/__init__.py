"""
Python dialect backends.

Importing this package registers every python backend.
"""

from .assertions import AssertFieldsBackend
from .bindings import CloneBackend, RebindingBackend
from .holders import FnStructBackend
from .records import AnonRecordBackend, StructUpdateBackend

__all__ = [
    "AnonRecordBackend",
    "AssertFieldsBackend",
    "CloneBackend",
    "FnStructBackend",
    "RebindingBackend",
    "StructUpdateBackend",
]
