"""
Rust dialect backends.

Output mirrors what the equivalent declarative macros expand to; it is text
for a rust toolchain and is never run here.
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
