"""
fieldspread backends.

One backend per (dialect, entry point). Importing this package registers the
python and rust dialects.
"""

from . import python, rust  # noqa: F401
from .base import Backend, BackendRegistry, Expansion


def get_backend(dialect: str, kind: str) -> type[Backend]:
    """Get the backend registered for a dialect and entry point."""
    return BackendRegistry.get(dialect, kind)


__all__ = [
    "Backend",
    "BackendRegistry",
    "Expansion",
    "get_backend",
]
