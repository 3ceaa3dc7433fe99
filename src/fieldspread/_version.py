"""Version lookup: the source tree's pyproject.toml first, then installed metadata."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "fieldspread"
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_version(pyproject: Path) -> str | None:
    """Version declared by a fieldspread checkout, None for any other project."""
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version() -> str:
    """Version of the running fieldspread, "0.0.0" when it cannot be determined."""
    if _PYPROJECT.is_file() and (found := _source_version(_PYPROJECT)):
        return found
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
