"""
Expansion settings.

Settings come from, in increasing precedence: defaults, a `fieldspread.toml`
file (`[expansion]` table) or the `[tool.fieldspread]` table of a
`pyproject.toml`, then the FIELDSPREAD_DIALECT environment variable.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "fieldspread.toml"
DIALECT_ENV_VAR = "FIELDSPREAD_DIALECT"


class ExpansionSettings(BaseModel):
    """
    Options shared by every backend.

    Attributes:
        dialect: Host language of emitted code
        runtime_alias: Name emitted python code uses for `fieldspread.runtime`
        binding_prefix: Prefix of the locals that group sources are bound to
        anon_type_name: Name of the record type synthesized for anonymous records
        indent: Spaces per indentation level in emitted code
    """

    dialect: Literal["python", "rust"] = "python"
    runtime_alias: str = "_fs"
    binding_prefix: str = "__"
    anon_type_name: str = "Anon"
    indent: int = Field(default=4, ge=1, le=8)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("runtime_alias", "anon_type_name")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"'{v}' is not a valid identifier")
        return v

    @field_validator("binding_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not v or not (v + "x").isidentifier():
            raise ValueError(f"'{v}' cannot prefix an identifier")
        return v

    @property
    def tab(self) -> str:
        return " " * self.indent


def _settings_table(path: Path) -> dict[str, Any]:
    """Extract the settings table from a config file."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if path.name == "pyproject.toml":
        table = data.get("tool", {}).get("fieldspread", {})
    else:
        table = data.get("expansion", {})
    if not isinstance(table, dict):
        raise ConfigError(f"Settings in {path} must be a table")
    return table


def find_config(start: Path | None = None) -> Path | None:
    """
    Find the nearest config file, walking up from `start`.

    A `fieldspread.toml` wins over a `pyproject.toml` in the same directory;
    a `pyproject.toml` only counts when it has a `[tool.fieldspread]` table.
    """
    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        config = candidate / CONFIG_FILENAME
        if config.is_file():
            return config
        pyproject = candidate / "pyproject.toml"
        if pyproject.is_file() and "[tool.fieldspread]" in pyproject.read_text(encoding="utf-8"):
            return pyproject
    return None


def load_settings(path: Path | None = None, *, use_env: bool = True) -> ExpansionSettings:
    """
    Load settings from `path` (or the nearest config file) and the environment.

    Args:
        path: Explicit config file; searched for from the current directory if None
        use_env: Apply the FIELDSPREAD_DIALECT override

    Returns:
        Validated ExpansionSettings.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    config_path = path or find_config()
    values: dict[str, Any] = {}
    if config_path is not None:
        values.update(_settings_table(config_path))
        logger.debug("Loaded settings from %s", config_path)

    if use_env and os.environ.get(DIALECT_ENV_VAR):
        values["dialect"] = os.environ[DIALECT_ENV_VAR]

    try:
        return ExpansionSettings(**values)
    except ValidationError as e:
        source = config_path or "environment"
        raise ConfigError(f"Invalid settings in {source}: {e}") from e
