"""Audit configuration and settings.

This module provides the configuration model and I/O functions for an
audit run: where the install root, package database, repository mirror
and ignore rules live, and how many worker threads the parallel checks
use.

Configuration is optionally stored in ~/.config/archdiff/config.toml;
command-line options override values from the file.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from archdiff.core.paths import get_config_path

DEFAULT_ROOT = "/"
DEFAULT_DBPATH = "/var/lib/pacman"
DEFAULT_REPO = "/usr/share/archdiff"
DEFAULT_IGNORE_DIR = "/etc/archdiff/ignore"
DEFAULT_WORKERS = 8


class AuditConfig(BaseModel):
    """Configuration for one audit run.

    Attributes:
        root: Install root. Always ends with "/".
        dbpath: Package database location.
        repo: Repository mirror directory. Always ends with "/".
        ignore_dir: Directory of gitignore-syntax rule files.
        workers: Worker threads for the parallel checks (1-64).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: Annotated[str, Field(min_length=1, description="Install root")] = DEFAULT_ROOT
    dbpath: Annotated[
        str, Field(min_length=1, description="Package database location")
    ] = DEFAULT_DBPATH
    repo: Annotated[
        str, Field(min_length=1, description="Repository mirror directory")
    ] = DEFAULT_REPO
    ignore_dir: Annotated[
        str, Field(min_length=1, description="Ignore rules directory")
    ] = DEFAULT_IGNORE_DIR
    workers: Annotated[
        int, Field(ge=1, le=64, description="Worker threads (1-64)")
    ] = DEFAULT_WORKERS

    @field_validator("root", "repo")
    @classmethod
    def ensure_trailing_separator(cls, v: str) -> str:
        """Normalize directory paths to end with a separator."""
        return v if v.endswith("/") else f"{v}/"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AuditConfig:
    """Load audit configuration from a TOML file.

    A missing file at the default location is not an error: the defaults
    are returned. A missing file at an explicit path is.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated AuditConfig object.

    Raises:
        ConfigNotFoundError: If an explicit config path doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is None:
            return AuditConfig()
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AuditConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: AuditConfig, path: Path | None = None) -> Path:
    """Save audit configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AuditConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def apply_overrides(config: AuditConfig, **overrides: Any) -> AuditConfig:
    """Return a copy of the config with non-None overrides applied.

    Values are re-validated, so overridden root and repo paths are
    normalized like file values.

    Args:
        config: Base configuration.
        **overrides: Field values; None means "not given".

    Returns:
        New AuditConfig.

    Raises:
        ConfigError: If an override value is invalid.
    """
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return config
    try:
        return AuditConfig.model_validate({**config.model_dump(), **update})
    except ValidationError as e:
        raise ConfigError(f"Invalid option value: {e}") from e


def _config_to_dict(config: AuditConfig) -> dict[str, object]:
    """Convert AuditConfig to a dictionary for TOML serialization.

    Only non-default values are included to keep the file clean; an
    all-default config still records the install root.
    """
    defaults = AuditConfig()
    result: dict[str, object] = {
        key: value
        for key, value in config.model_dump().items()
        if value != getattr(defaults, key)
    }
    return result or {"root": config.root}
