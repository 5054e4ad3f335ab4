"""Audit configuration and settings.

Configuration is optional and stored in ~/.config/sunshine/config.toml.
It only controls how a scan is run (default roots, parallelism,
verbosity); the permission rules themselves are fixed.

Example config.toml::

    default_roots = ["~", "/etc/ssh"]
    max_workers = 4
    verbose = false
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sunshine.core.paths import get_config_path

logger = logging.getLogger(__name__)


class AuditConfig(BaseModel):
    """Configuration for permission audits.

    Attributes:
        default_roots: Roots scanned when none are given on the command line.
            ``~`` is expanded. Empty means the current working directory.
        max_workers: Maximum number of roots scanned in parallel
            (None = one worker per root).
        verbose: Enable debug logging by default.
    """

    model_config = ConfigDict(extra="forbid")

    default_roots: Annotated[
        list[Path],
        Field(description="Roots scanned when none are given"),
    ] = []
    max_workers: Annotated[
        int | None,
        Field(ge=1, le=64, description="Parallel root workers (1-64)"),
    ] = None
    verbose: Annotated[
        bool,
        Field(description="Enable debug logging"),
    ] = False

    @field_validator("default_roots")
    @classmethod
    def expand_roots(cls, roots: list[Path]) -> list[Path]:
        """Expand ``~`` in configured roots."""
        return [root.expanduser() for root in roots]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AuditConfig:
    """Load audit configuration from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated AuditConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file is unreadable or the content doesn't
            match the schema.
    """
    if path is not None:
        config_path = path
    else:
        try:
            config_path = get_config_path()
        except RuntimeError as e:
            logger.debug("No config directory (%s), using defaults", e)
            return AuditConfig()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return AuditConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return AuditConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
