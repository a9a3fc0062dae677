"""Configuration management for the Hue CLI.

Two layers live here: runtime settings read from the environment (and an
optional ``.env`` file), and the per-user config file that supplies the
default bridge address and user token.
"""

import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

APP_DIR_NAME = "hue-cli"
CONFIG_FILE_NAME = "default.toml"


class HueCliSettings(BaseModel):
    """Runtime settings for the CLI."""

    log_level: str = Field(default="WARNING", description="Logging level")
    timeout_connect: float = Field(
        default=5.0, ge=1.0, le=30.0, description="Connection timeout in seconds"
    )
    timeout_read: float = Field(
        default=10.0, ge=1.0, le=60.0, description="Read timeout in seconds"
    )
    discovery_timeout: float = Field(
        default=3.0, ge=0.5, le=30.0, description="SSDP listen window in seconds"
    )
    config_file: Optional[Path] = Field(
        default=None, description="Override for the config file location"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("config_file", mode="before")
    @classmethod
    def empty_path_is_unset(cls, v):
        if v == "":
            return None
        return v

    @classmethod
    def from_env(cls) -> "HueCliSettings":
        """Create settings from environment variables."""
        load_dotenv()
        return cls(
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            timeout_connect=float(os.getenv("HUE_TIMEOUT_CONNECT", "5.0")),
            timeout_read=float(os.getenv("HUE_TIMEOUT_READ", "10.0")),
            discovery_timeout=float(os.getenv("HUE_DISCOVERY_TIMEOUT", "3.0")),
            config_file=os.getenv("HUE_CLI_CONFIG"),
        )


class FileConfig(BaseModel):
    """Values read from the user's config file."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    bridge: Optional[str] = None
    user: Optional[str] = None


def user_config_dir() -> Optional[Path]:
    """Return the platform's per-user configuration directory."""
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        return Path(appdata) if appdata else None

    try:
        home = Path.home()
    except RuntimeError:
        return None

    if sys.platform == "darwin":
        return home / "Library" / "Application Support"

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return home / ".config"


def default_config_path() -> Optional[Path]:
    """Location of ``hue-cli/default.toml`` inside the user config directory."""
    config_dir = user_config_dir()
    if config_dir is None:
        return None
    return config_dir / APP_DIR_NAME / CONFIG_FILE_NAME


def config_path(
    override: Optional[Path], settings: Optional[HueCliSettings] = None
) -> Optional[Path]:
    """Pick the config file: explicit flag, then environment, then default."""
    if override is not None:
        return override
    if settings is not None and settings.config_file is not None:
        return settings.config_file
    return default_config_path()


def load_config(path: Optional[Path]) -> FileConfig:
    """Load the config file at ``path``.

    A missing or unparseable file yields an empty config. Anything else that
    prevents reading it raises ConfigError.
    """
    if path is None:
        return FileConfig()

    try:
        with open(path, "rb") as f:
            data: Dict[str, Any] = tomllib.load(f)
    except FileNotFoundError:
        logger.debug(f"No config file at {path}")
        return FileConfig()
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring unparseable config file {path}: {e}")
        return FileConfig()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        return FileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value in config file {path}: {e}") from e


def resolve(cli_value: Optional[str], config_value: Optional[str]) -> Optional[str]:
    """Command-line value when given, otherwise the config file value."""
    if cli_value is not None:
        return cli_value
    return config_value
