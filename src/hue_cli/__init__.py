"""Philips Hue CLI - discover bridges, register users and control lights."""

__version__ = "1.0.0"
__description__ = "Command-line client for Philips Hue bridges"

from .exceptions import (  # noqa: E402
    ConfigError,
    DiscoveryError,
    DispatchError,
    HueApiError,
    HueConnectionError,
    HueError,
    HueRateLimitError,
    HueTimeoutError,
    HueValidationError,
    LinkButtonNotPressedError,
    QueryError,
    RegistrationError,
    SetError,
)
from .hue_client import AsyncHueClient  # noqa: E402
from .light_manager import LightManager  # noqa: E402
from .models import Light, LightCommand, LightState, StateChangeResult  # noqa: E402

__all__ = [
    "AsyncHueClient",
    "LightManager",
    "Light",
    "LightCommand",
    "LightState",
    "StateChangeResult",
    "HueError",
    "HueConnectionError",
    "HueTimeoutError",
    "HueValidationError",
    "HueRateLimitError",
    "HueApiError",
    "LinkButtonNotPressedError",
    "ConfigError",
    "DispatchError",
    "DiscoveryError",
    "RegistrationError",
    "QueryError",
    "SetError",
]
