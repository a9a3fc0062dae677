"""Exception hierarchy for the Hue CLI."""

from typing import Optional

LINK_BUTTON_NOT_PRESSED = 101


class HueError(Exception):
    """Base exception for all Hue-related errors."""

    pass


class HueConnectionError(HueError):
    """Network/connection related errors."""

    pass


class HueTimeoutError(HueError):
    """Request timeout errors."""

    pass


class HueValidationError(HueError):
    """Parameter validation errors."""

    pass


class HueRateLimitError(HueError):
    """Rate limiting errors."""

    pass


class HueApiError(HueError):
    """Error object returned by the bridge in a response body."""

    def __init__(
        self,
        description: str,
        error_type: Optional[int] = None,
        address: Optional[str] = None,
    ):
        super().__init__(f"Hue API error: {description}")
        self.description = description
        self.error_type = error_type
        self.address = address


class LinkButtonNotPressedError(HueApiError):
    """The bridge refused to create a user because the link button is not pressed."""

    pass


class ConfigError(HueError):
    """The config file exists but cannot be loaded."""

    pass


class DispatchError(HueError):
    """A command is missing the bridge or user it needs."""

    pass


class DiscoveryError(HueError):
    """Bridge discovery transport failed."""

    pass


class RegistrationError(HueError):
    """User registration failed for a reason other than the link button."""

    pass


class QueryError(HueError):
    """Reading light state failed."""

    pass


class SetError(HueError):
    """Sending a light state command failed."""

    pass
