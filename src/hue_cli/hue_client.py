"""Async Hue bridge client for the v1 REST API."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import HueCliSettings
from .exceptions import (
    LINK_BUTTON_NOT_PRESSED,
    HueApiError,
    HueConnectionError,
    HueError,
    HueRateLimitError,
    HueTimeoutError,
    HueValidationError,
    LinkButtonNotPressedError,
)
from .models import Light, LightCommand, StateChangeResult

logger = logging.getLogger(__name__)

_LIGHTS_ADAPTER = TypeAdapter(Dict[int, Light])
_RESULTS_ADAPTER = TypeAdapter(List[StateChangeResult])


def _api_error(error: Dict[str, Any]) -> HueApiError:
    """Build the exception matching a bridge ``{"error": {...}}`` object."""
    error_type = error.get("type")
    description = error.get("description", "Unknown error")
    address = error.get("address")
    if error_type == LINK_BUTTON_NOT_PRESSED:
        return LinkButtonNotPressedError(description, error_type, address)
    return HueApiError(description, error_type, address)


class AsyncHueClient:
    """Async HTTP client for one Hue bridge."""

    def __init__(
        self,
        bridge: str,
        user: Optional[str] = None,
        settings: Optional[HueCliSettings] = None,
    ):
        settings = settings or HueCliSettings()
        self.bridge = bridge
        self.user = user
        self.base_url = f"http://{bridge}/api"
        self.timeout = httpx.Timeout(
            connect=settings.timeout_connect,
            read=settings.timeout_read,
            write=5.0,
            pool=5.0,
        )
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @asynccontextmanager
    async def _get_client(self):
        """Get HTTP client (context manager for standalone usage)."""
        if self._client:
            yield self._client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    @property
    def user_url(self) -> str:
        if not self.user:
            raise HueValidationError("A registered user is required for this request")
        return f"{self.base_url}/{self.user}"

    async def _safe_request(
        self,
        endpoint: str,
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
        raise_api_errors: bool = True,
    ) -> Any:
        """Make a single request to the Hue API and map failures to HueError.

        With ``raise_api_errors=False`` a list of bridge error objects is
        returned as-is instead of being raised.
        """
        method = method.upper()
        if method not in ("GET", "PUT", "POST"):
            raise ValueError(f"Unsupported method: {method}")
        logger.debug(f"{method} {endpoint} {data if data is not None else ''}")

        try:
            async with self._get_client() as client:
                if method == "GET":
                    response = await client.get(endpoint)
                elif method == "PUT":
                    response = await client.put(endpoint, json=data)
                else:
                    response = await client.post(endpoint, json=data)

                if response.status_code == 429:
                    raise HueRateLimitError("Bridge is rate limiting requests")
                elif response.status_code == 404:
                    raise HueValidationError(f"Resource not found: {endpoint}")
                elif response.status_code == 401:
                    raise HueConnectionError("Invalid username/authentication")

                response.raise_for_status()
                result = response.json()

        except httpx.TimeoutException as e:
            raise HueTimeoutError(f"Request to {self.bridge} timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise HueConnectionError(
                f"Bridge answered with HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise HueConnectionError(f"Request to {self.bridge} failed: {e}") from e
        except ValueError as e:
            raise HueError(f"Invalid response from bridge: {e}") from e

        # The bridge answers errors with HTTP 200 and a list of error objects.
        if (
            raise_api_errors
            and isinstance(result, list)
            and result
            and all(isinstance(item, dict) and "error" in item for item in result)
        ):
            raise _api_error(result[0]["error"])

        return result

    async def create_user(self, device_type: str) -> str:
        """Register a new user on the bridge and return its token."""
        result = await self._safe_request(
            self.base_url, "POST", {"devicetype": device_type}
        )
        try:
            return result[0]["success"]["username"]
        except (KeyError, IndexError, TypeError) as e:
            raise HueError(f"Unexpected response: {result}") from e

    async def get_light(self, light_id: int) -> Light:
        """Get a specific light."""
        endpoint = f"{self.user_url}/lights/{light_id}"
        result = await self._safe_request(endpoint, "GET")
        try:
            return Light.model_validate(result)
        except ValidationError as e:
            raise HueError(f"Unexpected light data for light {light_id}: {e}") from e

    async def get_all_lights(self) -> Dict[int, Light]:
        """Get all lights from the bridge, keyed by light id."""
        endpoint = f"{self.user_url}/lights"
        result = await self._safe_request(endpoint, "GET")
        try:
            return _LIGHTS_ADAPTER.validate_python(result)
        except ValidationError as e:
            raise HueError(f"Unexpected lights data: {e}") from e

    async def set_light_state(
        self, light_id: int, command: LightCommand
    ) -> List[StateChangeResult]:
        """Send a partial state update to a light."""
        endpoint = f"{self.user_url}/lights/{light_id}/state"
        # One entry per field; each is reported, so errors stay in the list.
        result = await self._safe_request(
            endpoint, "PUT", command.to_payload(), raise_api_errors=False
        )
        try:
            return _RESULTS_ADAPTER.validate_python(result)
        except ValidationError as e:
            raise HueError(f"Unexpected response: {result}") from e

    async def get_config(self) -> Dict[str, Any]:
        """Get bridge configuration."""
        endpoint = f"{self.user_url}/config"
        return await self._safe_request(endpoint, "GET")

    async def test_connection(self) -> bool:
        """Test connection to the bridge."""
        try:
            await self.get_config()
            logger.info(f"Successfully connected to Hue bridge at {self.bridge}")
            return True
        except HueError as e:
            logger.error(f"Failed to connect to Hue bridge: {e}")
            return False
