"""Pytest configuration and fixtures for Hue CLI tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from hue_cli.config import HueCliSettings
from hue_cli.models import Light


@pytest.fixture
def settings():
    """Settings with defaults, independent of the environment."""
    return HueCliSettings()


@pytest.fixture
def mock_hue_response_success():
    """Mock successful Hue API response."""
    return [{"success": {"/lights/1/state/on": True}}]


@pytest.fixture
def mock_hue_response_error():
    """Mock error Hue API response."""
    return [{
        "error": {
            "type": 3,
            "address": "/lights/99",
            "description": "resource, /lights/99, not available"
        }
    }]


@pytest.fixture
def mock_link_button_error():
    """Bridge answer to POST /api before the link button is pressed."""
    return [{
        "error": {
            "type": 101,
            "address": "",
            "description": "link button not pressed"
        }
    }]


@pytest.fixture
def mock_lights_response():
    """Mock response for listing all lights."""
    return {
        "1": {
            "name": "Living Room Light",
            "state": {
                "on": True,
                "bri": 200,
                "hue": 8418,
                "sat": 140,
                "ct": 366,
                "colormode": "ct",
                "xy": [0.4573, 0.41],
                "alert": "none",
                "effect": "none",
                "reachable": True
            },
            "type": "Extended color light"
        },
        "2": {
            "name": "Kitchen",
            "state": {"on": False, "bri": 100, "alert": "none", "reachable": True},
            "type": "Dimmable light"
        }
    }


@pytest.fixture
def mock_bridge_config():
    """Mock bridge configuration response."""
    return {
        "name": "Test Bridge",
        "swversion": "1.50.1963220030",
        "apiversion": "1.50.0",
        "mac": "00:17:88:01:02:03",
        "bridgeid": "001788FFFE010203",
        "modelid": "BSB002"
    }


@pytest.fixture
def color_light(mock_lights_response):
    return Light.model_validate(mock_lights_response["1"])


@pytest.fixture
def dimmable_light(mock_lights_response):
    return Light.model_validate(mock_lights_response["2"])


@pytest.fixture
def make_response():
    """Factory for mocked httpx.Response objects."""
    def _make(payload, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        return response
    return _make


@pytest.fixture
def mock_async_client():
    """Mock httpx.AsyncClient instance."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.aclose.return_value = None
    return client


@pytest.fixture
def mock_http(mock_async_client):
    """Patch httpx.AsyncClient in the client module with mock_async_client."""
    with patch('hue_cli.hue_client.httpx.AsyncClient') as mock_client_class:
        mock_client_class.return_value = mock_async_client
        mock_client_class.return_value.__aenter__.return_value = mock_async_client
        mock_client_class.return_value.__aexit__.return_value = None
        yield mock_async_client
