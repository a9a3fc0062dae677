"""Registers a new application user on a bridge via the link button."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Tuple

from .config import HueCliSettings
from .discovery import SsdpTransport, discover_bridges
from .exceptions import (
    DiscoveryError,
    HueError,
    LinkButtonNotPressedError,
    RegistrationError,
)
from .hue_client import AsyncHueClient

logger = logging.getLogger(__name__)

LINK_BUTTON_RETRY_INTERVAL = 5.0


async def register_loop(
    client: AsyncHueClient,
    device_type: str,
    *,
    interval: float = LINK_BUTTON_RETRY_INTERVAL,
) -> str:
    """Create a user, waiting as long as it takes for the link button.

    Only the link-button error is retried; anything else raises
    RegistrationError straight away.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            user = await client.create_user(device_type)
        except LinkButtonNotPressedError:
            print(
                "Please, press the link button on the bridge. "
                f"Retrying in {interval:g} seconds"
            )
            logger.debug(f"Link button not pressed (attempt {attempt})")
            await asyncio.sleep(interval)
            continue
        except HueError as e:
            logger.error(f"Failed to create user: {e}")
            raise RegistrationError(f"Unexpected error occurred: {e}") from e

        logger.info(f"Created user after {attempt} attempt(s)")
        return user


async def find_bridge(settings: HueCliSettings, verbose: bool = False) -> str:
    """First bridge that answers SSDP discovery."""
    if verbose:
        print("Discovering bridge.")
    try:
        bridges = await discover_bridges(SsdpTransport(settings.discovery_timeout))
    except DiscoveryError as e:
        raise RegistrationError(f"No bridge found: {e}") from e
    if not bridges:
        raise RegistrationError("No bridge found")
    return bridges[0]


async def register(
    bridge: Optional[str],
    device_type: str,
    settings: HueCliSettings,
    verbose: bool = False,
) -> Tuple[str, str]:
    """Register ``device_type`` on ``bridge`` (discovered when not given).

    Returns the bridge address and the new user token.
    """
    if bridge is None:
        bridge = await find_bridge(settings, verbose)
    if verbose:
        print(f"Trying to register, bridge: {bridge}")

    async with AsyncHueClient(bridge, settings=settings) as client:
        user = await register_loop(client, device_type)
        if verbose:
            client.user = user
            if await client.test_connection():
                print("Verified the new user against the bridge.")
            else:
                print("Warning: the bridge did not accept the new user yet.")
    return bridge, user


def config_snippet(bridge: str, user: str, path: Path) -> str:
    """Shell snippet that saves ``bridge`` and ``user`` as the defaults."""
    return "\n".join(
        [
            "I recommend you make this the default bridge setting, e.g.:",
            "```",
            f'mkdir -p "{path.parent}"',
            f'cat <<EOF > "{path}"',
            f'user = "{user}"',
            f'bridge = "{bridge}"',
            "EOF",
            "```",
        ]
    )
