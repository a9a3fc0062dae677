"""Light query and control operations."""

import logging
from typing import Any, Dict, List, Optional

from .display import format_light_detail, format_light_table
from .exceptions import HueError, QueryError, SetError
from .hue_client import AsyncHueClient
from .models import LightCommand, StateChangeResult

logger = logging.getLogger(__name__)

# The bridge expects mired (10^6 / K). This constant is 10x larger than the
# one used to display ct back in Kelvin; kept as the tool has always sent it.
KELVIN_TO_MIRED_SCALE = 10_000_000


def kelvin_to_mired(kelvin: int) -> int:
    """Convert a --ct value in Kelvin to the value sent to the bridge."""
    if kelvin <= 0:
        raise ValueError(f"Color temperature must be positive, got {kelvin}")
    return round(KELVIN_TO_MIRED_SCALE / kelvin)


def build_light_command(
    turn: Optional[str] = None,
    bri: Optional[int] = None,
    hue: Optional[int] = None,
    sat: Optional[int] = None,
    ct: Optional[int] = None,
) -> LightCommand:
    """Build a command carrying only the fields that were given."""
    fields: Dict[str, Any] = {}
    if turn == "on":
        fields["on"] = True
    elif turn == "off":
        fields["on"] = False
    elif turn is not None:
        raise ValueError(f"Invalid turn value '{turn}'. Must be 'on' or 'off'.")
    if bri is not None:
        fields["bri"] = bri
    if hue is not None:
        fields["hue"] = hue
    if sat is not None:
        fields["sat"] = sat
    if ct is not None:
        fields["ct"] = kelvin_to_mired(ct)
    return LightCommand(**fields)


class LightManager:
    """Manager for the light operations of one bridge user."""

    def __init__(self, client: AsyncHueClient, verbose: bool = False):
        self.client = client
        self.verbose = verbose

    async def show_light(self, light_id: int) -> str:
        """Detail view of a single light."""
        try:
            light = await self.client.get_light(light_id)
        except HueError as e:
            logger.error(f"Failed to get light {light_id}: {e}")
            raise QueryError(str(e)) from e
        return format_light_detail(light_id, light)

    async def show_all_lights(self) -> str:
        """Table of every light on the bridge."""
        try:
            lights = await self.client.get_all_lights()
        except HueError as e:
            logger.error(f"Failed to list lights: {e}")
            raise QueryError(str(e)) from e
        logger.info(f"Retrieved {len(lights)} lights")
        return format_light_table(lights)

    async def set_light(
        self, light_id: int, command: LightCommand
    ) -> List[StateChangeResult]:
        """Send ``command`` to one light and return the bridge's per-field results."""
        payload = command.to_payload()
        if self.verbose:
            print(f"Sending to light {light_id}: {payload}")
        try:
            results = await self.client.set_light_state(light_id, command)
        except HueError as e:
            logger.error(f"Failed to control light {light_id}: {e}")
            raise SetError(str(e)) from e
        failed = [r for r in results if not r.ok]
        if failed:
            logger.warning(
                f"Light {light_id}: {len(failed)}/{len(results)} state changes rejected"
            )
        return results
