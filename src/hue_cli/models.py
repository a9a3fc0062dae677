"""Pydantic models for the data exchanged with a Hue bridge."""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LightState(BaseModel):
    """Current state of a light as reported by the bridge.

    Everything except ``on`` is optional; white-only bulbs report no hue,
    saturation or xy, and dimmable-only bulbs report no color temperature.
    """

    model_config = ConfigDict(extra="ignore")

    on: bool = False
    bri: Optional[int] = None
    hue: Optional[int] = None
    sat: Optional[int] = None
    ct: Optional[int] = Field(default=None, description="Color temperature (mired)")
    colormode: Optional[str] = None
    xy: Optional[Tuple[float, float]] = None
    effect: Optional[str] = None
    alert: Optional[str] = None
    reachable: bool = False


class Light(BaseModel):
    """A light resource under ``/lights/<id>``."""

    model_config = ConfigDict(extra="ignore")

    name: str
    state: LightState
    type: Optional[str] = None
    modelid: Optional[str] = None
    manufacturername: Optional[str] = None
    uniqueid: Optional[str] = None
    swversion: Optional[str] = None


class LightCommand(BaseModel):
    """Partial light state update. Unset fields are not sent."""

    on: Optional[bool] = None
    bri: Optional[int] = Field(default=None, ge=0, le=255, description="Brightness")
    hue: Optional[int] = Field(default=None, ge=0, le=65535, description="Hue")
    sat: Optional[int] = Field(default=None, ge=0, le=255, description="Saturation")
    ct: Optional[int] = Field(
        default=None, ge=0, le=65535, description="Color temperature (mired)"
    )

    def to_payload(self) -> Dict[str, Any]:
        """Body for ``PUT /lights/<id>/state``."""
        return self.model_dump(exclude_none=True)


class StateChangeResult(BaseModel):
    """One entry of the list the bridge returns for a state change."""

    model_config = ConfigDict(extra="ignore")

    success: Optional[Dict[str, Any]] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            address = self.error.get("address", "?")
            description = self.error.get("description", "Unknown error")
            return f"Error: {address}: {description}"
        if self.success:
            return "Success: " + ", ".join(
                f"{address} = {value}" for address, value in self.success.items()
            )
        return "Success"
