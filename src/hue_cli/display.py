"""Text rendering of light state."""

from typing import Any, Dict, Generic, Optional, TypeVar

from .models import Light

T = TypeVar("T")

NOT_AVAILABLE = "N/A"
MIN_NAME_WIDTH = 4
INDENT = " " * 4


class Show(Generic[T]):
    """Optional value that formats as ``N/A`` when absent.

    Booleans print as ``true``/``false`` and tuples as ``[a, b]``.

    Format specs apply to whichever is printed, so ``f"{Show(None):5}"``
    pads the placeholder the same way a present value would be padded.
    """

    def __init__(self, value: Optional[T]):
        self.value = value

    def __format__(self, format_spec: str) -> str:
        if self.value is None:
            return format(NOT_AVAILABLE, format_spec)
        if isinstance(self.value, bool):
            return format(str(self.value).lower(), format_spec)
        if isinstance(self.value, tuple):
            items = ", ".join(str(item) for item in self.value)
            return format(f"[{items}]", format_spec)
        return format(self.value, format_spec)

    def __str__(self) -> str:
        return format(self, "")


def mired_to_kelvin(mired: Optional[int]) -> Optional[int]:
    """Convert the bridge's mired value back to Kelvin for display."""
    if not mired:
        return None
    return round(1_000_000 / mired)


def _kelvin(mired: Optional[int], width: int) -> str:
    kelvin = mired_to_kelvin(mired)
    if kelvin is None:
        return format(NOT_AVAILABLE, str(width + 1))
    return f"{kelvin:{width}}K"


def name_column_width(lights: Dict[int, Light]) -> int:
    return max([MIN_NAME_WIDTH] + [len(light.name) for light in lights.values()])


def format_light_table(lights: Dict[int, Light]) -> str:
    """Render all lights as a table, one row per light, sorted by id."""
    width = name_column_width(lights)
    lines = [f"id {'name':{width}} on  bri hue   sat ct    colormode xy"]
    for light_id in sorted(lights):
        light = lights[light_id]
        state = light.state
        lines.append(
            f"{light_id:2} {light.name:{width}} {'on' if state.on else 'off':3} "
            f"{Show(state.bri):3} {Show(state.hue):5} {Show(state.sat):3} "
            f"{_kelvin(state.ct, 4)} {Show(state.colormode):9} {Show(state.xy)}"
        )
    return "\n".join(lines)


def format_light_detail(light_id: int, light: Light) -> str:
    """Render one light with every state field on its own line."""
    state = light.state
    fields: Dict[str, Any] = {
        "on": Show(state.on),
        "bri": Show(state.bri),
        "hue": Show(state.hue),
        "sat": Show(state.sat),
        "effect": Show(state.effect),
        "ct": _kelvin(state.ct, 4).strip(),
        "alert": Show(state.alert),
        "colormode": Show(state.colormode),
        "xy": Show(state.xy),
        "reachable": Show(state.reachable),
    }
    lines = [f"id: {light_id}", f"name: {light.name}", "state:"]
    lines.extend(f"{INDENT}{key}: {value}" for key, value in fields.items())
    return "\n".join(lines)
