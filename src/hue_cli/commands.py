"""Command-line decoding into tagged command variants."""

import argparse
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from . import __version__


class Discover(BaseModel):
    """List the bridges found on the local network."""

    kind: Literal["discover"] = "discover"
    method: Literal["ssdp", "nupnp"] = "ssdp"


class Register(BaseModel):
    """Register a device type and print the new user token."""

    kind: Literal["register"] = "register"
    bridge: Optional[str] = None
    device_type: str = Field(min_length=1)


class Show(BaseModel):
    """Show one light, or all of them."""

    kind: Literal["show"] = "show"
    bridge: Optional[str] = None
    user: Optional[str] = None
    id: Optional[int] = None


class Light(BaseModel):
    """Change the state of one light."""

    kind: Literal["light"] = "light"
    bridge: Optional[str] = None
    user: Optional[str] = None
    id: int
    turn: Optional[Literal["on", "off"]] = None
    bri: Optional[int] = Field(default=None, ge=0, le=255, description="Brightness")
    hue: Optional[int] = Field(default=None, ge=0, le=65535, description="Hue")
    sat: Optional[int] = Field(default=None, ge=0, le=255, description="Saturation")
    ct: Optional[int] = Field(
        default=None, ge=153, description="Color temperature [K]"
    )


Command = Annotated[
    Union[Discover, Register, Show, Light], Field(discriminator="kind")
]


class Invocation(BaseModel):
    """Global flags plus the command to run."""

    verbose: bool = False
    config: Optional[Path] = None
    command: Command


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hue-cli", description="CLI tool to control Philips Hue"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="PATH",
        help="Config file (default: <config dir>/hue-cli/default.toml)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="kind", metavar="COMMAND", required=True)

    discover = subparsers.add_parser("discover", help="Discover bridges")
    discover.add_argument(
        "--method",
        choices=["ssdp", "nupnp"],
        default="ssdp",
        help="Search the LAN (ssdp) or ask the Philips cloud (nupnp)",
    )

    register = subparsers.add_parser(
        "register", help="Register device and get user id"
    )
    register.add_argument("-b", "--bridge", help="Host to register user")
    register.add_argument(
        "-d", "--device-type", dest="device_type", required=True, help="Device type"
    )

    show = subparsers.add_parser("show", help="Show lights")
    _add_bridge_arguments(show)
    show.add_argument("-i", "--id", type=int, help="Light id")

    light = subparsers.add_parser("light", help="Control a light")
    _add_bridge_arguments(light)
    light.add_argument("-i", "--id", type=int, required=True, help="Light id")
    light.add_argument("-t", "--turn", choices=["on", "off"], help="On/Off")
    light.add_argument("--bri", type=int, help="Brightness (0-255)")
    light.add_argument("--hue", type=int, help="Hue (0-65535)")
    light.add_argument("--sat", type=int, help="Saturation (0-255)")
    light.add_argument("--ct", type=int, help="Color temperature [K]")

    return parser


def _add_bridge_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-b", "--bridge", help="Host of bridge")
    parser.add_argument(
        "-u", "--user", help="Username registered to the device"
    )


def _describe(error: ValidationError) -> str:
    problems: List[str] = []
    for item in error.errors():
        # loc is e.g. ("command", "light", "bri")
        field = item["loc"][-1] if item["loc"] else "value"
        problems.append(f"--{str(field).replace('_', '-')}: {item['msg']}")
    return "; ".join(problems)


def parse_args(argv: Optional[Sequence[str]] = None) -> Invocation:
    """Decode process arguments into an Invocation.

    Out-of-range values are reported as usage errors and exit with status 2.
    """
    parser = build_parser()
    namespace = vars(parser.parse_args(argv))
    verbose = namespace.pop("verbose")
    config = namespace.pop("config")
    try:
        return Invocation(verbose=verbose, config=config, command=namespace)
    except ValidationError as e:
        parser.error(_describe(e))
