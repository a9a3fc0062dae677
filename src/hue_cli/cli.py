"""Entry point and command dispatcher for the Hue CLI."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from . import commands
from .config import (
    FileConfig,
    HueCliSettings,
    config_path,
    load_config,
    resolve,
)
from .discovery import NupnpTransport, SsdpTransport, discover_bridges
from .exceptions import ConfigError, DispatchError, HueError, RegistrationError
from .hue_client import AsyncHueClient
from .light_manager import LightManager, build_light_command
from .registration import config_snippet, register

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: HueCliSettings, verbose: bool = False) -> None:
    """Configure logging to stderr; --verbose raises the level to at least INFO."""
    level = getattr(logging, settings.log_level)
    if verbose:
        level = min(level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def bridge_and_user(
    command: Union[commands.Show, commands.Light], file_config: FileConfig
) -> Tuple[str, str]:
    """Resolve bridge and user from flags and config file, or raise DispatchError."""
    bridge = resolve(command.bridge, file_config.bridge)
    user = resolve(command.user, file_config.user)
    if bridge is None or user is None:
        raise DispatchError("User and bridge must be specified")
    return bridge, user


async def run_discover(command: commands.Discover, settings: HueCliSettings) -> int:
    if command.method == "nupnp":
        transport = NupnpTransport()
    else:
        transport = SsdpTransport(settings.discovery_timeout)
    bridges = await discover_bridges(transport)
    if not bridges:
        print("Hue bridges found: none")
        return 0
    print("Hue bridges found:")
    for bridge in bridges:
        print(f"  {bridge}")
    return 0


async def run_register(
    command: commands.Register,
    settings: HueCliSettings,
    verbose: bool,
    path: Optional[Path] = None,
) -> int:
    bridge, user = await register(command.bridge, command.device_type, settings, verbose)
    print(f'Successfully registered user: "{user}".')
    if path is not None:
        print(config_snippet(bridge, user, path))
    return 0


async def run_show(
    command: commands.Show,
    file_config: FileConfig,
    settings: HueCliSettings,
    verbose: bool,
) -> int:
    bridge, user = bridge_and_user(command, file_config)
    async with AsyncHueClient(bridge, user, settings) as client:
        manager = LightManager(client, verbose)
        if command.id is None:
            print(await manager.show_all_lights())
        else:
            print(await manager.show_light(command.id))
    return 0


async def run_light(
    command: commands.Light,
    file_config: FileConfig,
    settings: HueCliSettings,
    verbose: bool,
) -> int:
    bridge, user = bridge_and_user(command, file_config)
    light_command = build_light_command(
        turn=command.turn,
        bri=command.bri,
        hue=command.hue,
        sat=command.sat,
        ct=command.ct,
    )
    async with AsyncHueClient(bridge, user, settings) as client:
        manager = LightManager(client, verbose)
        results = await manager.set_light(command.id, light_command)
    for result in results:
        print(result)
    return 0


async def dispatch(
    invocation: commands.Invocation, settings: HueCliSettings
) -> int:
    """Run the invocation's command and return the process exit status.

    Errors are reported as one printed line and still exit 0; only usage
    errors (2) and Ctrl-C (130) exit non-zero.
    """
    verbose = invocation.verbose
    if verbose:
        print(f"Arguments: {invocation!r}")

    path = config_path(invocation.config, settings)
    try:
        file_config = load_config(path)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 0
    if verbose:
        print(f"Configuration: {file_config!r} (from {path})")

    command = invocation.command
    try:
        if isinstance(command, commands.Discover):
            return await run_discover(command, settings)
        if isinstance(command, commands.Register):
            return await run_register(command, settings, verbose, path)
        if isinstance(command, commands.Show):
            return await run_show(command, file_config, settings, verbose)
        return await run_light(command, file_config, settings, verbose)
    except DispatchError as e:
        print(str(e))
        return 0
    except RegistrationError as e:
        print(f"Failed to register user: {e}")
        return 0
    except HueError as e:
        print(f"Error: {e}")
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the hue-cli command."""
    invocation = commands.parse_args(argv)
    try:
        settings = HueCliSettings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 0
    setup_logging(settings, invocation.verbose)

    try:
        return asyncio.run(dispatch(invocation, settings))
    except KeyboardInterrupt:
        print("\nCancelled.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
