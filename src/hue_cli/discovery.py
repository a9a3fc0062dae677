"""Discovers Philips Hue bridges on the local network."""

import asyncio
import logging
import socket
import time
from typing import Dict, List, Optional, Protocol
from urllib.parse import urlparse

import httpx

from .exceptions import DiscoveryError

logger = logging.getLogger(__name__)

SSDP_ADDR = ("239.255.255.250", 1900)
NUPNP_URL = "https://discovery.meethue.com/"


class BridgeTransport(Protocol):
    """Anything that can search the network for bridge addresses."""

    async def search(self) -> List[str]: ...


def _parse_headers(packet: str) -> Dict[str, str]:
    """Parse the header lines of an SSDP (HTTP over UDP) reply."""
    headers = {}
    for line in packet.split("\r\n")[1:]:
        name, sep, value = line.partition(":")
        if sep:
            headers[name.strip().lower()] = value.strip()
    return headers


def _host_from_location(location: str) -> Optional[str]:
    try:
        return urlparse(location).hostname
    except ValueError:
        return None


class SsdpTransport:
    """Finds bridges with a UPnP M-SEARCH multicast."""

    def __init__(self, timeout: float = 3.0, search_target: str = "ssdp:all"):
        self.timeout = timeout
        self.search_target = search_target

    def _message(self) -> bytes:
        return "\r\n".join(
            [
                "M-SEARCH * HTTP/1.1",
                f"HOST: {SSDP_ADDR[0]}:{SSDP_ADDR[1]}",
                'MAN: "ssdp:discover"',
                "MX: 3",
                f"ST: {self.search_target}",
                "",
                "",
            ]
        ).encode("utf-8")

    def _search_blocking(self) -> List[str]:
        addresses = []
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.settimeout(0.2)
            sock.sendto(self._message(), SSDP_ADDR)

            deadline = time.monotonic() + self.timeout
            while time.monotonic() < deadline:
                try:
                    data, addr = sock.recvfrom(65507)
                except socket.timeout:
                    continue

                packet = data.decode("utf-8", "ignore")
                headers = _parse_headers(packet)
                if "IpBridge" not in packet and "hue-bridgeid" not in headers:
                    continue

                location = headers.get("location")
                host = _host_from_location(location) if location else None
                addresses.append(host or addr[0])
        finally:
            sock.close()
        return addresses

    async def search(self) -> List[str]:
        logger.debug(f"Sending SSDP M-SEARCH, listening for {self.timeout}s")
        return await asyncio.to_thread(self._search_blocking)


class NupnpTransport:
    """Asks the Philips N-UPnP service which bridges share our public IP."""

    def __init__(self, timeout: float = 10.0, url: str = NUPNP_URL):
        self.timeout = timeout
        self.url = url

    async def search(self) -> List[str]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            bridges = response.json()
        if not isinstance(bridges, list):
            raise ValueError(f"Unexpected N-UPnP response: {bridges}")
        return [
            bridge["internalipaddress"]
            for bridge in bridges
            if isinstance(bridge, dict) and "internalipaddress" in bridge
        ]


async def discover_bridges(transport: Optional[BridgeTransport] = None) -> List[str]:
    """Return the addresses of bridges that answered, without duplicates.

    Finding nothing is not an error; a failing transport raises DiscoveryError.
    """
    transport = transport or SsdpTransport()
    try:
        addresses = await transport.search()
    except (OSError, httpx.HTTPError, ValueError) as e:
        logger.error(f"Bridge discovery failed: {e}")
        raise DiscoveryError(f"Bridge discovery failed: {e}") from e

    unique = list(dict.fromkeys(addresses))
    logger.info(f"Found {len(unique)} bridge(s)")
    return unique
