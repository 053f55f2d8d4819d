"""Geolocation capability providers.

Restaurants mode biases maps grounding toward the user's position when one can
be obtained within a bounded wait. Every provider may fail or be slow; callers
go through request_coordinates(), which always resolves to coordinates or None.
"""

import asyncio
from typing import Optional, Protocol

import aiohttp

from food_search.models.models import GeoCoordinates
from food_search.utils.config import config
from food_search.utils.logger import logger
from food_search.utils.resilience import safe_execute_async

# Upper bound on any location wait, whatever the caller or environment asks for
MAX_GEOLOCATION_TIMEOUT_SECONDS = 5.0


class GeolocationProvider(Protocol):
    """Anything that can report the device position."""

    async def locate(self) -> Optional[GeoCoordinates]: ...


class NullGeolocationProvider:
    """Provider for environments without location access."""

    async def locate(self) -> Optional[GeoCoordinates]:
        return None


class StaticGeolocationProvider:
    """Fixed position, e.g. supplied by the user or a test."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.coordinates = GeoCoordinates(latitude=latitude, longitude=longitude)

    async def locate(self) -> Optional[GeoCoordinates]:
        return self.coordinates


class IpGeolocationProvider:
    """Approximate position from an IP geolocation endpoint.

    Accepts either {"lat", "lon"} (ip-api.com style) or {"latitude", "longitude"}
    JSON bodies.
    """

    def __init__(self, url: Optional[str] = None, timeout_seconds: Optional[float] = None) -> None:
        self.url = url or config.GEOLOCATION_URL
        self.timeout_seconds = bounded_timeout(timeout_seconds)

    @staticmethod
    def parse_payload(payload: dict) -> Optional[GeoCoordinates]:
        latitude = payload.get("lat", payload.get("latitude"))
        longitude = payload.get("lon", payload.get("longitude"))
        if latitude is None or longitude is None:
            return None
        return GeoCoordinates(latitude=float(latitude), longitude=float(longitude))

    async def locate(self) -> Optional[GeoCoordinates]:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.url) as response:
                response.raise_for_status()
                payload = await response.json(content_type=None)
        return self.parse_payload(payload)


def default_geolocation_provider() -> GeolocationProvider:
    """Provider used when the caller does not inject one."""
    if config.ENABLE_IP_GEOLOCATION:
        return IpGeolocationProvider()
    return NullGeolocationProvider()


def bounded_timeout(timeout_seconds: Optional[float] = None) -> float:
    """Location wait in seconds, never more than MAX_GEOLOCATION_TIMEOUT_SECONDS."""
    timeout = timeout_seconds if timeout_seconds is not None else config.GEOLOCATION_TIMEOUT_SECONDS
    return min(timeout, MAX_GEOLOCATION_TIMEOUT_SECONDS)


async def request_coordinates(
    provider: Optional[GeolocationProvider],
    timeout_seconds: Optional[float] = None,
) -> Optional[GeoCoordinates]:
    """Ask a provider for coordinates, waiting at most `timeout_seconds`.

    Denial, errors and timeouts all resolve to None; nothing is raised.

    Args:
        provider: Capability provider, or None when location is unavailable.
        timeout_seconds: Upper bound on the wait (defaults to GEOLOCATION_TIMEOUT_SECONDS,
            capped at MAX_GEOLOCATION_TIMEOUT_SECONDS).

    Returns:
        Coordinates, or None if unavailable.
    """
    if provider is None:
        return None

    timeout = bounded_timeout(timeout_seconds)
    coordinates = await safe_execute_async(
        asyncio.wait_for(provider.locate(), timeout=timeout),
        "Geolocation unavailable",
        log_level="warning",
        default_return=None,
    )
    if coordinates is not None:
        logger.debug(f"Obtained coordinates ({coordinates.latitude:.3f}, {coordinates.longitude:.3f})")
    return coordinates
