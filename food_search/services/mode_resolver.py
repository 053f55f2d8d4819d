"""Operating mode to backend configuration mapping.

| mode        | model tier     | tool       | extra                          |
|-------------|----------------|------------|--------------------------------|
| normal      | standard       | web search |                                |
| fast        | lightweight    | web search |                                |
| thinking    | high-reasoning | web search | THINKING_BUDGET                |
| searchAgent | standard       | web search |                                |
| restaurants | standard       | maps       | coordinate bias when available |
| video       | video model    | none       | served by the video service    |
| image       | image model    | none       | served by the image service    |
"""

from typing import Any, Optional

from food_search.capabilities.geolocation import GeolocationProvider, request_coordinates
from food_search.models.models import (
    BackendConfig,
    GeoCoordinates,
    MapsConfig,
    NoToolConfig,
    OperatingMode,
    WebSearchConfig,
)
from food_search.utils.config import config
from food_search.utils.errors import ConfigurationError
from food_search.utils.logger import logger


def parse_mode(value: Any) -> OperatingMode:
    """Convert a wire value ("normal", "searchAgent", ...) into an OperatingMode.

    Raises:
        ConfigurationError: If the value names no known mode.
    """
    if isinstance(value, OperatingMode):
        return value
    try:
        return OperatingMode(value)
    except ValueError as e:
        raise ConfigurationError(f"Unknown operating mode: {value!r}") from e


def resolve_backend_config(mode: OperatingMode | str, coordinates: Optional[GeoCoordinates] = None) -> BackendConfig:
    """Build the backend configuration for a mode.

    Args:
        mode: Requested operating mode (enum member or wire name).
        coordinates: Position used as a geographic bias (restaurants mode only).

    Returns:
        A frozen BackendConfig variant.

    Raises:
        ConfigurationError: If `mode` names no known mode.
    """
    mode = parse_mode(mode)

    if mode in (OperatingMode.NORMAL, OperatingMode.SEARCH_AGENT):
        return WebSearchConfig(model=config.STANDARD_MODEL)
    if mode == OperatingMode.FAST:
        return WebSearchConfig(model=config.FAST_MODEL)
    if mode == OperatingMode.THINKING:
        return WebSearchConfig(model=config.THINKING_MODEL, thinking_budget=config.THINKING_BUDGET)
    if mode == OperatingMode.RESTAURANTS:
        return MapsConfig(model=config.STANDARD_MODEL, coordinates=coordinates)
    if mode == OperatingMode.VIDEO:
        return NoToolConfig(model=config.VIDEO_MODEL)
    if mode == OperatingMode.IMAGE:
        return NoToolConfig(model=config.IMAGE_MODEL)

    raise ConfigurationError(f"No backend configuration for mode: {mode.value}")


async def resolve_mode_config(
    mode: OperatingMode,
    geolocation: Optional[GeolocationProvider] = None,
) -> BackendConfig:
    """Resolve a mode, asking the geolocation provider for a position in restaurants mode.

    The location request is bounded (GEOLOCATION_TIMEOUT_SECONDS) and resolves to
    "no bias" rather than failing when the position is unavailable.
    """
    mode = parse_mode(mode)
    coordinates = None
    if mode == OperatingMode.RESTAURANTS:
        coordinates = await request_coordinates(geolocation)
        if coordinates is None:
            logger.info("No coordinates available, searching restaurants without location bias")

    return resolve_backend_config(mode, coordinates)
