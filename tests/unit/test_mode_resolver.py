"""Unit tests for operating mode resolution."""

from unittest.mock import AsyncMock

import pytest
from google.genai import types

from food_search.capabilities.geolocation import StaticGeolocationProvider
from food_search.models.models import (
    GeoCoordinates,
    MapsConfig,
    NoToolConfig,
    OperatingMode,
    ToolKind,
    WebSearchConfig,
)
from food_search.services.gemini import to_generate_config
from food_search.services.mode_resolver import parse_mode, resolve_backend_config, resolve_mode_config
from food_search.utils.config import config
from food_search.utils.errors import ConfigurationError

TEXT_MODES = [mode for mode in OperatingMode if not mode.is_media]


class TestResolveBackendConfig:
    """Test the mode -> backend configuration table."""

    @pytest.mark.parametrize("mode", TEXT_MODES)
    def test_text_modes_have_exactly_one_tool(self, mode):
        backend_config = resolve_backend_config(mode)
        assert len(backend_config.tools) == 1
        assert backend_config.tools[0] != ToolKind.NONE

    def test_normal_mode(self):
        backend_config = resolve_backend_config(OperatingMode.NORMAL)

        assert isinstance(backend_config, WebSearchConfig)
        assert backend_config.model == config.STANDARD_MODEL
        assert backend_config.thinking_budget is None

    def test_fast_mode_uses_lightweight_model(self):
        assert resolve_backend_config(OperatingMode.FAST).model == config.FAST_MODEL

    def test_thinking_mode_sets_budget(self):
        backend_config = resolve_backend_config(OperatingMode.THINKING)

        assert backend_config.model == config.THINKING_MODEL
        assert backend_config.thinking_budget == config.THINKING_BUDGET

    def test_search_agent_uses_standard_web_search(self):
        backend_config = resolve_backend_config(OperatingMode.SEARCH_AGENT)
        assert backend_config.tools == [ToolKind.WEB_SEARCH]
        assert backend_config.model == config.STANDARD_MODEL

    def test_restaurants_mode_uses_maps(self):
        coords = GeoCoordinates(latitude=35.68, longitude=139.69)
        backend_config = resolve_backend_config(OperatingMode.RESTAURANTS, coords)

        assert isinstance(backend_config, MapsConfig)
        assert backend_config.tools == [ToolKind.MAPS]
        assert backend_config.coordinates == coords

    @pytest.mark.parametrize("mode", [OperatingMode.VIDEO, OperatingMode.IMAGE])
    def test_media_modes_have_no_tools(self, mode):
        backend_config = resolve_backend_config(mode)
        assert isinstance(backend_config, NoToolConfig)
        assert backend_config.tools == []

    def test_unknown_mode_fails_fast(self):
        with pytest.raises(ConfigurationError):
            resolve_backend_config("banquet")

    def test_wire_name_accepted(self):
        assert resolve_backend_config("normal") == resolve_backend_config(OperatingMode.NORMAL)
        assert isinstance(resolve_backend_config("restaurants"), MapsConfig)

    def test_config_is_immutable(self):
        backend_config = resolve_backend_config(OperatingMode.NORMAL)
        with pytest.raises(Exception):
            backend_config.model = "other"


class TestParseMode:
    def test_wire_names(self):
        assert parse_mode("searchAgent") == OperatingMode.SEARCH_AGENT
        assert parse_mode(OperatingMode.FAST) == OperatingMode.FAST

    def test_unknown_value(self):
        with pytest.raises(ConfigurationError, match="banquet"):
            parse_mode("banquet")


class TestResolveModeConfig:
    """Test async resolution with the geolocation capability."""

    @pytest.mark.asyncio
    async def test_restaurants_with_location(self):
        backend_config = await resolve_mode_config(
            OperatingMode.RESTAURANTS, StaticGeolocationProvider(48.85, 2.35)
        )
        assert backend_config.coordinates == GeoCoordinates(latitude=48.85, longitude=2.35)

    @pytest.mark.asyncio
    async def test_restaurants_without_location(self):
        backend_config = await resolve_mode_config(OperatingMode.RESTAURANTS, None)
        assert isinstance(backend_config, MapsConfig)
        assert backend_config.coordinates is None

    @pytest.mark.asyncio
    async def test_failing_provider_degrades(self):
        provider = AsyncMock()
        provider.locate.side_effect = PermissionError("denied")

        backend_config = await resolve_mode_config("restaurants", provider)

        assert backend_config.coordinates is None

    @pytest.mark.asyncio
    async def test_location_only_requested_for_restaurants(self):
        provider = AsyncMock()
        await resolve_mode_config(OperatingMode.NORMAL, provider)
        provider.locate.assert_not_called()


class TestToGenerateConfig:
    """Test translation into SDK request configuration."""

    def test_web_search_tool(self):
        generate_config = to_generate_config(resolve_backend_config(OperatingMode.NORMAL), "sys")

        assert generate_config.tools[0].google_search is not None
        assert generate_config.system_instruction == "sys"
        assert generate_config.thinking_config is None

    def test_thinking_budget(self):
        generate_config = to_generate_config(resolve_backend_config(OperatingMode.THINKING))
        assert generate_config.thinking_config.thinking_budget == config.THINKING_BUDGET

    def test_maps_with_bias(self):
        coords = GeoCoordinates(latitude=40.7, longitude=-74.0)
        generate_config = to_generate_config(resolve_backend_config(OperatingMode.RESTAURANTS, coords))

        assert generate_config.tools[0].google_maps is not None
        lat_lng = generate_config.tool_config.retrieval_config.lat_lng
        assert (lat_lng.latitude, lat_lng.longitude) == (40.7, -74.0)

    def test_maps_without_bias(self):
        generate_config = to_generate_config(resolve_backend_config(OperatingMode.RESTAURANTS))
        assert generate_config.tool_config is None

    def test_no_tool_config(self):
        generate_config = to_generate_config(NoToolConfig(model="m"))
        assert isinstance(generate_config, types.GenerateContentConfig)
        assert not generate_config.tools

    def test_unknown_variant(self):
        with pytest.raises(ConfigurationError):
            to_generate_config(object())
