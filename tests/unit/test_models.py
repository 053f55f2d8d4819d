"""Unit tests for Pydantic models validation."""

import pytest
from pydantic import TypeAdapter, ValidationError

from food_search.models.models import (
    Attachment,
    BackendConfig,
    GeoCoordinates,
    GroundingSource,
    ImageResolution,
    MapsConfig,
    MediaFamily,
    NoToolConfig,
    OperatingMode,
    Recipe,
    RecommendationItem,
    RecommendationResult,
    SearchSessionState,
    ShareContent,
    WebSearchConfig,
    media_family_for,
)


def make_attachment(mime_type: str = "image/png") -> Attachment:
    return Attachment(
        file_name="dish.png",
        preview_url=f"data:{mime_type};base64,AAAA",
        mime_type=mime_type,
        base64_data="AAAA",
        size_bytes=3,
    )


class TestOperatingMode:
    """Test OperatingMode wire names and media flag."""

    def test_wire_names(self):
        assert OperatingMode("searchAgent") == OperatingMode.SEARCH_AGENT
        assert OperatingMode.RESTAURANTS.value == "restaurants"

    def test_media_modes(self):
        assert OperatingMode.VIDEO.is_media
        assert OperatingMode.IMAGE.is_media
        assert not OperatingMode.THINKING.is_media

    def test_image_resolution_values(self):
        assert [r.value for r in ImageResolution] == ["1K", "2K", "4K"]


class TestMediaFamily:
    @pytest.mark.parametrize(
        "mime_type,family",
        [
            ("image/jpeg", MediaFamily.IMAGE),
            ("audio/mpeg", MediaFamily.AUDIO),
            ("video/mp4", MediaFamily.VIDEO),
            ("text/plain", MediaFamily.TEXT),
            ("application/pdf", MediaFamily.TEXT),
        ],
    )
    def test_media_family_for(self, mime_type, family):
        assert media_family_for(mime_type) == family

    def test_attachment_media_family(self):
        assert make_attachment("audio/wav").media_family == MediaFamily.AUDIO


class TestGeoCoordinates:
    def test_valid(self):
        coords = GeoCoordinates(latitude=51.5, longitude=-0.12)
        assert coords.latitude == 51.5

    @pytest.mark.parametrize("latitude,longitude", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range(self, latitude, longitude):
        with pytest.raises(ValidationError):
            GeoCoordinates(latitude=latitude, longitude=longitude)


class TestBackendConfig:
    """Test the discriminated union of backend configuration variants."""

    def test_discriminator_selects_variant(self):
        adapter = TypeAdapter(BackendConfig)

        assert isinstance(adapter.validate_python({"tool": "web_search", "model": "m"}), WebSearchConfig)
        assert isinstance(adapter.validate_python({"tool": "maps", "model": "m"}), MapsConfig)
        assert isinstance(adapter.validate_python({"tool": "none", "model": "m"}), NoToolConfig)

    def test_unknown_tool_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(BackendConfig).validate_python({"tool": "code_execution", "model": "m"})

    def test_empty_model_rejected(self):
        with pytest.raises(ValidationError):
            WebSearchConfig(model="")

    def test_negative_thinking_budget_rejected(self):
        with pytest.raises(ValidationError):
            WebSearchConfig(model="m", thinking_budget=-1)

    def test_frozen(self):
        config = MapsConfig(model="m")
        with pytest.raises(ValidationError):
            config.model = "other"


class TestRecommendationItem:
    """Test RecommendationItem validation."""

    def test_valid_item(self):
        item = RecommendationItem(id="rec-4", title="  Pho ", description="Soup")
        assert item.title == "Pho"
        assert item.sources == []

    @pytest.mark.parametrize("bad_id", ["rec-", "item-1", "rec-a", "1"])
    def test_invalid_id(self, bad_id):
        with pytest.raises(ValidationError):
            RecommendationItem(id=bad_id, title="Pho", description="Soup")

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            RecommendationItem(id="rec-0", title="   ", description="Soup")


class TestRecipe:
    def test_defaults(self):
        recipe = Recipe(dish_name="Pho")

        assert recipe.prep_time == "Varies"
        assert recipe.servings == "Varies"
        assert recipe.ingredients == []
        assert recipe.instructions == []

    def test_result_defaults(self):
        result = RecommendationResult()
        assert result.items == [] and result.raw_text == "" and result.sources == []


class TestShareContent:
    def test_clipboard_text(self):
        content = ShareContent(title="Recipe: Pho", text="Try Pho", url="https://example.com")
        assert content.clipboard_text == "Try Pho\nhttps://example.com"


class TestSearchSessionState:
    """Test session state transitions and the raw-text rule."""

    def test_loading_clears_everything(self):
        state = SearchSessionState.loading()

        assert state.is_loading
        assert state.results == []
        assert state.error is None
        assert state.video_url is None and state.image_url is None

    def test_failed_sets_only_error(self):
        state = SearchSessionState.failed("boom")

        assert state.error == "boom"
        assert not state.is_loading
        assert state.results == [] and state.raw_text is None

    def test_raw_text_shown_without_items(self):
        state = SearchSessionState.from_recommendations(RecommendationResult(raw_text="Try ramen."))
        assert state.show_raw_text

    def test_raw_text_hidden_with_items(self):
        item = RecommendationItem(id="rec-0", title="Pho", description="Soup")
        state = SearchSessionState.from_recommendations(RecommendationResult(items=[item], raw_text="x"))
        assert not state.show_raw_text

    def test_raw_text_hidden_with_media(self):
        state = SearchSessionState(raw_text="x", image_url="data:image/png;base64,AA")
        assert state.has_media
        assert not state.show_raw_text

    def test_raw_text_hidden_while_loading(self):
        assert not SearchSessionState(is_loading=True, raw_text="x").show_raw_text

    def test_media_states(self):
        assert SearchSessionState.from_video("https://v?key=k").video_url == "https://v?key=k"
        assert SearchSessionState.from_image("data:image/png;base64,AA").image_url.startswith("data:")

    def test_sources_carried(self):
        sources = [GroundingSource(title="A", uri="x")]
        state = SearchSessionState.from_recommendations(RecommendationResult(raw_text="t", sources=sources))
        assert state.sources == sources
