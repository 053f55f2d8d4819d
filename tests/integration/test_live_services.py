"""Live tests against the Gemini API.

Run with: pytest tests/integration -m integration
Video generation is not exercised here; a single job takes minutes.
"""

import pytest

from food_search.models.models import OperatingMode
from food_search.services.images import generate_image
from food_search.services.recipes import fetch_recipe
from food_search.services.recommendations import fetch_recommendations
from food_search.session.search import SearchController

pytestmark = pytest.mark.integration


class TestLiveRecommendations:
    @pytest.mark.asyncio
    async def test_normal_mode(self, client):
        result = await fetch_recommendations(client, "Spicy Ramen", OperatingMode.NORMAL)

        assert result.raw_text
        assert result.items or result.raw_text
        for item in result.items:
            assert item.id.startswith("rec-")
            assert item.title and item.description

    @pytest.mark.asyncio
    async def test_fast_mode_returns_items(self, client):
        result = await fetch_recommendations(client, "Healthy Lunch", OperatingMode.FAST)
        assert result.items

    @pytest.mark.asyncio
    async def test_restaurants_without_location(self, client):
        result = await fetch_recommendations(client, "Sushi in Shibuya, Tokyo", OperatingMode.RESTAURANTS)
        assert result.raw_text


class TestLiveRecipe:
    @pytest.mark.asyncio
    async def test_recipe_has_ingredients_and_steps(self, client):
        recipe = await fetch_recipe(client, "Spaghetti Carbonara")

        assert recipe.dish_name == "Spaghetti Carbonara"
        assert recipe.ingredients
        assert recipe.instructions


class TestLiveImage:
    @pytest.mark.asyncio
    async def test_image_data_url(self, client):
        url = await generate_image(client, "a bowl of tonkotsu ramen")
        assert url.startswith("data:image/")


class TestLiveSession:
    @pytest.mark.asyncio
    async def test_search_controller_round(self, client):
        controller = SearchController(client, mode="fast")

        state = await controller.search("Comfort Food")

        assert state.error is None
        assert state.results or state.show_raw_text
