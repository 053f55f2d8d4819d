"""Recipe service: one dish name to a parsed Recipe."""

from google import genai

from food_search.models.models import OperatingMode, Recipe
from food_search.parsers.blocks import parse_recipe
from food_search.parsers.sources import extract_sources
from food_search.prompts.prompts import build_recipe_prompt
from food_search.services.gemini import generate_content, response_text, to_generate_config
from food_search.services.mode_resolver import parse_mode, resolve_backend_config
from food_search.utils.logger import logger, request_context

# Modes without a recipe-shaped backend configuration
_COERCED_MODES = frozenset(
    {OperatingMode.VIDEO, OperatingMode.IMAGE, OperatingMode.RESTAURANTS, OperatingMode.SEARCH_AGENT}
)


def recipe_mode(mode: OperatingMode | str) -> OperatingMode:
    """Mode actually used for a recipe lookup (normal, fast or thinking)."""
    mode = parse_mode(mode)
    return OperatingMode.NORMAL if mode in _COERCED_MODES else mode


async def fetch_recipe(
    client: genai.Client,
    dish_name: str,
    mode: OperatingMode | str = OperatingMode.NORMAL,
) -> Recipe:
    """Look up a recipe for a dish. Results are never cached; reopening re-fetches.

    Args:
        client: Injected Gemini client.
        dish_name: Dish to look up.
        mode: Current operating mode; video, image, restaurants and searchAgent fall back to normal.

    Returns:
        Parsed Recipe. Missing fields default to "Varies" and missing blocks to empty lists.

    Raises:
        ValueError: For an empty dish name.
        BackendError: On transport or service failure (not retried).
    """
    dish_name = (dish_name or "").strip()
    if not dish_name:
        raise ValueError("dish_name is required")

    effective_mode = recipe_mode(mode)
    backend_config = resolve_backend_config(effective_mode)
    prompt = build_recipe_prompt(dish_name)

    log_context = request_context(effective_mode.value, backend_config.model)
    logger.info(f"Fetching recipe for '{dish_name}'", extra=log_context)

    response = await generate_content(
        client,
        backend_config.model,
        prompt.parts,
        to_generate_config(backend_config, prompt.system_instruction),
        operation_name="Recipe request",
    )

    recipe = parse_recipe(dish_name, response_text(response), extract_sources(response))
    logger.info(
        f"Recipe parsed: {len(recipe.ingredients)} ingredient(s), {len(recipe.instructions)} step(s)",
        extra=log_context,
    )
    return recipe
