"""Recommendation service: free-text query (plus optional attachment) to dish items.

Flow: resolve mode -> build prompt -> one Gemini request -> parse ITEM blocks
and grounding sources. Zero parsed items with non-empty text is a valid result;
the caller shows the raw text instead.
"""

from typing import Optional

from google import genai

from food_search.capabilities.geolocation import GeolocationProvider
from food_search.models.models import Attachment, OperatingMode, RecommendationResult
from food_search.parsers.blocks import parse_recommendations
from food_search.parsers.sources import extract_sources
from food_search.prompts.prompts import build_recommendation_prompt
from food_search.services.gemini import generate_content, response_text, to_generate_config
from food_search.services.mode_resolver import parse_mode, resolve_mode_config
from food_search.utils.errors import ConfigurationError
from food_search.utils.logger import logger, request_context


async def fetch_recommendations(
    client: genai.Client,
    query: str,
    mode: OperatingMode | str = OperatingMode.NORMAL,
    attachment: Optional[Attachment] = None,
    geolocation: Optional[GeolocationProvider] = None,
) -> RecommendationResult:
    """Fetch dish (or restaurant) recommendations.

    Args:
        client: Injected Gemini client.
        query: Free-text request. May be blank only when an attachment is given.
        mode: Operating mode. Video and image modes belong to the generation services.
        attachment: Optional file to analyze.
        geolocation: Position provider consulted in restaurants mode.

    Returns:
        RecommendationResult with parsed items, the raw text and deduplicated sources.
        Items always carry an empty `sources` list; citations are response-level.

    Raises:
        ConfigurationError: For unknown modes or video/image modes.
        ValueError: For a blank query without attachment.
        BackendError: On transport or service failure (not retried).
    """
    mode = parse_mode(mode)
    if mode.is_media:
        raise ConfigurationError(f"Mode '{mode.value}' is served by the generation services")
    if not (query or "").strip() and attachment is None:
        raise ValueError("A query or an attachment is required")

    backend_config = await resolve_mode_config(mode, geolocation)
    prompt = build_recommendation_prompt(mode, query, attachment)

    log_context = request_context(mode.value, backend_config.model)
    logger.info(
        f"Fetching recommendations (attachment={attachment.mime_type if attachment else None})",
        extra=log_context,
    )

    response = await generate_content(
        client,
        backend_config.model,
        prompt.parts,
        to_generate_config(backend_config, prompt.system_instruction),
        operation_name="Recommendation request",
    )

    text = response_text(response)
    sources = extract_sources(response)
    items = parse_recommendations(text)

    if not items and text:
        logger.warning("No structured items parsed, falling back to raw text", extra=log_context)
    logger.info(f"Parsed {len(items)} item(s) and {len(sources)} source(s)", extra=log_context)

    return RecommendationResult(items=items, raw_text=text, sources=sources)
