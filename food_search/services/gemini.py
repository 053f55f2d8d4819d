"""Gemini backend access shared by the services.

The client is created once by the caller and passed into every service call;
nothing here keeps a process-wide client. The google-genai client is synchronous,
so calls run in a worker thread via asyncio.to_thread.
"""

import asyncio
from typing import Any, List, Optional

from google import genai
from google.genai import types

from food_search.models.models import BackendConfig, MapsConfig, NoToolConfig, WebSearchConfig
from food_search.utils.config import config
from food_search.utils.errors import BackendError, ConfigurationError
from food_search.utils.logger import logger


def create_client(api_key: Optional[str] = None) -> genai.Client:
    """Create a Gemini client.

    Args:
        api_key: Backend credential. Defaults to GEMINI_API_KEY.

    Raises:
        ValueError: If no credential is configured.
    """
    if api_key is None:
        config.validate()
        api_key = config.GEMINI_API_KEY
    if not api_key:
        raise ValueError("GEMINI_API_KEY environment variable is required")
    return genai.Client(api_key=api_key)


def to_generate_config(
    backend_config: BackendConfig,
    system_instruction: Optional[str] = None,
) -> types.GenerateContentConfig:
    """Translate a BackendConfig variant into the SDK request configuration.

    Raises:
        ConfigurationError: For an object that is not a known BackendConfig variant.
    """
    if isinstance(backend_config, WebSearchConfig):
        thinking_config = None
        if backend_config.thinking_budget is not None:
            thinking_config = types.ThinkingConfig(thinking_budget=backend_config.thinking_budget)
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            tools=[types.Tool(google_search=types.GoogleSearch())],
            thinking_config=thinking_config,
        )

    if isinstance(backend_config, MapsConfig):
        tool_config = None
        if backend_config.coordinates is not None:
            tool_config = types.ToolConfig(
                retrieval_config=types.RetrievalConfig(
                    lat_lng=types.LatLng(
                        latitude=backend_config.coordinates.latitude,
                        longitude=backend_config.coordinates.longitude,
                    )
                )
            )
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            tools=[types.Tool(google_maps=types.GoogleMaps())],
            tool_config=tool_config,
        )

    if isinstance(backend_config, NoToolConfig):
        return types.GenerateContentConfig(system_instruction=system_instruction)

    raise ConfigurationError(f"Unsupported backend configuration: {type(backend_config).__name__}")


async def generate_content(
    client: genai.Client,
    model: str,
    parts: List[types.Part],
    generate_config: types.GenerateContentConfig,
    operation_name: str = "Gemini request",
    log_context: Optional[dict] = None,
) -> Any:
    """Issue one generate_content call.

    Args:
        client: Injected Gemini client.
        model: Model identifier.
        parts: Ordered content parts.
        generate_config: SDK request configuration.
        operation_name: Label used in logs and error messages.
        log_context: `extra=` fields of the calling request (see request_context).

    Returns:
        The SDK response object.

    Raises:
        BackendError: On any transport or service failure (not retried).
    """
    try:
        return await asyncio.to_thread(
            client.models.generate_content,
            model=model,
            contents=parts,
            config=generate_config,
        )
    except Exception as e:
        logger.error(f"{operation_name} failed: {e}", extra=log_context or {"model": model})
        raise BackendError(f"{operation_name} failed: {e}") from e


def response_text(response: Any) -> str:
    """Response text, or "" when the model returned none."""
    return getattr(response, "text", None) or ""
