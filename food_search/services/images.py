"""Image service: single-shot food image generation."""

import base64
from typing import Any, Optional

from google import genai
from google.genai import types

from food_search.models.models import Attachment, ImageResolution
from food_search.prompts.prompts import build_image_prompt
from food_search.services.gemini import generate_content
from food_search.utils.config import config
from food_search.utils.errors import BackendError, GenerationError
from food_search.utils.logger import logger, request_context


def _inline_image(response: Any) -> Optional[tuple[str, bytes]]:
    """First inline image part of the first candidate as (mime_type, bytes)."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is None or not getattr(inline, "data", None):
            continue
        mime_type = getattr(inline, "mime_type", None) or "image/png"
        if mime_type.startswith("image/"):
            return mime_type, inline.data
    return None


def to_data_url(mime_type: str, data: bytes | str) -> str:
    """Inline image reference. `data` may already be base64 text."""
    encoded = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


async def generate_image(
    client: genai.Client,
    prompt: str,
    resolution: ImageResolution | str = ImageResolution.SMALL,
    attachment: Optional[Attachment] = None,
) -> str:
    """Generate a food image.

    Args:
        client: Injected Gemini client.
        prompt: What to picture.
        resolution: "1K", "2K" or "4K", passed verbatim to the backend.
        attachment: Not supported; passing one fails before any request is made.

    Returns:
        A data: URL with the generated image.

    Raises:
        ValueError: For an unknown resolution tier.
        GenerationError: Attachment given, request failure, or no inline image in the response.
    """
    if attachment is not None:
        raise GenerationError("Image generation from attachments is not supported")

    resolution = ImageResolution(resolution)
    log_context = request_context("image", config.IMAGE_MODEL)
    logger.info(f"Generating image ({resolution.value})", extra=log_context)

    generate_config = types.GenerateContentConfig(
        response_modalities=["TEXT", "IMAGE"],
        image_config=types.ImageConfig(
            aspect_ratio=config.IMAGE_ASPECT_RATIO,
            image_size=resolution.value,
        ),
    )

    try:
        response = await generate_content(
            client,
            config.IMAGE_MODEL,
            [types.Part.from_text(text=build_image_prompt(prompt))],
            generate_config,
            operation_name="Image request",
            log_context=log_context,
        )
    except BackendError as e:
        raise GenerationError(f"Image generation failed: {e}") from e

    image = _inline_image(response)
    if image is None:
        logger.error("Image response contained no inline image", extra=log_context)
        raise GenerationError("No image data returned")

    mime_type, data = image
    return to_data_url(mime_type, data)
