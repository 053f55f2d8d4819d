"""System instruction and prompt builders for Food Search requests.

Every recommendation-style mode (normal, fast, thinking, searchAgent, restaurants)
asks for the same ITEM block format, so one parser handles all of them. Only the
task wording changes: attachments switch the task to analyzing that media type,
restaurants asks for places instead of dishes, searchAgent frames the request as
research.
"""

import base64
from typing import List, Optional

from google.genai import types
from pydantic import BaseModel, ConfigDict

from food_search.models.models import Attachment, MediaFamily, OperatingMode
from food_search.parsers.blocks import (
    INGREDIENTS_END,
    INGREDIENTS_START,
    INSTRUCTIONS_END,
    INSTRUCTIONS_START,
    ITEM_END,
    ITEM_START,
    PREP_TIME_LABEL,
    SERVINGS_LABEL,
)
from food_search.utils.config import config


class PromptPayload(BaseModel):
    """Outbound request content: system instruction plus ordered content parts.

    When an attachment is present its inline part comes first and the text
    instruction last.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    system_instruction: Optional[str] = None
    parts: List[types.Part]

    @property
    def text(self) -> str:
        """The text instruction (always the last part)."""
        return self.parts[-1].text or ""


def _get_format_section() -> str:
    """Block format shared by every recommendation-style request."""
    return f"""
Format your response strictly using the following markers for each item so it can be parsed:

{ITEM_START}
Name: [Name]
Description: [A mouth-watering description, followed by a brief reason why it fits the request]
{ITEM_END}

Do not use markdown lists or bullets inside the Name field. Keep descriptions concise (under 50 words).
Do not write anything between items other than the markers.
"""


def get_system_instruction() -> str:
    """System instruction for recommendation-style requests.

    The item format itself travels with each request text, next to the task it
    applies to.
    """
    return """
You are Google Foods, a helpful food recommendation assistant.
You always answer with structured items in the format the request describes, never free-form prose.
"""


SYSTEM_INSTRUCTION = get_system_instruction()


def _get_task_section(mode: OperatingMode, query: str) -> str:
    count = config.RECOMMENDATION_COUNT

    if mode == OperatingMode.RESTAURANTS:
        return f"""
The user is asking: "{query}".

Find exactly {config.RESTAURANT_COUNT} restaurants that serve food matching this request, using Google Maps.
Prefer places that are currently open, well rated and close to the user's location when it is known.
In each Description mention the cuisine, the standout dish and why the place fits the request.
"""

    if mode == OperatingMode.SEARCH_AGENT:
        return f"""
Research the following food question thoroughly: "{query}".

Search the web from several angles (recipes, food guides, reviews) and compare what you find.
Then report the {count} best matching dishes or food options, each verified against your sources.
"""

    return f"""
The user is asking: "{query}".

Please suggest exactly {count} distinct food dishes or meals that match this request.
For each recommendation, verify it exists using Google Search and find a relevant recipe or restaurant context.
"""


def _get_attachment_section(family: MediaFamily, query: str) -> str:
    count = config.RECOMMENDATION_COUNT
    request = f'The user adds: "{query}".' if query else ""

    if family == MediaFamily.IMAGE:
        task = (
            "Analyze the attached image. Identify the food, dish or ingredients shown, "
            f"then suggest {count} dishes that match it or can be made from it."
        )
    elif family == MediaFamily.AUDIO:
        task = (
            "Listen to the attached audio. Work out the food request or the dishes mentioned, "
            f"then suggest {count} matching dishes."
        )
    elif family == MediaFamily.VIDEO:
        task = (
            "Watch the attached video. Identify the food being prepared or shown, "
            f"then suggest {count} dishes that match it."
        )
    else:
        task = (
            "Read the attached text (for example a menu, shopping list or recipe). "
            f"Use it to suggest {count} fitting dishes."
        )

    return f"""
{task}
{request}
"""


def build_recommendation_prompt(
    mode: OperatingMode,
    query: str,
    attachment: Optional[Attachment] = None,
) -> PromptPayload:
    """Compose the request for a recommendation-style mode.

    Args:
        mode: Operating mode (selects task wording).
        query: Free-text user query (may be empty when an attachment is given).
        attachment: Optional attachment; its media family selects the analysis task.

    Returns:
        PromptPayload with the attachment part (if any) first and the text part last.
    """
    query = (query or "").strip()
    parts: List[types.Part] = []

    if attachment is not None:
        parts.append(
            types.Part.from_bytes(data=base64.b64decode(attachment.base64_data), mime_type=attachment.mime_type)
        )
        task = _get_attachment_section(attachment.media_family, query)
    else:
        task = _get_task_section(mode, query)

    parts.append(types.Part.from_text(text=f"{task}\n{_get_format_section()}"))
    return PromptPayload(system_instruction=SYSTEM_INSTRUCTION, parts=parts)


def build_recipe_prompt(dish_name: str) -> PromptPayload:
    """Compose the recipe lookup request for one dish."""
    text = f"""
Find a detailed, highly-rated recipe for "{dish_name}".
Use Google Search to find accurate ingredients and instructions.

Format your response strictly as follows:

{PREP_TIME_LABEL} [e.g. 30 mins]
{SERVINGS_LABEL} [e.g. 4 people]

{INGREDIENTS_START}
- [Ingredient 1]
- [Ingredient 2]
...
{INGREDIENTS_END}

{INSTRUCTIONS_START}
1. [Step 1]
2. [Step 2]
...
{INSTRUCTIONS_END}
"""
    return PromptPayload(parts=[types.Part.from_text(text=text)])


def build_video_prompt(prompt: str) -> str:
    return (
        f"Cinematic, high-quality food commercial shot of: {prompt.strip()}. "
        "Appetizing, 4k, professional lighting."
    )


def build_image_prompt(prompt: str) -> str:
    return (
        f"A beautiful, appetizing food photograph of: {prompt.strip()}. "
        "Soft natural light, shallow depth of field, clean plating, no text, no logos, no watermark."
    )
