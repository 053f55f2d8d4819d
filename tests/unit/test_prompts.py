"""Unit tests for prompt construction."""

import base64

import pytest

from food_search.models.models import Attachment, OperatingMode
from food_search.parsers.blocks import ITEM_END, ITEM_START
from food_search.prompts.prompts import (
    SYSTEM_INSTRUCTION,
    _get_format_section,
    build_image_prompt,
    build_recipe_prompt,
    build_recommendation_prompt,
    build_video_prompt,
)
from food_search.utils.config import config

RECOMMENDATION_MODES = [
    OperatingMode.NORMAL,
    OperatingMode.FAST,
    OperatingMode.THINKING,
    OperatingMode.SEARCH_AGENT,
    OperatingMode.RESTAURANTS,
]


def make_attachment(mime_type: str, payload: bytes = b"hello") -> Attachment:
    encoded = base64.b64encode(payload).decode("ascii")
    return Attachment(
        file_name="upload",
        preview_url=f"data:{mime_type};base64,{encoded}",
        mime_type=mime_type,
        base64_data=encoded,
        size_bytes=len(payload),
    )


class TestRecommendationPrompt:
    """Test recommendation prompt layout and wording."""

    def test_text_only_prompt(self):
        prompt = build_recommendation_prompt(OperatingMode.NORMAL, "Spicy Ramen")

        assert len(prompt.parts) == 1
        assert '"Spicy Ramen"' in prompt.text
        assert f"exactly {config.RECOMMENDATION_COUNT}" in prompt.text
        assert prompt.system_instruction == SYSTEM_INSTRUCTION

    def test_attachment_part_first_text_last(self):
        prompt = build_recommendation_prompt(OperatingMode.NORMAL, "", make_attachment("image/png", b"\x89PNG"))

        assert len(prompt.parts) == 2
        assert prompt.parts[0].inline_data.mime_type == "image/png"
        assert prompt.parts[0].inline_data.data == b"\x89PNG"
        assert prompt.parts[1].text == prompt.text

    @pytest.mark.parametrize(
        "mime_type,wording",
        [
            ("image/jpeg", "Analyze the attached image"),
            ("audio/mpeg", "Listen to the attached audio"),
            ("video/mp4", "Watch the attached video"),
            ("text/plain", "Read the attached text"),
        ],
    )
    def test_attachment_wording_by_media_family(self, mime_type, wording):
        prompt = build_recommendation_prompt(OperatingMode.NORMAL, "", make_attachment(mime_type))
        assert wording in prompt.text

    def test_attachment_with_query_includes_query(self):
        prompt = build_recommendation_prompt(OperatingMode.NORMAL, "vegan please", make_attachment("image/png"))
        assert '"vegan please"' in prompt.text

    def test_restaurants_wording(self):
        prompt = build_recommendation_prompt(OperatingMode.RESTAURANTS, "dumplings")

        assert "restaurants" in prompt.text
        assert f"exactly {config.RESTAURANT_COUNT}" in prompt.text

    def test_search_agent_wording(self):
        prompt = build_recommendation_prompt(OperatingMode.SEARCH_AGENT, "best tacos")
        assert "Research" in prompt.text

    @pytest.mark.parametrize("mode", RECOMMENDATION_MODES)
    def test_same_block_format_for_every_mode(self, mode):
        prompt = build_recommendation_prompt(mode, "pasta")

        assert prompt.text.endswith(_get_format_section())
        assert ITEM_START in prompt.text and ITEM_END in prompt.text

    def test_format_block_sent_once(self):
        """The item format lives in the request text only, not in the system instruction."""
        prompt = build_recommendation_prompt(OperatingMode.NORMAL, "pasta")

        assert ITEM_START not in prompt.system_instruction
        assert prompt.text.count(ITEM_START) == 1

    def test_query_is_trimmed(self):
        prompt = build_recommendation_prompt(OperatingMode.FAST, "   sushi   ")
        assert '"sushi"' in prompt.text


class TestOtherPrompts:
    def test_recipe_prompt(self):
        prompt = build_recipe_prompt("Pad Thai")

        assert prompt.system_instruction is None
        assert '"Pad Thai"' in prompt.text
        for marker in ("PREP_TIME:", "SERVINGS:", "INGREDIENTS_START", "INSTRUCTIONS_END"):
            assert marker in prompt.text

    def test_video_prompt(self):
        assert build_video_prompt(" tacos ").startswith("Cinematic, high-quality food commercial shot of: tacos.")

    def test_image_prompt(self):
        assert "food photograph of: pie." in build_image_prompt("pie")
