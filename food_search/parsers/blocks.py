"""Delimited-block parsing for model responses.

The prompts ask the model to wrap structured content in literal markers, and
this module is the only place that reads them back. The markers form a small
versioned protocol: change BLOCK_PROTOCOL_VERSION together with the prompt
templates whenever a marker changes.

Parsing never raises on bad model output. Unterminated or incomplete blocks are
dropped and missing scalar fields fall back to DEFAULT_FIELD_VALUE.
"""

import re
from typing import List, Optional

from food_search.models.models import GroundingSource, Recipe, RecommendationItem
from food_search.utils.logger import logger

BLOCK_PROTOCOL_VERSION = "1"

ITEM_START = "### ITEM_START"
ITEM_END = "### ITEM_END"
PREP_TIME_LABEL = "PREP_TIME:"
SERVINGS_LABEL = "SERVINGS:"
INGREDIENTS_START = "INGREDIENTS_START"
INGREDIENTS_END = "INGREDIENTS_END"
INSTRUCTIONS_START = "INSTRUCTIONS_START"
INSTRUCTIONS_END = "INSTRUCTIONS_END"

DEFAULT_FIELD_VALUE = "Varies"

_NAME_RE = re.compile(r"Name:\s*(.+)")
# Description runs to the end of the block (may span lines)
_DESCRIPTION_RE = re.compile(r"Description:\s*(.+)", re.DOTALL)
_PREP_TIME_RE = re.compile(re.escape(PREP_TIME_LABEL) + r"\s*(.+)")
_SERVINGS_RE = re.compile(re.escape(SERVINGS_LABEL) + r"\s*(.+)")

_BULLET_RE = re.compile(r"^[-*]\s*")
_ORDINAL_RE = re.compile(r"^\d+[.)]\s*")


def parse_recommendations(text: str) -> List[RecommendationItem]:
    """Parse ITEM blocks into recommendation items.

    The text is split on ITEM_START. The segment before the first marker is
    preamble and ignored. Segments without ITEM_END are discarded, which
    tolerates truncated trailing output. The remaining segments are numbered in
    order (rec-0, rec-1, ...); a numbered segment without both a Name and a
    Description line is then dropped, leaving a gap in the ids.

    Args:
        text: Raw response text.

    Returns:
        Parsed items in response order (possibly empty).
    """
    if not text:
        return []

    segments = text.split(ITEM_START)[1:]
    terminated = [segment for segment in segments if ITEM_END in segment]
    if len(terminated) < len(segments):
        logger.debug(f"Dropped {len(segments) - len(terminated)} unterminated item block(s)")

    items: List[RecommendationItem] = []
    for index, segment in enumerate(terminated):
        content = segment.split(ITEM_END, 1)[0].strip()
        name_match = _NAME_RE.search(content)
        description_match = _DESCRIPTION_RE.search(content)

        title = name_match.group(1).strip() if name_match else ""
        description = description_match.group(1).strip() if description_match else ""
        if not title or not description:
            logger.debug(f"Dropped item block {index}: missing Name or Description")
            continue

        items.append(RecommendationItem(id=f"rec-{index}", title=title, description=description))

    return items


def strip_list_marker(line: str, ordinals: bool = False) -> str:
    """Trim a line and remove a leading "-" / "*" bullet (and "1." ordinal if asked).

    Ordinals are only stripped for instruction steps: an ingredient such as
    "1.5 cups flour" must keep its quantity.
    """
    cleaned = line.strip()
    if ordinals:
        cleaned = _ORDINAL_RE.sub("", cleaned)
    cleaned = _BULLET_RE.sub("", cleaned)
    return cleaned.strip()


def _extract_block(text: str, start: str, end: str) -> Optional[str]:
    if start not in text:
        return None
    # A missing end marker keeps everything after the start marker
    return text.split(start, 1)[1].split(end, 1)[0]


def _block_lines(block: Optional[str], ordinals: bool) -> List[str]:
    if not block:
        return []
    lines = (strip_list_marker(line, ordinals=ordinals) for line in block.splitlines())
    return [line for line in lines if line]


def _match_field(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    value = match.group(1).strip() if match else ""
    return value or DEFAULT_FIELD_VALUE


def parse_recipe(dish_name: str, text: str, sources: Optional[List[GroundingSource]] = None) -> Recipe:
    """Parse a recipe response.

    Args:
        dish_name: Dish the recipe was requested for.
        text: Raw response text.
        sources: Grounding sources extracted from the same response.

    Returns:
        Recipe with whatever could be read. A response without the delimited
        blocks yields empty ingredient and instruction lists.
    """
    text = text or ""
    ingredients = _block_lines(_extract_block(text, INGREDIENTS_START, INGREDIENTS_END), ordinals=False)
    instructions = _block_lines(_extract_block(text, INSTRUCTIONS_START, INSTRUCTIONS_END), ordinals=True)

    if not ingredients and not instructions:
        logger.debug(f"Recipe response for '{dish_name}' had no ingredient or instruction blocks")

    return Recipe(
        dish_name=dish_name,
        prep_time=_match_field(_PREP_TIME_RE, text),
        servings=_match_field(_SERVINGS_RE, text),
        ingredients=ingredients,
        instructions=instructions,
        sources=list(sources or []),
    )
