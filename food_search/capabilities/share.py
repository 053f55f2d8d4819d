"""Sharing a dish through a native share sheet or the clipboard."""

from enum import Enum
from typing import Optional, Protocol
from urllib.parse import quote

from food_search.models.models import ShareContent
from food_search.utils.logger import logger
from food_search.utils.resilience import safe_execute_async

SEARCH_URL = "https://www.google.com/search?q="
SHARE_TEXT = "Check out this delicious dish I found on Google Foods: {dish}"


class ShareProvider(Protocol):
    """Native share sheet."""

    async def share(self, content: ShareContent) -> bool: ...


class Clipboard(Protocol):
    async def write_text(self, text: str) -> bool: ...


class ShareOutcome(str, Enum):
    SHARED = "shared"
    # Show a transient "copied" acknowledgement
    COPIED = "copied"
    FAILED = "failed"


def build_share_content(dish_title: str) -> ShareContent:
    return ShareContent(
        title=f"Recipe: {dish_title}",
        text=SHARE_TEXT.format(dish=dish_title),
        url=SEARCH_URL + quote(f"{dish_title} recipe", safe=""),
    )


async def share_dish(
    dish_title: str,
    share_provider: Optional[ShareProvider] = None,
    clipboard: Optional[Clipboard] = None,
) -> ShareOutcome:
    """Share a dish, falling back to copying text and link to the clipboard.

    Args:
        dish_title: Dish to share.
        share_provider: Native share sheet, if the platform has one.
        clipboard: Clipboard used when there is no share sheet.

    Returns:
        What happened. Failures are logged, never raised.
    """
    content = build_share_content(dish_title)

    if share_provider is not None:
        shared = await safe_execute_async(share_provider.share(content), "Error sharing", default_return=False)
        return ShareOutcome.SHARED if shared else ShareOutcome.FAILED

    if clipboard is not None:
        copied = await safe_execute_async(
            clipboard.write_text(content.clipboard_text), "Error copying to clipboard", default_return=False
        )
        return ShareOutcome.COPIED if copied else ShareOutcome.FAILED

    logger.debug("No share sheet or clipboard available")
    return ShareOutcome.FAILED
