"""Recipe viewer: recipe lookup, cook mode and sharing for one selected dish."""

from typing import Optional

from google import genai

from food_search.capabilities.share import Clipboard, ShareOutcome, ShareProvider, share_dish
from food_search.capabilities.wake_lock import CookModeSession, WakeLock
from food_search.models.models import OperatingMode, Recipe, RecommendationItem
from food_search.services.recipes import fetch_recipe
from food_search.utils.errors import BackendError
from food_search.utils.logger import logger

RECIPE_ERROR_MESSAGE = "Could not load recipe. Please try again."


class RecipeViewer:
    """State behind the recipe modal.

    Every `open` re-fetches the recipe; nothing is cached between openings.
    """

    def __init__(
        self,
        client: genai.Client,
        mode: OperatingMode | str = OperatingMode.NORMAL,
        wake_lock: Optional[WakeLock] = None,
        share_provider: Optional[ShareProvider] = None,
        clipboard: Optional[Clipboard] = None,
    ) -> None:
        self.client = client
        self.mode = mode
        self.wake_lock = wake_lock
        self.share_provider = share_provider
        self.clipboard = clipboard

        self.item: Optional[RecommendationItem] = None
        self.recipe: Optional[Recipe] = None
        self.loading = False
        self.error: Optional[str] = None
        self.cook_mode = CookModeSession(wake_lock=wake_lock)

    async def open(self, item: RecommendationItem) -> Optional[Recipe]:
        """Select a dish and load its recipe."""
        await self.cook_mode.close()
        self.item = item
        self.recipe = None
        self.error = None
        self.loading = True

        try:
            self.recipe = await fetch_recipe(self.client, item.title, self.mode)
        except (BackendError, ValueError) as e:
            logger.error(f"Recipe lookup for '{item.title}' failed: {e}")
            self.error = RECIPE_ERROR_MESSAGE
        except Exception as e:
            logger.error(f"Unexpected recipe lookup failure for '{item.title}': {e}", exc_info=True)
            self.error = RECIPE_ERROR_MESSAGE
        finally:
            self.loading = False

        instructions = self.recipe.instructions if self.recipe else []
        self.cook_mode = CookModeSession(instructions, wake_lock=self.wake_lock)
        return self.recipe

    async def close(self) -> None:
        await self.cook_mode.close()
        self.item = None
        self.recipe = None
        self.error = None

    async def share(self) -> ShareOutcome:
        if self.item is None:
            return ShareOutcome.FAILED
        return await share_dish(self.item.title, self.share_provider, self.clipboard)
