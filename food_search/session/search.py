"""Search session controller.

Holds the UI-facing state for one session and routes each search to the right
service for the active mode. State is replaced, never merged: each request
starts from a fresh loading state and ends with a fresh result or error state.

No locking is done here. If a caller starts a second search while one is
pending, whichever finishes last wins.
"""

from typing import Optional

from google import genai

from food_search.capabilities.geolocation import GeolocationProvider
from food_search.models.models import Attachment, ImageResolution, OperatingMode, SearchSessionState
from food_search.services.images import generate_image
from food_search.services.mode_resolver import parse_mode
from food_search.services.recommendations import fetch_recommendations
from food_search.services.video import generate_video
from food_search.utils.config import config
from food_search.utils.errors import BackendError, ConfigurationError, GenerationError
from food_search.utils.logger import logger

SUGGESTED_TAGS = [
    "Healthy Lunch",
    "Spicy Dinner",
    "Italian",
    "Vegan",
    "Comfort Food",
    "Sushi",
    "Late Night Snack",
]

SEARCH_ERROR_MESSAGE = "Oops! We couldn't find that right now. Please check your connection or API key."
VIDEO_ERROR_MESSAGE = "Could not generate video. Please try again later."
IMAGE_ERROR_MESSAGE = "Could not generate image. Please try again later."
VIDEO_ATTACHMENT_MESSAGE = "Video generation from attachments is not supported."
IMAGE_ATTACHMENT_MESSAGE = "Image generation from attachments is not supported."
EMPTY_QUERY_MESSAGE = "Please type what you're craving or attach a file."

_ERROR_MESSAGES = {
    OperatingMode.VIDEO: VIDEO_ERROR_MESSAGE,
    OperatingMode.IMAGE: IMAGE_ERROR_MESSAGE,
}


class SearchController:
    """State holder behind the search page.

    Attributes:
        state: Current SearchSessionState (replaced on every transition).
        mode: Active operating mode.
        attachment: The single pending attachment, if any.
        image_resolution: Size tier used in image mode.
    """

    def __init__(
        self,
        client: genai.Client,
        geolocation: Optional[GeolocationProvider] = None,
        mode: OperatingMode | str = OperatingMode.NORMAL,
    ) -> None:
        self.client = client
        self.geolocation = geolocation
        self.mode: OperatingMode = parse_mode(mode)
        self.attachment: Optional[Attachment] = None
        self.image_resolution = ImageResolution(config.DEFAULT_IMAGE_RESOLUTION)
        self.state = SearchSessionState()

    def set_mode(self, mode: OperatingMode | str) -> OperatingMode:
        self.mode = parse_mode(mode)
        return self.mode

    def toggle_mode(self, mode: OperatingMode | str) -> OperatingMode:
        """Mode buttons toggle: pressing the active mode returns to normal."""
        mode = parse_mode(mode)
        self.mode = OperatingMode.NORMAL if self.mode == mode else mode
        return self.mode

    def attach(self, attachment: Attachment) -> None:
        """Set the pending attachment, replacing any previous one."""
        self.attachment = attachment

    def remove_attachment(self) -> None:
        self.attachment = None

    async def search(self, query: str) -> SearchSessionState:
        """Run a search in the active mode and return the new state.

        Errors never escape: each failure path produces a state with only the
        error message set.
        """
        query = (query or "").strip()
        if not query and self.attachment is None:
            self.state = SearchSessionState.failed(EMPTY_QUERY_MESSAGE)
            return self.state

        self.state = SearchSessionState.loading()
        mode = self.mode

        try:
            if mode == OperatingMode.VIDEO:
                self.state = await self._search_video(query)
            elif mode == OperatingMode.IMAGE:
                self.state = await self._search_image(query)
            else:
                self.state = await self._search_recommendations(query, mode)
        except Exception as e:
            logger.error(f"Unexpected search failure: {e}", exc_info=True, extra={"mode": mode.value})
            self.state = SearchSessionState.failed(_ERROR_MESSAGES.get(mode, SEARCH_ERROR_MESSAGE))

        return self.state

    async def _search_video(self, query: str) -> SearchSessionState:
        if self.attachment is not None:
            return SearchSessionState.failed(VIDEO_ATTACHMENT_MESSAGE)
        try:
            return SearchSessionState.from_video(await generate_video(self.client, query))
        except GenerationError as e:
            logger.error(f"Video search failed: {e}", extra={"mode": "video"})
            return SearchSessionState.failed(VIDEO_ERROR_MESSAGE)

    async def _search_image(self, query: str) -> SearchSessionState:
        if self.attachment is not None:
            return SearchSessionState.failed(IMAGE_ATTACHMENT_MESSAGE)
        try:
            return SearchSessionState.from_image(await generate_image(self.client, query, self.image_resolution))
        except GenerationError as e:
            logger.error(f"Image search failed: {e}", extra={"mode": "image"})
            return SearchSessionState.failed(IMAGE_ERROR_MESSAGE)

    async def _search_recommendations(self, query: str, mode: OperatingMode) -> SearchSessionState:
        try:
            result = await fetch_recommendations(
                self.client,
                query,
                mode,
                attachment=self.attachment,
                geolocation=self.geolocation,
            )
        except (BackendError, ConfigurationError, ValueError) as e:
            logger.error(f"Search failed: {e}", extra={"mode": mode.value})
            return SearchSessionState.failed(SEARCH_ERROR_MESSAGE)
        return SearchSessionState.from_recommendations(result)
