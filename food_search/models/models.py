"""Data models and schemas for the Food Search service.

Defines Pydantic models for operating modes, backend configuration variants,
attachments and the parsed domain objects (recommendations, recipes, sources).
All models use Pydantic v2. Backend configuration is a discriminated union keyed
by the enabled tool, so every consumer handles each variant explicitly.
"""

from enum import Enum
from typing import List, Literal, Optional, Annotated, Union

from pydantic import BaseModel, Field, ConfigDict


class OperatingMode(str, Enum):
    """User-selected operating mode. Values match the front-end wire names."""

    NORMAL = "normal"
    FAST = "fast"
    THINKING = "thinking"
    VIDEO = "video"
    IMAGE = "image"
    SEARCH_AGENT = "searchAgent"
    RESTAURANTS = "restaurants"

    @property
    def is_media(self) -> bool:
        """True for modes served by the generation services instead of a text request."""
        return self in (OperatingMode.VIDEO, OperatingMode.IMAGE)


class ToolKind(str, Enum):
    """Grounding tool enabled on a backend request."""

    WEB_SEARCH = "web_search"
    MAPS = "maps"
    NONE = "none"


class ImageResolution(str, Enum):
    """Discrete output sizes accepted by the image model."""

    SMALL = "1K"
    MEDIUM = "2K"
    LARGE = "4K"


class MediaFamily(str, Enum):
    """Attachment media-type families the prompt builder specializes for."""

    IMAGE = "image"
    TEXT = "text"
    AUDIO = "audio"
    VIDEO = "video"


def media_family_for(mime_type: str) -> MediaFamily:
    """Closed match over the four families; anything else is treated as text."""
    major = mime_type.split("/", 1)[0].lower()
    if major == "image":
        return MediaFamily.IMAGE
    if major == "audio":
        return MediaFamily.AUDIO
    if major == "video":
        return MediaFamily.VIDEO
    return MediaFamily.TEXT


class GeoCoordinates(BaseModel):
    """Latitude/longitude pair used as a geographic bias for maps grounding."""

    model_config = ConfigDict(frozen=True)

    latitude: Annotated[float, Field(ge=-90.0, le=90.0)]
    longitude: Annotated[float, Field(ge=-180.0, le=180.0)]


# ============================================================================
# Backend configuration variants
# ============================================================================


class WebSearchConfig(BaseModel):
    """Web-search grounded request, optionally with a reasoning budget (thinking mode)."""

    model_config = ConfigDict(frozen=True)

    tool: Literal["web_search"] = "web_search"
    model: Annotated[str, Field(min_length=1, description="Backend model identifier")]
    thinking_budget: Annotated[
        Optional[int], Field(None, ge=0, description="Reasoning-token budget, set only in thinking mode")
    ]

    @property
    def tools(self) -> List[ToolKind]:
        return [ToolKind.WEB_SEARCH]


class MapsConfig(BaseModel):
    """Maps grounded request with an optional coordinate bias."""

    model_config = ConfigDict(frozen=True)

    tool: Literal["maps"] = "maps"
    model: Annotated[str, Field(min_length=1, description="Backend model identifier")]
    coordinates: Annotated[
        Optional[GeoCoordinates], Field(None, description="Geographic bias, present only if location was obtained")
    ]

    @property
    def tools(self) -> List[ToolKind]:
        return [ToolKind.MAPS]


class NoToolConfig(BaseModel):
    """Configuration for modes served by a generation service (video, image)."""

    model_config = ConfigDict(frozen=True)

    tool: Literal["none"] = "none"
    model: Annotated[str, Field(min_length=1, description="Generation model identifier")]

    @property
    def tools(self) -> List[ToolKind]:
        return []


BackendConfig = Annotated[Union[WebSearchConfig, MapsConfig, NoToolConfig], Field(discriminator="tool")]


# ============================================================================
# Attachments
# ============================================================================


class Attachment(BaseModel):
    """A user-selected file held in memory for the next request.

    At most one attachment exists per search input; choosing a new file replaces it.
    """

    model_config = ConfigDict(frozen=True)

    file_name: Annotated[str, Field(min_length=1, description="Original file name")]
    preview_url: Annotated[str, Field(description="Locally displayable reference (data: URL)")]
    mime_type: Annotated[str, Field(min_length=1, description="Media type, e.g. image/png")]
    base64_data: Annotated[str, Field(description="Base64 payload without the data: prefix")]
    size_bytes: Annotated[int, Field(ge=0, description="Decoded payload size")]

    @property
    def media_family(self) -> MediaFamily:
        return media_family_for(self.mime_type)


# ============================================================================
# Parsed results
# ============================================================================


class GroundingSource(BaseModel):
    """A citation the backend attributes its answer to."""

    model_config = ConfigDict(frozen=True)

    title: str
    uri: str


class RecommendationItem(BaseModel):
    """One recommended dish (or restaurant) parsed from an ITEM block.

    `id` is "rec-<n>" where n counts terminated blocks, so ids skip over blocks
    that were terminated but lacked a Name or Description line. `sources` is
    always empty: citations are reported once per response, not per item.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Annotated[str, Field(pattern=r"^rec-\d+$")]
    title: Annotated[str, Field(min_length=1)]
    description: Annotated[str, Field(min_length=1)]
    sources: Annotated[List[GroundingSource], Field(default_factory=list)]


class RecommendationResult(BaseModel):
    """Outcome of a recommendation request.

    An empty `items` list with non-empty `raw_text` is a valid result: the caller
    renders the raw text instead.
    """

    items: Annotated[List[RecommendationItem], Field(default_factory=list)]
    raw_text: str = ""
    sources: Annotated[List[GroundingSource], Field(default_factory=list)]


class Recipe(BaseModel):
    """A recipe lookup result. Missing scalar fields default to "Varies"."""

    dish_name: Annotated[str, Field(min_length=1)]
    prep_time: str = "Varies"
    servings: str = "Varies"
    ingredients: Annotated[List[str], Field(default_factory=list)]
    instructions: Annotated[List[str], Field(default_factory=list)]
    sources: Annotated[List[GroundingSource], Field(default_factory=list)]


class ShareContent(BaseModel):
    """Payload handed to a native share sheet or copied to the clipboard."""

    title: str
    text: str
    url: str

    @property
    def clipboard_text(self) -> str:
        return f"{self.text}\n{self.url}"


# ============================================================================
# Session state
# ============================================================================


class SearchSessionState(BaseModel):
    """UI-facing state of one search session.

    Instances are immutable and replaced wholesale after every request, so a new
    result never sits next to stale fields from a previous one.
    """

    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    results: Annotated[List[RecommendationItem], Field(default_factory=list)]
    raw_text: Optional[str] = None
    sources: Annotated[List[GroundingSource], Field(default_factory=list)]
    error: Optional[str] = None
    video_url: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def has_media(self) -> bool:
        return bool(self.video_url or self.image_url)

    @property
    def show_raw_text(self) -> bool:
        """Raw text is shown only when nothing structured or media-based is available."""
        return bool(not self.results and self.raw_text and not self.is_loading and not self.has_media)

    @classmethod
    def loading(cls) -> "SearchSessionState":
        return cls(is_loading=True)

    @classmethod
    def failed(cls, message: str) -> "SearchSessionState":
        return cls(error=message)

    @classmethod
    def from_recommendations(cls, result: RecommendationResult) -> "SearchSessionState":
        return cls(results=result.items, raw_text=result.raw_text, sources=result.sources)

    @classmethod
    def from_video(cls, video_url: str) -> "SearchSessionState":
        return cls(video_url=video_url)

    @classmethod
    def from_image(cls, image_url: str) -> "SearchSessionState":
        return cls(image_url=image_url)
