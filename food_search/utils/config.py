"""Configuration management for the Food Search service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults

The backend credential (GEMINI_API_KEY) is the only secret. It is checked when a
client is created, not at import time, so parsers and prompt builders stay usable
without it.
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

        # Model tiers per operating mode
        # STANDARD_MODEL: normal, searchAgent and restaurants modes (and recipe lookups)
        self.STANDARD_MODEL: str = os.getenv("STANDARD_MODEL", "gemini-2.5-flash")
        # FAST_MODEL: lightweight tier for "fast" mode
        self.FAST_MODEL: str = os.getenv("FAST_MODEL", "gemini-2.5-flash-lite")
        # THINKING_MODEL: high-reasoning tier for "thinking" mode
        self.THINKING_MODEL: str = os.getenv("THINKING_MODEL", "gemini-3-pro-preview")
        # VIDEO_MODEL: Veo model used by the video generation service
        self.VIDEO_MODEL: str = os.getenv("VIDEO_MODEL", "veo-3.1-fast-generate-preview")
        # IMAGE_MODEL: image-capable Gemini model used by the image generation service
        self.IMAGE_MODEL: str = os.getenv("IMAGE_MODEL", "gemini-3-pro-image-preview")

        # Reasoning budget (tokens) applied in "thinking" mode only
        self.THINKING_BUDGET: int = int(os.getenv("THINKING_BUDGET", "32768"))

        # Number of dishes requested per search, and restaurants in "restaurants" mode
        self.RECOMMENDATION_COUNT: int = int(os.getenv("RECOMMENDATION_COUNT", "3"))
        self.RESTAURANT_COUNT: int = int(os.getenv("RESTAURANT_COUNT", "5"))

        # Geolocation capability: bounded wait before "restaurants" mode gives up on coordinates
        self.GEOLOCATION_TIMEOUT_SECONDS: float = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "5"))
        # IP geolocation endpoint (must return JSON with "lat"/"lon" or "latitude"/"longitude")
        self.GEOLOCATION_URL: str = os.getenv("GEOLOCATION_URL", "http://ip-api.com/json")
        # ENABLE_IP_GEOLOCATION: allow the IP lookup when no explicit provider is given
        self.ENABLE_IP_GEOLOCATION: bool = _env_bool("ENABLE_IP_GEOLOCATION", "true")

        # Video generation polling
        # VIDEO_POLL_INTERVAL_SECONDS: wait between job status checks
        self.VIDEO_POLL_INTERVAL_SECONDS: float = float(os.getenv("VIDEO_POLL_INTERVAL_SECONDS", "5"))
        # VIDEO_MAX_POLLS: status checks before giving up. 0 = poll until the job completes
        self.VIDEO_MAX_POLLS: int = int(os.getenv("VIDEO_MAX_POLLS", "120"))
        self.VIDEO_RESOLUTION: str = os.getenv("VIDEO_RESOLUTION", "1080p")
        self.VIDEO_ASPECT_RATIO: str = os.getenv("VIDEO_ASPECT_RATIO", "16:9")

        # Image generation
        # DEFAULT_IMAGE_RESOLUTION: "1K", "2K" or "4K"
        self.DEFAULT_IMAGE_RESOLUTION: str = os.getenv("DEFAULT_IMAGE_RESOLUTION", "1K")
        self.IMAGE_ASPECT_RATIO: str = os.getenv("IMAGE_ASPECT_RATIO", "4:3")

        # Maximum attachment size (in MB) accepted by the attachment encoder
        self.MAX_ATTACHMENT_SIZE_MB: int = int(os.getenv("MAX_ATTACHMENT_SIZE_MB", "20"))

    def validate(self, require_api_key: bool = True) -> None:
        """Validate configuration.

        Args:
            require_api_key: Also require GEMINI_API_KEY (needed to build a client).

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if require_api_key and not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if self.THINKING_BUDGET < 0:
            raise ValueError(f"THINKING_BUDGET must be non-negative, got: {self.THINKING_BUDGET}")
        if self.RECOMMENDATION_COUNT < 1:
            raise ValueError(f"RECOMMENDATION_COUNT must be at least 1, got: {self.RECOMMENDATION_COUNT}")
        if self.RESTAURANT_COUNT < 1:
            raise ValueError(f"RESTAURANT_COUNT must be at least 1, got: {self.RESTAURANT_COUNT}")
        if not (0.0 < self.GEOLOCATION_TIMEOUT_SECONDS <= 5.0):
            raise ValueError(
                f"GEOLOCATION_TIMEOUT_SECONDS must be between 0 and 5, got: {self.GEOLOCATION_TIMEOUT_SECONDS}"
            )
        if self.VIDEO_POLL_INTERVAL_SECONDS <= 0:
            raise ValueError(
                f"VIDEO_POLL_INTERVAL_SECONDS must be positive, got: {self.VIDEO_POLL_INTERVAL_SECONDS}"
            )
        if self.VIDEO_MAX_POLLS < 0:
            raise ValueError(f"VIDEO_MAX_POLLS must be 0 (unbounded) or more, got: {self.VIDEO_MAX_POLLS}")
        if self.DEFAULT_IMAGE_RESOLUTION not in ("1K", "2K", "4K"):
            raise ValueError(
                f"DEFAULT_IMAGE_RESOLUTION must be '1K', '2K' or '4K', got: {self.DEFAULT_IMAGE_RESOLUTION}"
            )
        if self.MAX_ATTACHMENT_SIZE_MB < 1:
            raise ValueError(f"MAX_ATTACHMENT_SIZE_MB must be at least 1, got: {self.MAX_ATTACHMENT_SIZE_MB}")


# Create module-level config instance (credential checked lazily by create_client)
config = Config()
config.validate(require_api_key=False)
