"""Exception hierarchy for the Food Search service.

Malformed model output is never an exception: parsers drop what they cannot
read and fall back to defaults.
"""


class FoodSearchError(Exception):
    """Base exception for Food Search errors."""


class ConfigurationError(FoodSearchError):
    """An operating mode or setting the resolver cannot map (caller defect)."""


class BackendError(FoodSearchError):
    """Transport or service failure during a recommendation or recipe request."""


class GenerationError(FoodSearchError):
    """Video or image generation finished without a usable payload, or was not supported."""


class AttachmentError(FoodSearchError):
    """A user-supplied file could not be read or encoded."""
