"""Grounding-source extraction from Gemini responses.

Citations come from the first candidate's grounding metadata, never from the
text. Web chunks and maps chunks both become GroundingSource entries; anything
else is ignored.
"""

from typing import Any, Iterable, List, Optional

from food_search.models.models import GroundingSource

DEFAULT_WEB_TITLE = "Web Source"
DEFAULT_MAPS_TITLE = "Map Location"
DEFAULT_URI = "#"


def _chunk_to_source(chunk: Any) -> Optional[GroundingSource]:
    web = getattr(chunk, "web", None)
    if web is not None:
        return GroundingSource(
            title=getattr(web, "title", None) or DEFAULT_WEB_TITLE,
            uri=getattr(web, "uri", None) or DEFAULT_URI,
        )

    maps = getattr(chunk, "maps", None)
    if maps is not None:
        return GroundingSource(
            title=getattr(maps, "title", None) or DEFAULT_MAPS_TITLE,
            uri=getattr(maps, "uri", None) or DEFAULT_URI,
        )

    return None


def dedupe_sources(sources: Iterable[GroundingSource]) -> List[GroundingSource]:
    """Remove repeated URIs, keeping the first occurrence and the original order."""
    seen: set[str] = set()
    unique: List[GroundingSource] = []
    for source in sources:
        if source.uri in seen:
            continue
        seen.add(source.uri)
        unique.append(source)
    return unique


def grounding_chunks(response: Any) -> list:
    """Return the grounding chunks of the first candidate, or an empty list."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    if metadata is None:
        return []
    return list(getattr(metadata, "grounding_chunks", None) or [])


def extract_sources(response: Any) -> List[GroundingSource]:
    """Flat, deduplicated source list for a whole response.

    Args:
        response: A GenerateContentResponse (or any object with the same shape).

    Returns:
        Sources in chunk order, unique by URI.
    """
    sources = (_chunk_to_source(chunk) for chunk in grounding_chunks(response))
    return dedupe_sources(source for source in sources if source is not None)
