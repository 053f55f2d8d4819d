"""Video service: long-running Veo generation with status polling.

Protocol: submit a job, then wait VIDEO_POLL_INTERVAL_SECONDS between status
refreshes until the job reports done. The returned media URI only plays with the
backend credential attached, so the result is a playable URL with a `key` suffix.

There is no cancellation hook: once started, the loop ends on job completion, on
a transport error, or after VIDEO_MAX_POLLS refreshes (0 disables the cap).
"""

import asyncio
from typing import Any, Optional

from google import genai
from google.genai import types

from food_search.models.models import Attachment
from food_search.prompts.prompts import build_video_prompt
from food_search.utils.config import config
from food_search.utils.errors import GenerationError
from food_search.utils.logger import logger, request_context


def playable_url(uri: str, api_key: str) -> str:
    """Append the access credential to a media URI."""
    separator = "&" if "?" in uri else "?"
    return f"{uri}{separator}key={api_key}"


def _video_uri(operation: Any) -> Optional[str]:
    result = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(result, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None)


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(getattr(error, "message", error))


async def generate_video(
    client: genai.Client,
    prompt: str,
    attachment: Optional[Attachment] = None,
    *,
    api_key: Optional[str] = None,
    poll_interval: Optional[float] = None,
    max_polls: Optional[int] = None,
) -> str:
    """Generate a short food video and return a playable URL.

    Args:
        client: Injected Gemini client.
        prompt: What to film.
        attachment: Not supported; passing one fails before any request is made.
        api_key: Credential appended to the media URI (defaults to GEMINI_API_KEY).
        poll_interval: Seconds between status checks (defaults to VIDEO_POLL_INTERVAL_SECONDS).
        max_polls: Status checks before giving up, 0 for no limit (defaults to VIDEO_MAX_POLLS).

    Returns:
        Playable video URL.

    Raises:
        GenerationError: Attachment given, transport failure, job error, poll limit
            reached, or no video URI in the finished job.
    """
    if attachment is not None:
        raise GenerationError("Video generation from attachments is not supported")

    api_key = api_key if api_key is not None else config.GEMINI_API_KEY
    poll_interval = poll_interval if poll_interval is not None else config.VIDEO_POLL_INTERVAL_SECONDS
    max_polls = max_polls if max_polls is not None else config.VIDEO_MAX_POLLS
    log_context = request_context("video", config.VIDEO_MODEL)

    logger.info("Submitting video generation job", extra=log_context)
    try:
        operation = await asyncio.to_thread(
            client.models.generate_videos,
            model=config.VIDEO_MODEL,
            prompt=build_video_prompt(prompt),
            config=types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=config.VIDEO_RESOLUTION,
                aspect_ratio=config.VIDEO_ASPECT_RATIO,
            ),
        )

        polls = 0
        while not operation.done:
            if max_polls and polls >= max_polls:
                logger.error(f"Video job not finished after {polls} status checks", extra=log_context)
                raise GenerationError(f"Video generation did not finish after {polls} status checks")
            await asyncio.sleep(poll_interval)
            operation = await asyncio.to_thread(client.operations.get, operation)
            polls += 1
            logger.debug(f"Video job status check {polls}: done={operation.done}", extra=log_context)
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"Video generation request failed: {e}", extra=log_context)
        raise GenerationError(f"Video generation failed: {e}") from e

    error = getattr(operation, "error", None)
    if error:
        logger.error(f"Video job failed: {_error_message(error)}", extra=log_context)
        raise GenerationError(f"Video generation failed: {_error_message(error)}")

    uri = _video_uri(operation)
    if not uri:
        logger.error("Video job finished without a video URI", extra=log_context)
        raise GenerationError("No video URI returned from Veo")

    logger.info(f"Video ready after {polls} status check(s)", extra=log_context)
    return playable_url(uri, api_key)
