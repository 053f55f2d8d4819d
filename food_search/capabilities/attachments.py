"""Attachment encoding for user-supplied files.

Turns a file (path or raw bytes) into an in-memory Attachment: base64 payload
for the backend, a data: URL preview the UI can display, and a media type.
The media type is sniffed from magic bytes with filetype, falling back to the
file name and finally to plain text for UTF-8 content.
"""

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import Optional

import filetype

from food_search.models.models import Attachment
from food_search.utils.config import config
from food_search.utils.errors import AttachmentError
from food_search.utils.logger import logger

DEFAULT_FILE_NAME = "attachment"
FALLBACK_MIME_TYPE = "application/octet-stream"


def detect_mime_type(data: bytes, file_name: Optional[str] = None) -> str:
    """Guess the media type of a payload.

    Args:
        data: Raw file bytes.
        file_name: Optional file name used when magic bytes are inconclusive.

    Returns:
        A media type string, never empty.
    """
    kind = filetype.guess(data)
    if kind is not None:
        return kind.mime

    if file_name:
        guessed, _ = mimetypes.guess_type(file_name)
        if guessed:
            return guessed

    try:
        data.decode("utf-8")
        return "text/plain"
    except UnicodeDecodeError:
        return FALLBACK_MIME_TYPE


def validate_attachment_size(data: bytes) -> bool:
    """Check the payload against MAX_ATTACHMENT_SIZE_MB."""
    size_mb = len(data) / (1024 * 1024)
    if size_mb > config.MAX_ATTACHMENT_SIZE_MB:
        logger.warning(f"Attachment size {size_mb:.2f}MB exceeds limit of {config.MAX_ATTACHMENT_SIZE_MB}MB")
        return False
    return True


def _read_file(path: Path) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


async def encode_attachment(
    source: str | Path | bytes,
    *,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
) -> Attachment:
    """Read and encode a file for the next request.

    Args:
        source: Filesystem path or raw bytes.
        file_name: Display name (defaults to the path's name or "attachment").
        mime_type: Explicit media type; sniffed when omitted.

    Returns:
        Encoded Attachment.

    Raises:
        AttachmentError: If the file cannot be read, is empty or is too large.
    """
    if isinstance(source, bytes):
        data = source
        name = file_name or DEFAULT_FILE_NAME
    else:
        path = Path(source)
        name = file_name or path.name
        try:
            data = await asyncio.to_thread(_read_file, path)
        except OSError as e:
            logger.error(f"Failed to read attachment {path}: {e}")
            raise AttachmentError(f"Failed to read file: {name}") from e

    if not data:
        raise AttachmentError(f"File is empty: {name}")
    if not validate_attachment_size(data):
        raise AttachmentError(f"File too large. Maximum size is {config.MAX_ATTACHMENT_SIZE_MB}MB")

    resolved_mime = mime_type or detect_mime_type(data, name)
    encoded = base64.b64encode(data).decode("ascii")

    logger.debug(f"Encoded attachment {name} ({resolved_mime}, {len(data)} bytes)")
    return Attachment(
        file_name=name,
        preview_url=f"data:{resolved_mime};base64,{encoded}",
        mime_type=resolved_mime,
        base64_data=encoded,
        size_bytes=len(data),
    )
