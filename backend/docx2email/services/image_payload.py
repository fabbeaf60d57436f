"""
Image payload service.

Turns an uploaded header/footer image (or an image embedded in a .docx) into a
self-describing data URI that can be dropped straight into an <img src>.
"""

import base64
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImagePayloadError(ValueError):
    """The file is not a readable image."""

    def __init__(self, message: str = "unreadable file"):
        super().__init__(message)


def to_data_uri(content: bytes, content_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def image_to_data_uri(content: bytes, content_type: Optional[str] = None) -> str:
    """
    Validate image bytes and return them as a data URI.

    The bytes are checked with Pillow so a truncated or mislabelled upload is
    rejected here rather than producing a broken <img> in the email. When the
    client sent no usable content type, the one Pillow detected is used.

    Raises:
        ImagePayloadError: empty input or bytes Pillow cannot identify.
    """
    if not content:
        raise ImagePayloadError()

    try:
        with Image.open(io.BytesIO(content)) as img:
            detected = Image.MIME.get(img.format or "")
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        logger.warning("Rejected unreadable image payload: %s", exc)
        raise ImagePayloadError() from exc

    mime = content_type if content_type and content_type.startswith("image/") else detected
    if not mime:
        raise ImagePayloadError()

    return to_data_uri(content, mime)
