# =============================================================================
# lib/images.py - Photo Payload Helpers
# =============================================================================
# The web client sends photos as data URLs (FileReader.readAsDataURL).
# These helpers turn them into bytes for the OpenAI image edit endpoint and
# wrap generated images back into data URLs.
# =============================================================================

import base64
import binascii
import re

from lib.utils import ApplicationError

DEFAULT_MIME = "image/jpeg"

_DATA_URL_HEADER = re.compile(r"^data:(?P<mime>[^;,]+)?(?:;[^,]*)?,")


class InvalidImageError(ApplicationError):
    """Raised when a photo payload is not decodable base64."""

    def __init__(self, message: str):
        super().__init__(
            message,
            code="INVALID_IMAGE",
            suggestion="Send the photo as a base64 data URL (data:image/jpeg;base64,...)",
        )


def decode_data_url(value: str) -> tuple[bytes, str]:
    """
    Decode a data URL or raw base64 string.

    Args:
        value: "data:image/png;base64,iVBOR..." or bare base64

    Returns:
        Tuple of (image bytes, mime type). Bare base64 is assumed to be JPEG.

    Raises:
        InvalidImageError: If the payload is empty or not valid base64
    """
    mime = DEFAULT_MIME
    payload = value

    if "," in value:
        header, payload = value.split(",", 1)
        match = _DATA_URL_HEADER.match(header + ",")
        if match and match.group("mime"):
            mime = match.group("mime")

    payload = payload.strip()
    if not payload:
        raise InvalidImageError("Photo payload is empty")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"Photo is not valid base64: {e}")

    return data, mime


def image_filename(mime: str) -> str:
    """Upload filename for a mime type (jpeg -> photo.jpg)."""
    subtype = mime.split("/", 1)[-1] or "jpeg"
    if subtype == "jpeg":
        subtype = "jpg"
    return f"photo.{subtype}"


def to_data_url(b64_data: str, mime: str = "image/png") -> str:
    """Wrap base64 image data as a data URL."""
    return f"data:{mime};base64,{b64_data}"
