"""Helpers for image data URLs."""

import base64
import binascii
import re

from nutrient_estimator.domain.errors import InputValidationError

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.S)


def to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes carried by a base64 data URL."""
    match = _DATA_URL.match(data_url.strip())
    if match is None:
        raise InputValidationError(
            "Photo must be a data URI of the form 'data:<mimetype>;base64,<data>'."
        )
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InputValidationError("Photo data URI is not valid base64.") from exc
    if not data:
        raise InputValidationError("Photo data URI contains no image data.")
    return data


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
