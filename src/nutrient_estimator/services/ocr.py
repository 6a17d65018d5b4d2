"""OCR pre-pass for nutrition label photos."""

import logging
from typing import Protocol

from nutrient_estimator.domain.errors import ExtractionError

_logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = (
    "No text could be extracted from the image. "
    "Please retake the photo with better lighting and focus."
)


class TextDetectionClient(Protocol):
    """Interface for an OCR text detection service."""

    async def detect_text(self, image_bytes: bytes) -> list[str]:
        """Return detected text annotations, full-page transcription first."""


async def extract_label_text(client: TextDetectionClient, image_bytes: bytes) -> str:
    """Return the top text annotation, failing when the image has no text."""
    annotations = await client.detect_text(image_bytes)
    text = annotations[0].strip() if annotations else ""
    if not text:
        _logger.info("OCR found no text in %s byte image", len(image_bytes))
        raise ExtractionError(NO_TEXT_MESSAGE)
    return text
