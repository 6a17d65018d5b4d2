"""Google Cloud Vision text detection client."""

import base64
import logging
from dataclasses import dataclass

import httpx

from nutrient_estimator.domain.errors import EngineError
from nutrient_estimator.services.ocr import TextDetectionClient

_logger = logging.getLogger(__name__)


@dataclass
class HttpxTextDetectionClient(TextDetectionClient):
    """HTTPX-backed client for the Vision ``images:annotate`` endpoint."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxTextDetectionClient":
        """Create a text detection client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def detect_text(self, image_bytes: bytes) -> list[str]:
        """Return text annotations, full-page transcription first."""
        url = f"{self.base_url}/images:annotate"
        payload = {
            "requests": [
                {
                    "image": {"content": _encode(image_bytes)},
                    "features": [{"type": "TEXT_DETECTION"}],
                }
            ]
        }
        try:
            response = await self.http_client.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            _logger.warning("Text detection request failed: %s", exc)
            raise EngineError(
                "Text detection failed. Please try again in a moment."
            ) from exc

        first = _first_result(response)
        error = first.get("error")
        if error:
            _logger.warning("Text detection returned an error: %s", error)
            raise EngineError(
                "Text detection failed. Please try again in a moment."
            )
        annotations = first.get("textAnnotations") or []
        if not isinstance(annotations, list):
            raise EngineError("Text detection returned an unexpected response.")
        return [
            str(annotation.get("description") or "")
            for annotation in annotations
            if isinstance(annotation, dict)
        ]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _first_result(response: httpx.Response) -> dict[str, object]:
    """Return the first entry of ``responses`` from an annotate reply."""
    try:
        body = response.json()
    except ValueError as exc:
        _logger.warning("Text detection returned non-JSON: %r", response.text[:200])
        raise EngineError(
            "Text detection returned an unexpected response."
        ) from exc
    if not isinstance(body, dict):
        raise EngineError("Text detection returned an unexpected response.")
    results = body.get("responses") or [{}]
    if not isinstance(results, list) or not isinstance(results[0], dict):
        raise EngineError("Text detection returned an unexpected response.")
    return results[0]


def _encode(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("ascii")
