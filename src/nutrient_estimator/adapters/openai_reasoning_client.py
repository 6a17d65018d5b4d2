"""OpenAI Responses API client for structured nutrition estimates."""

import json
import logging
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from nutrient_estimator.domain.errors import EngineError
from nutrient_estimator.services.estimation import ReasoningClient

_logger = logging.getLogger(__name__)

ENGINE_FAILURE_MESSAGE = "Could not estimate the nutrients. Please try again."


@dataclass
class OpenAIReasoningClient(ReasoningClient):
    """Reasoning client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIReasoningClient":
        """Create an OpenAI reasoning client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            _logger.warning("OpenAI request failed: %s", exc)
            raise EngineError(ENGINE_FAILURE_MESSAGE) from exc

        output_text = response.output_text
        if not output_text:
            raise EngineError(
                "The model returned an empty response. Please try again."
            )
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            _logger.warning("OpenAI returned invalid JSON: %r", output_text[:200])
            raise EngineError(
                "The model returned a response that is not JSON."
            ) from exc
