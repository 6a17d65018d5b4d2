"""Estimation strategies backed by a structured-output reasoning engine."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nutrient_estimator.domain.errors import (
    InputValidationError,
    NutrientEstimatorError,
)
from nutrient_estimator.domain.nutrition import NutritionRecord
from nutrient_estimator.services.images import decode_data_url
from nutrient_estimator.services.normalizer import normalize_output
from nutrient_estimator.services.ocr import TextDetectionClient, extract_label_text
from nutrient_estimator.services.prompts import (
    build_dish_photo_prompt,
    build_dish_text_prompt,
    build_label_photo_prompt,
    build_label_text_prompt,
)
from nutrient_estimator.services.schemas import NUTRITION_RECORD_SCHEMA, SCHEMA_NAME

_logger = logging.getLogger(__name__)

DISH_PORTION = "100g"

DISH_PHOTO = "dish-photo"
DISH_TEXT = "dish-text"
LABEL_PHOTO = "label-photo"


class ReasoningClient(Protocol):
    """Interface for a structured-output reasoning engine."""

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
        """Return the engine answer parsed from its JSON output."""


class EstimationStrategy(Protocol):
    """One way of turning an input into a nutrition record."""

    kind: str

    async def estimate(self, value: str) -> NutritionRecord:
        """Estimate nutrients for the given input."""


@dataclass
class _EngineStrategy:
    """Shared reasoning engine settings for the strategies."""

    client: ReasoningClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def _complete(
        self,
        prompt: str,
        *,
        image_data_url: str | None = None,
        default_portion: str | None = None,
    ) -> NutritionRecord:
        raw = await self.client.complete(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=prompt,
            schema=NUTRITION_RECORD_SCHEMA,
            schema_name=SCHEMA_NAME,
            image_data_url=image_data_url,
        )
        return normalize_output(raw, default_portion=default_portion)


@dataclass
class DishPhotoStrategy(_EngineStrategy):
    """Estimate a prepared dish per 100g from a photo."""

    cuisine: str = "Peruvian"
    kind: str = DISH_PHOTO

    async def estimate(self, value: str) -> NutritionRecord:
        """Estimate nutrients from a photo data URI."""
        photo_data_uri = _require_photo(value)
        return await self._complete(
            build_dish_photo_prompt(self.cuisine),
            image_data_url=photo_data_uri,
            default_portion=DISH_PORTION,
        )


@dataclass
class DishTextStrategy(_EngineStrategy):
    """Estimate a dish per 100g from its name."""

    cuisine: str = "Peruvian"
    kind: str = DISH_TEXT

    async def estimate(self, value: str) -> NutritionRecord:
        """Estimate nutrients from a dish name."""
        dish_name = (value or "").strip()
        if not dish_name:
            raise InputValidationError("Dish name must not be empty.")
        return await self._complete(
            build_dish_text_prompt(dish_name, self.cuisine),
            default_portion=DISH_PORTION,
        )


@dataclass
class LabelPhotoStrategy(_EngineStrategy):
    """Read a nutrition label photo with a vision-capable engine."""

    kind: str = LABEL_PHOTO

    async def estimate(self, value: str) -> NutritionRecord:
        """Extract label nutrients from a photo data URI."""
        photo_data_uri = _require_photo(value)
        return await self._complete(
            build_label_photo_prompt(), image_data_url=photo_data_uri
        )


@dataclass
class OcrLabelPhotoStrategy(_EngineStrategy):
    """Read a nutrition label by OCR, then interpret the text.

    Used with engines that cannot take images. The OCR call always completes
    before the engine is asked anything, and an image without text never
    reaches the engine.
    """

    text_detector: TextDetectionClient
    kind: str = LABEL_PHOTO

    async def estimate(self, value: str) -> NutritionRecord:
        """Extract label nutrients from a photo data URI via OCR."""
        image_bytes = decode_data_url(_require_photo(value))
        label_text = await extract_label_text(self.text_detector, image_bytes)
        return await self._complete(build_label_text_prompt(label_text))


@dataclass
class NutritionEstimator:
    """Entry points used by the HTTP layer."""

    dish_photo: EstimationStrategy
    dish_text: EstimationStrategy
    label_photo: EstimationStrategy

    def strategy_for(self, kind: str) -> EstimationStrategy:
        """Return the strategy registered for an input kind."""
        for strategy in (self.dish_photo, self.dish_text, self.label_photo):
            if strategy.kind == kind:
                return strategy
        raise KeyError(kind)

    async def estimate(self, kind: str, value: str) -> NutritionRecord:
        """Run the strategy for ``kind`` and log failures."""
        strategy = self.strategy_for(kind)
        try:
            record = await strategy.estimate(value)
        except NutrientEstimatorError as exc:
            _logger.warning(
                "Estimation %s failed: %s", kind, exc, exc_info=exc.__cause__
            )
            raise
        _logger.info(
            "Estimation %s succeeded: name=%s portion=%s",
            kind,
            record.name,
            record.portion,
        )
        return record

    async def estimate_from_photo(self, photo_data_uri: str) -> NutritionRecord:
        """Estimate a dish from a photo data URI."""
        return await self.estimate(DISH_PHOTO, photo_data_uri)

    async def estimate_from_text(self, dish_name: str) -> NutritionRecord:
        """Estimate a dish from its name."""
        return await self.estimate(DISH_TEXT, dish_name)

    async def extract_from_label_photo(self, photo_data_uri: str) -> NutritionRecord:
        """Extract nutrients from a nutrition label photo data URI."""
        return await self.estimate(LABEL_PHOTO, photo_data_uri)


def _require_photo(value: str | None) -> str:
    photo_data_uri = (value or "").strip()
    if not photo_data_uri:
        raise InputValidationError("Photo is required.")
    return photo_data_uri
