"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrient_estimator.adapters.google_vision_client import HttpxTextDetectionClient
from nutrient_estimator.adapters.openai_reasoning_client import OpenAIReasoningClient
from nutrient_estimator.config import Settings
from nutrient_estimator.services.estimation import (
    DishPhotoStrategy,
    DishTextStrategy,
    EstimationStrategy,
    LabelPhotoStrategy,
    NutritionEstimator,
    OcrLabelPhotoStrategy,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    estimator: NutritionEstimator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    reasoning_client = OpenAIReasoningClient.create(resolved_settings.openai_api_key)
    engine = {
        "client": reasoning_client,
        "model": resolved_settings.openai_model,
        "reasoning_effort": resolved_settings.openai_reasoning_effort,
        "store": resolved_settings.openai_store,
    }

    text_detector: HttpxTextDetectionClient | None = None
    label_strategy: EstimationStrategy
    if resolved_settings.label_extraction_mode == "ocr":
        if not resolved_settings.google_vision_api_key:
            raise ValueError("GOOGLE_VISION_API_KEY is required in ocr mode")
        text_detector = HttpxTextDetectionClient.create(
            api_key=resolved_settings.google_vision_api_key,
            base_url=resolved_settings.google_vision_base_url,
            timeout_seconds=resolved_settings.request_timeout_seconds,
        )
        label_strategy = OcrLabelPhotoStrategy(**engine, text_detector=text_detector)
    else:
        label_strategy = LabelPhotoStrategy(**engine)

    estimator = NutritionEstimator(
        dish_photo=DishPhotoStrategy(
            **engine, cuisine=resolved_settings.default_cuisine
        ),
        dish_text=DishTextStrategy(**engine, cuisine=resolved_settings.default_cuisine),
        label_photo=label_strategy,
    )

    async def close_resources() -> None:
        await reasoning_client.client.close()
        if text_detector is not None:
            await text_detector.close()

    return AppContainer(
        settings=resolved_settings,
        estimator=estimator,
        close_resources=close_resources,
    )
