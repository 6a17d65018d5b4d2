"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from nutrient_estimator.config import Settings
from nutrient_estimator.containers import AppContainer
from nutrient_estimator.services.estimation import (
    DishPhotoStrategy,
    DishTextStrategy,
    LabelPhotoStrategy,
    NutritionEstimator,
    ReasoningClient,
)
from nutrient_estimator.services.ocr import TextDetectionClient

PHOTO_DATA_URI = "data:image/jpeg;base64,ZmFrZS1pbWFnZQ=="


@dataclass
class FakeReasoningClient(ReasoningClient):
    """Fake reasoning client returning a fixed payload and recording calls."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Lomo saltado",
            "portion": "100g",
            "energy": 180,
            "protein": 12.5,
            "fats": 9,
            "water": 62,
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "schema": schema,
                "schema_name": schema_name,
                "image_data_url": image_data_url,
            }
        )
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeTextDetector(TextDetectionClient):
    """Fake OCR client returning fixed annotations."""

    annotations: list[str] = field(
        default_factory=lambda: [
            "Nutrition Facts\nServing size 30g\nEnergy 120 kcal\nProtein 3g\nFat 5g",
            "Nutrition",
        ]
    )
    calls: int = 0

    async def detect_text(self, image_bytes: bytes) -> list[str]:
        self.calls += 1
        return self.annotations


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def reasoning_client() -> FakeReasoningClient:
    return FakeReasoningClient()


def engine_kwargs(client: ReasoningClient) -> dict[str, object]:
    return {
        "client": client,
        "model": "gpt-5.2",
        "reasoning_effort": "medium",
        "store": False,
    }


@pytest.fixture
def estimator(reasoning_client: FakeReasoningClient) -> NutritionEstimator:
    engine = engine_kwargs(reasoning_client)
    return NutritionEstimator(
        dish_photo=DishPhotoStrategy(**engine),
        dish_text=DishTextStrategy(**engine),
        label_photo=LabelPhotoStrategy(**engine),
    )


@pytest.fixture
def container(settings: Settings, estimator: NutritionEstimator) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        estimator=estimator,
        close_resources=close_resources,
    )
