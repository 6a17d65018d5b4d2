"""Pydantic models for HTTP request bodies."""

from pydantic import BaseModel, ConfigDict, Field

from nutrient_estimator.domain.nutrition import NutritionRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EstimateRequest(_CamelModel):
    """Body of ``POST /estimate``: a photo or a dish name."""

    photo_data_uri: str | None = Field(default=None, alias="photoDataUri")
    dish_name: str | None = Field(default=None, alias="dishName")


class DishNameRequest(_CamelModel):
    """Body of ``POST /estimate/text``."""

    dish_name: str | None = Field(default=None, alias="dishName")


class PhotoRequest(_CamelModel):
    """Body carrying a base64 photo data URI."""

    photo_data_uri: str | None = Field(default=None, alias="photoDataUri")


class RescaleRequest(_CamelModel):
    """Body of ``POST /rescale``."""

    record: NutritionRecord
    consumed_grams: float | None = Field(default=None, alias="consumedGrams")
