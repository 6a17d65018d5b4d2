"""Nutrition domain models."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

SCHEMA_VERSION = 2


def _reject_bool(value: object) -> object:
    if isinstance(value, bool):
        raise ValueError("nutrient must be a number, not a boolean")
    return value


class NutritionRecord(BaseModel):
    """Unified nutrition estimate, values are per one ``portion``."""

    model_config = ConfigDict(frozen=True)

    name: str
    portion: str | None = None
    energy: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    protein: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    fats: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    water: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        return value

    @field_validator("energy", "protein", "fats", "water", mode="before")
    @classmethod
    def _nutrient_not_bool(cls, value: object) -> object:
        return _reject_bool(value)


class LegacyNutrients(BaseModel):
    """Nested nutrient group of the version 1 output."""

    calorias: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    proteinas: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    grasas: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    agua: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)

    @field_validator("calorias", "proteinas", "grasas", "agua", mode="before")
    @classmethod
    def _nutrient_not_bool(cls, value: object) -> object:
        return _reject_bool(value)


class LegacyNutritionOutput(BaseModel):
    """Version 1 engine output with source-language field names."""

    alimento: str
    porcion: str | None = None
    nutrientes: LegacyNutrients


@dataclass(frozen=True)
class ConsumedNutrition:
    """Nutrients rescaled to the quantity actually eaten."""

    energy: float
    protein: float
    fats: float
    water: float
