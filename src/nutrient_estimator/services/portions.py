"""Rescale a per-portion nutrition record to the quantity eaten."""

import math
import re
from dataclasses import astuple
from numbers import Real

from nutrient_estimator.domain.errors import InputValidationError
from nutrient_estimator.domain.nutrition import ConsumedNutrition, NutritionRecord

DEFAULT_PORTION_GRAMS = 100

_DIGITS = re.compile(r"\d+")


def parse_portion_grams(portion: str | None) -> int:
    """Return the first integer found in a portion descriptor, or 100."""
    if not portion:
        return DEFAULT_PORTION_GRAMS
    match = _DIGITS.search(portion)
    if match is None:
        return DEFAULT_PORTION_GRAMS
    return int(match.group()) or DEFAULT_PORTION_GRAMS


def rescale(record: NutritionRecord, consumed_grams: float) -> ConsumedNutrition:
    """Scale every nutrient from the record's portion to ``consumed_grams``."""
    if (
        isinstance(consumed_grams, bool)
        or not isinstance(consumed_grams, Real)
        or not math.isfinite(consumed_grams)
        or consumed_grams <= 0
    ):
        raise InputValidationError(
            "Please enter a valid number of grams greater than 0."
        )

    multiplier = consumed_grams / parse_portion_grams(record.portion)
    consumed = ConsumedNutrition(
        energy=record.energy * multiplier,
        protein=record.protein * multiplier,
        fats=record.fats * multiplier,
        water=record.water * multiplier,
    )
    if not all(math.isfinite(value) for value in astuple(consumed)):
        raise InputValidationError("Consumed quantity is too large to compute.")
    return consumed
