"""Normalize reasoning engine answers into the unified record shape.

Two output shapes are accepted. The legacy one nests nutrients under
``nutrientes`` with Spanish field names; the unified one is flat. Any
individual nutrient that is missing or null becomes 0, while a response with
no recognisable shape, an empty name, or a bad numeric value is rejected.
"""

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from nutrient_estimator.domain.errors import EngineError
from nutrient_estimator.domain.nutrition import LegacyNutritionOutput, NutritionRecord

_logger = logging.getLogger(__name__)

_NUTRIENT_FIELDS = ("energy", "protein", "fats", "water")


def normalize_output(
    raw: Mapping[str, object], default_portion: str | None = None
) -> NutritionRecord:
    """Convert a legacy or unified engine answer into a NutritionRecord."""
    if not isinstance(raw, Mapping):
        raise EngineError("The model response is not a JSON object.")
    if "nutrientes" in raw:
        fields = _from_legacy(raw)
    elif "name" in raw:
        fields = _from_unified(raw)
    else:
        _logger.warning("Unrecognised model output keys: %s", sorted(raw))
        raise EngineError("The model response does not match a known schema.")

    portion = fields.get("portion")
    if portion is None or (isinstance(portion, str) and not portion.strip()):
        fields["portion"] = default_portion

    try:
        return NutritionRecord.model_validate(fields)
    except ValidationError as exc:
        _logger.warning("Model output failed validation: %s", exc)
        raise EngineError("The model response failed validation.") from exc


def _from_legacy(raw: Mapping[str, object]) -> dict[str, object]:
    try:
        legacy = LegacyNutritionOutput.model_validate(raw)
    except ValidationError as exc:
        _logger.warning("Legacy model output failed validation: %s", exc)
        raise EngineError("The model response failed validation.") from exc
    nutrients = legacy.nutrientes
    return {
        "name": legacy.alimento,
        "portion": legacy.porcion,
        "energy": nutrients.calorias or 0.0,
        "protein": nutrients.proteinas or 0.0,
        "fats": nutrients.grasas or 0.0,
        "water": nutrients.agua or 0.0,
    }


def _from_unified(raw: Mapping[str, object]) -> dict[str, object]:
    fields: dict[str, object] = {"name": raw["name"], "portion": raw.get("portion")}
    for key in _NUTRIENT_FIELDS:
        value = raw.get(key)
        fields[key] = 0.0 if value is None else value
    return fields
