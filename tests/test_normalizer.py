"""Tests for output normalization."""

import pytest

from nutrient_estimator.domain.errors import EngineError
from nutrient_estimator.services.normalizer import normalize_output


def test_legacy_output_maps_to_unified_fields() -> None:
    raw = {
        "alimento": "Ceviche",
        "porcion": "100g",
        "nutrientes": {"calorias": 120, "proteinas": 20, "grasas": 2, "agua": 70},
    }

    record = normalize_output(raw)

    assert record.model_dump() == {
        "name": "Ceviche",
        "portion": "100g",
        "energy": 120,
        "protein": 20,
        "fats": 2,
        "water": 70,
    }


def test_unified_output_passes_through() -> None:
    raw = {
        "name": "Galletas de avena",
        "portion": "30g",
        "energy": 135.5,
        "protein": 2.1,
        "fats": 4.8,
        "water": 1.2,
    }

    record = normalize_output(raw)

    assert record.model_dump() == raw


def test_missing_nutrient_in_group_defaults_to_zero() -> None:
    raw = {
        "alimento": "Papa a la huancaína",
        "porcion": "100g",
        "nutrientes": {"calorias": 150, "proteinas": 4, "grasas": None},
    }

    record = normalize_output(raw)

    assert record.fats == 0
    assert record.water == 0
    assert record.energy == 150


def test_unified_null_nutrient_defaults_to_zero() -> None:
    record = normalize_output(
        {"name": "Chicha morada", "portion": None, "energy": 60, "water": None}
    )

    assert record.water == 0
    assert record.protein == 0
    assert record.fats == 0


def test_missing_nutrient_group_is_rejected() -> None:
    with pytest.raises(EngineError):
        normalize_output({"alimento": "Ceviche", "porcion": "100g", "nutrientes": None})


def test_unknown_shape_is_rejected() -> None:
    with pytest.raises(EngineError):
        normalize_output({"dish": "Ceviche", "kcal": 120})


def test_blank_name_is_rejected() -> None:
    with pytest.raises(EngineError):
        normalize_output({"name": "   ", "energy": 10})


def test_negative_nutrient_is_rejected() -> None:
    with pytest.raises(EngineError):
        normalize_output({"name": "Ceviche", "energy": -5})


def test_non_numeric_nutrient_is_rejected() -> None:
    with pytest.raises(EngineError):
        normalize_output({"name": "Ceviche", "energy": "lots"})


def test_default_portion_fills_missing_portion() -> None:
    record = normalize_output({"name": "Ají de gallina", "portion": ""}, "100g")

    assert record.portion == "100g"


def test_default_portion_does_not_override_given_portion() -> None:
    record = normalize_output({"name": "Ají de gallina", "portion": "250g"}, "100g")

    assert record.portion == "250g"


def test_boolean_nutrient_is_rejected() -> None:
    with pytest.raises(EngineError):
        normalize_output({"name": "Ceviche", "energy": True})


def test_legacy_boolean_nutrient_is_rejected() -> None:
    raw = {
        "alimento": "Ceviche",
        "porcion": "100g",
        "nutrientes": {"calorias": True, "proteinas": 20},
    }

    with pytest.raises(EngineError):
        normalize_output(raw)


def test_unified_strings_are_kept_verbatim() -> None:
    raw = {
        "name": " Tacu tacu ",
        "portion": " 150g ",
        "energy": 190,
        "protein": 7,
        "fats": 6,
        "water": 90,
    }

    record = normalize_output(raw, "100g")

    assert record.model_dump() == raw
