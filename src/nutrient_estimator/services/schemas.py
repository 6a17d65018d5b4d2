"""Structured output schema sent to the reasoning engine."""

SCHEMA_NAME = "nutrition_record"

_NUTRIENT = {"type": "number", "minimum": 0}

NUTRITION_RECORD_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "portion": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "energy": _NUTRIENT,
        "protein": _NUTRIENT,
        "fats": _NUTRIENT,
        "water": _NUTRIENT,
    },
    "required": ["name", "portion", "energy", "protein", "fats", "water"],
    "additionalProperties": False,
}
