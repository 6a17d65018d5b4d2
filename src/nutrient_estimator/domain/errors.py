"""Errors raised by the estimation pipeline."""


class NutrientEstimatorError(Exception):
    """Base class for pipeline errors."""


class InputValidationError(NutrientEstimatorError):
    """Input rejected before any external call was made."""


class ExtractionError(NutrientEstimatorError):
    """OCR pre-pass could not read any text from the image."""


class EngineError(NutrientEstimatorError):
    """Reasoning engine failed or returned an unusable answer."""
