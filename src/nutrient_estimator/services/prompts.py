"""Prompt builders for each estimation strategy.

Every prompt spells out the full output contract (field names and units) next
to the task instructions, so the reasoning engine never sees a partial request.
"""

_DISH_FIELDS = """Return a JSON object with these fields:
- name: the dish name.
- portion: "100g".
- energy: calories in kcal per 100g.
- protein: protein in grams per 100g.
- fats: total fats in grams per 100g.
- water: water content in grams per 100g."""

_LABEL_FIELDS = """Return a JSON object with these fields:
- name: the name of the food item.
- portion: the serving size the values refer to, as a string
  (e.g. "100g", "30g", "250ml").
- energy: calories in kcal per portion.
- protein: protein in grams per portion.
- fats: total fats in grams per portion.
- water: water content in grams per portion. If water is not listed, estimate
  it as the portion mass minus the other macronutrients, or set it to 0 if it
  cannot be estimated."""

_DEGRADE = (
    "If you are not sure about a value, give a reasonable estimate. "
    "If a nutrient cannot be determined at all, use 0. Never refuse to answer."
)

_LABEL_COLUMNS = (
    "Prefer the values of the 'per 100g' or 'per 100ml' column when the label "
    "has one, and set portion accordingly. Otherwise use the serving size exactly "
    "as written on the label."
)


def build_dish_photo_prompt(cuisine: str) -> str:
    """Prompt for estimating a dish from a photograph."""
    return (
        "This is a photo of a plate of food. "
        f"It is most likely a dish from {cuisine} cuisine.\n"
        "Identify the dish and estimate its approximate nutritional values "
        "per 100g.\n\n"
        f"{_DISH_FIELDS}\n\n"
        f"{_DEGRADE} "
        f"If the image is ambiguous, prioritize {cuisine} dishes."
    )


def build_dish_text_prompt(dish_name: str, cuisine: str) -> str:
    """Prompt for estimating a dish from its name."""
    return (
        f"The following is the name of a dish: {dish_name}. "
        f"It is most likely a dish from {cuisine} cuisine.\n"
        "Confirm the dish name and estimate its approximate nutritional values "
        "per 100g.\n\n"
        f"{_DISH_FIELDS}\n\n"
        f"{_DEGRADE} "
        f"If the name is ambiguous, prioritize {cuisine} dishes. "
        f'The name field must be exactly "{dish_name}" unless that is clearly a '
        "misspelling or the wrong name for the dish."
    )


def build_label_photo_prompt() -> str:
    """Prompt for reading a nutrition label directly from a photograph."""
    return (
        "You are an expert at reading nutrition labels. "
        "Analyze the attached image of a packaged-food nutrition label.\n\n"
        f"{_LABEL_FIELDS}\n\n"
        f"{_LABEL_COLUMNS} "
        f"{_DEGRADE}"
    )


def build_label_text_prompt(label_text: str) -> str:
    """Prompt for interpreting OCR text of a nutrition label."""
    return (
        "You are an expert at reading nutrition labels. "
        "The text below was transcribed by OCR from a photo of a packaged-food "
        "nutrition label. Table columns may be flattened or out of order.\n\n"
        f"Label text:\n---\n{label_text}\n---\n\n"
        f"{_LABEL_FIELDS}\n\n"
        f"{_LABEL_COLUMNS} "
        f"{_DEGRADE}"
    )
