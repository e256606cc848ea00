"""Input validation utilities."""

from typing import List

from recipeai.utils.exceptions import ValidationError

MAX_ITEMS = 100
MAX_ITEM_LENGTH = 500
MAX_TEXT_LENGTH = 2000


def validate_text_list(items: list, label: str = "Ingredients") -> List[str]:
    """
    Validate a list of recipe lines (ingredients, steps, allergens).

    Args:
        items: List of strings
        label: Name used in error messages

    Returns:
        Stripped, non-empty lines

    Raises:
        ValidationError: If the list is invalid
    """
    if not isinstance(items, list):
        raise ValidationError(f"{label} must be a list")

    if not items:
        raise ValidationError(f"{label} list cannot be empty")

    if len(items) > MAX_ITEMS:
        raise ValidationError(f"{label} list cannot exceed {MAX_ITEMS} items")

    validated = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(f"All {label.lower()} must be strings")
        item = item.strip()
        if not item:
            continue
        if len(item) > MAX_ITEM_LENGTH:
            raise ValidationError(f"{label} text cannot exceed {MAX_ITEM_LENGTH} characters")
        validated.append(item)

    if not validated:
        raise ValidationError(f"At least one valid {label.lower()} entry is required")

    return validated


def validate_text(text: str, label: str = "Text") -> str:
    """
    Validate a single free-text field (question, dish name, image prompt).

    Raises:
        ValidationError: If the text is empty or too long
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(f"{label} must be a non-empty string")

    text = text.strip()
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(f"{label} cannot exceed {MAX_TEXT_LENGTH} characters")
    return text
