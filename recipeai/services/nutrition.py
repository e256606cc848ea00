"""Nutrition facts derived from a recipe's free-text nutrient amounts."""

import re
from typing import Dict, List, Optional

from pydantic import BaseModel

from recipeai.models.recipe import NutritionalInfo

# Rough daily values for a 2,000 calorie diet
DAILY_VALUES: Dict[str, int] = {
    "calories": 2000,
    "protein": 50,
    "carbs": 275,
    "fat": 78,
    "fiber": 28,
}

FOOTNOTE = (
    "* Percent Daily Values are based on a 2,000 calorie diet. Your daily values may be "
    "higher or lower depending on your calorie needs."
)

_NUMBER_RE = re.compile(r"(\d+)")


class NutrientFact(BaseModel):
    """One nutrient with its parsed value and share of the daily value."""

    name: str
    amount: str
    value: int
    percentDailyValue: Optional[int] = None


def parse_nutrition_value(amount: str) -> int:
    """First integer found in ``amount`` ('~300 kcal' -> 300), 0 if none."""
    match = _NUMBER_RE.search(amount or "")
    return int(match.group(1)) if match else 0


def daily_value_percentage(nutrient: str, value: int) -> Optional[int]:
    """Percent of daily value, capped at 100. None for nutrients without a daily value."""
    daily = DAILY_VALUES.get(nutrient.lower())
    if not daily:
        return None
    return min(round(value / daily * 100), 100)


def nutrition_facts(info: NutritionalInfo) -> List[NutrientFact]:
    """Facts for the core nutrients first, then any extra nutrients the model returned."""
    amounts = info.model_dump()
    ordered = list(DAILY_VALUES) + [k for k in amounts if k not in DAILY_VALUES]

    facts = []
    for name in ordered:
        amount = str(amounts.get(name, ""))
        value = parse_nutrition_value(amount)
        facts.append(
            NutrientFact(
                name=name,
                amount=amount,
                value=value,
                percentDailyValue=daily_value_percentage(name, value),
            )
        )
    return facts
