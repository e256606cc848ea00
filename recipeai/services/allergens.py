"""Local allergen matching against a recipe's declared allergens."""

from typing import List

from recipeai.models.notification import Notifier
from recipeai.models.recipe import RecipeData


def match_allergens(recipe: RecipeData, user_allergens: List[str]) -> List[str]:
    """Recipe allergens that contain any user allergen (case-insensitive)."""
    wanted = [a.lower() for a in user_allergens if a]
    return [
        allergen
        for allergen in (recipe.allergens or [])
        if any(user in allergen.lower() for user in wanted)
    ]


def report_allergens(recipe: RecipeData, user_allergens: List[str], notifier: Notifier) -> List[str]:
    """Match allergens and tell the user whether the recipe is safe for them."""
    matches = match_allergens(recipe, user_allergens)
    if matches:
        notifier.warning("This recipe contains ingredients you may be allergic to.")
    else:
        notifier.success("No allergens found in this recipe that match your preferences.")
    return matches
