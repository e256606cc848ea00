"""Recipe Pydantic models."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class NutritionalInfo(BaseModel):
    """Nutrient amounts as free text (units included, e.g. '15g')."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    calories: str = Field(..., description="Calories per serving (e.g. '~300 kcal')")
    protein: str = Field(..., description="Protein amount (e.g. '15g')")
    carbs: str = Field(..., description="Carbohydrates amount")
    fat: str = Field(..., description="Fat amount")
    fiber: str = Field(..., description="Fiber amount")


class RecipeData(BaseModel):
    """Recipe returned for an identified dish or a dish name lookup."""

    name: str = Field(..., description="Recipe name")
    description: str = Field(..., description="Short description")
    ingredients: List[str] = Field(..., description="Ingredient lines with quantities")
    steps: List[str] = Field(..., description="Ordered instructions")
    nutritionalInfo: NutritionalInfo = Field(..., description="Nutrition per serving")
    cookingTime: str = Field(..., description="Total time as free text")
    servings: str = Field(..., description="Number of servings as free text")
    tips: List[str] = Field(default_factory=list, description="Cooking tips")
    allergens: Optional[List[str]] = Field(None, description="Common allergens")

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "name": "Margherita Pizza",
                "description": "Classic Neapolitan pizza with tomato, mozzarella and basil.",
                "ingredients": ["250g pizza dough", "100g tomato sauce", "125g fresh mozzarella"],
                "steps": ["Preheat the oven to 250°C.", "Stretch the dough.", "Top and bake for 8 minutes."],
                "nutritionalInfo": {
                    "calories": "~850 kcal",
                    "protein": "35g",
                    "carbs": "110g",
                    "fat": "28g",
                    "fiber": "5g",
                },
                "cookingTime": "25 minutes",
                "servings": "2",
                "tips": ["Use a pizza stone for a crispier crust."],
                "allergens": ["gluten", "dairy"],
            }
        }
    )


def placeholder_recipe(food_name: str) -> RecipeData:
    """Complete stand-in recipe used when the model reply is unusable."""
    return RecipeData(
        name=food_name or "Delicious Recipe",
        description="A wonderful dish full of flavor and nutrition.",
        ingredients=[
            "200g main ingredient",
            "1 tbsp oil",
            "2 cloves garlic, minced",
            "Salt and pepper to taste",
        ],
        steps=[
            "Prepare all ingredients by washing and chopping them as needed.",
            "Heat oil in a pan over medium heat.",
            "Add ingredients and cook until done.",
            "Serve hot and enjoy!",
        ],
        nutritionalInfo=NutritionalInfo(
            calories="~300 kcal",
            protein="15g",
            carbs="30g",
            fat="12g",
            fiber="5g",
        ),
        cookingTime="30 minutes",
        servings="4",
        tips=[
            "For best results, use fresh ingredients.",
            "This recipe can be stored in the refrigerator for up to 3 days.",
        ],
        allergens=[],
    )
