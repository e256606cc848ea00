"""Prompt generation for the Gemini tasks."""

from typing import List

from recipeai.models.recipe import RecipeData


def create_identification_prompt() -> str:
    """Create the vision prompt that names the dish in a photo."""
    return "Identify exactly what food/dish is shown in this image. Only return the name of the dish, nothing else."


def create_recipe_prompt(food_name: str) -> str:
    """Create a prompt asking for a full recipe of ``food_name`` as JSON."""
    return f"""
Create a detailed recipe for "{food_name}".
Return data in a valid JSON format with the following structure:
{{
  "name": "Recipe name",
  "description": "Short description",
  "ingredients": ["ingredient 1", "ingredient 2", ...],
  "steps": ["step 1", "step 2", ...],
  "nutritionalInfo": {{
    "calories": "amount",
    "protein": "amount",
    "carbs": "amount",
    "fat": "amount",
    "fiber": "amount"
  }},
  "cookingTime": "total time",
  "servings": "number of servings",
  "tips": ["tip 1", "tip 2", ...],
  "allergens": ["allergen 1", "allergen 2", ...]
}}

Make sure each value is specific and detailed. For ingredients, include quantities.
For steps, be thorough and specific. Include common allergens in the allergens array.
""".strip()


def create_shopping_list_prompt(ingredients: List[str]) -> str:
    """Create a prompt turning recipe ingredients into a shopping list."""
    ingredients_text = "\n".join(ingredients)
    return (
        "Convert these recipe ingredients into a smart, organized shopping list.\n"
        "Group similar items together, and return only the shopping list items:\n"
        f"{ingredients_text}\n\n"
        "Return as a JSON array of strings, with each string being a shopping list item."
    )


def create_allergen_prompt(ingredients: List[str], user_allergens: List[str]) -> str:
    """Create a prompt flagging ingredients that contain the user's allergens."""
    ingredients_text = "\n".join(ingredients)
    return (
        f"Check if any of these ingredients contain or may contain these allergens: {', '.join(user_allergens)}.\n"
        "Ingredients:\n"
        f"{ingredients_text}\n\n"
        "Return only the ingredients that contain allergens along with which allergen they contain,\n"
        "formatted as a JSON array of strings."
    )


def create_chat_prompt(question: str, context: str) -> str:
    """Create the cooking assistant prompt for a user question."""
    return (
        "You are a helpful cooking assistant. Answer the following cooking question "
        "with accurate and helpful information.\n"
        f"The user's current recipe context is: {context}\n\n"
        f"User question: {question}\n\n"
        "Provide a detailed but concise answer focused on the cooking question."
    )


def create_voice_instructions_prompt(steps: List[str]) -> str:
    """Create a prompt rewriting steps for hands-free text-to-speech."""
    steps_text = "\n".join(steps)
    return (
        "Convert these cooking steps into clear, conversational voice instructions\n"
        "that would be easy to follow in a hands-free cooking mode:\n"
        f"{steps_text}\n\n"
        "Return as a JSON array of strings, with each string being a voice instruction.\n"
        "Keep them concise but thorough, and make them suitable for text-to-speech."
    )


def create_image_prompt(description: str) -> str:
    """Create a food photography image generation prompt."""
    return (
        f"Generate a beautiful, professional photo of: {description}. "
        "Make it look like a high-quality food photography image."
    )


def build_recipe_context(recipe: RecipeData) -> str:
    """Summarize a recipe as chat context."""
    return (
        f"Recipe: {recipe.name}\n"
        f"Description: {recipe.description}\n"
        f"Ingredients: {', '.join(recipe.ingredients)}\n"
        f"Cooking Time: {recipe.cookingTime}\n"
        f"Servings: {recipe.servings}"
    )
