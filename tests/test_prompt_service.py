"""Tests for prompt construction."""

from recipeai.models.recipe import RecipeData
from recipeai.services import prompt_service


def test_recipe_prompt_names_dish_and_schema():
    prompt = prompt_service.create_recipe_prompt("Pad Thai")
    assert 'Create a detailed recipe for "Pad Thai".' in prompt
    for key in ("nutritionalInfo", "cookingTime", "servings", "tips", "allergens"):
        assert f'"{key}"' in prompt


def test_shopping_list_prompt_lists_each_ingredient_on_own_line():
    prompt = prompt_service.create_shopping_list_prompt(["200g chicken breast", "1 onion"])
    assert "200g chicken breast\n1 onion" in prompt
    assert "JSON array of strings" in prompt


def test_allergen_prompt_joins_allergens():
    prompt = prompt_service.create_allergen_prompt(["bread"], ["gluten", "peanuts"])
    assert "these allergens: gluten, peanuts." in prompt
    assert "Ingredients:\nbread" in prompt


def test_empty_lists_produce_empty_sections():
    prompt = prompt_service.create_voice_instructions_prompt([])
    assert "hands-free cooking mode:\n\n\nReturn as a JSON array" in prompt


def test_chat_prompt_includes_question_and_context():
    prompt = prompt_service.create_chat_prompt("Can I use tofu?", "Recipe: Curry")
    assert "The user's current recipe context is: Recipe: Curry" in prompt
    assert "User question: Can I use tofu?" in prompt


def test_prompts_are_deterministic():
    assert prompt_service.create_recipe_prompt("Soup") == prompt_service.create_recipe_prompt("Soup")


def test_image_prompt():
    prompt = prompt_service.create_image_prompt("lemon tart")
    assert prompt.startswith("Generate a beautiful, professional photo of: lemon tart.")


def test_recipe_context(recipe_dict):
    context = prompt_service.build_recipe_context(RecipeData.model_validate(recipe_dict))
    assert context.splitlines() == [
        "Recipe: Chicken Curry",
        "Description: A fragrant, mildly spiced curry.",
        "Ingredients: 500g chicken thighs, 1 onion, 2 tbsp curry paste, 400ml coconut milk",
        "Cooking Time: 40 minutes",
        "Servings: 4",
    ]
