"""Recipe tasks backed by Gemini, each with a fallback result."""

from __future__ import annotations

import logging
from typing import List, Optional

from recipeai.models.notification import Notifier
from recipeai.models.recipe import RecipeData, placeholder_recipe
from recipeai.services import prompt_service
from recipeai.services.gemini_service import GeminiService
from recipeai.utils.exceptions import ExtractionError, GeminiError
from recipeai.utils.response_extractor import extract_recipe, extract_string_list

logger = logging.getLogger(__name__)

CHAT_NO_ANSWER = "I'm sorry, I couldn't find an answer to that question."
CHAT_APOLOGY = "I'm having trouble answering that right now. Please try again."


class RecipeService:
    """
    Task methods used by the API routes.

    Every method returns a usable value. Gemini and extraction failures are
    logged, turned into a fallback and, where the user should know, recorded
    on the notifier.
    """

    def __init__(self, gemini_service: Optional[GeminiService] = None, notifier: Optional[Notifier] = None):
        self.gemini_service = gemini_service or GeminiService()
        self.notifier = notifier or Notifier()

    async def identify_recipe_from_image(self, image_data: bytes, mime_type: str) -> Optional[RecipeData]:
        """Name the dish in a photo, then fetch its recipe. None if the dish can't be named."""
        try:
            food_name = await self.gemini_service.generate_text_from_image(
                prompt_service.create_identification_prompt(), image_data, mime_type
            )
        except GeminiError as e:
            logger.error(f"Error identifying recipe: {str(e)}", exc_info=True)
            self.notifier.error("Failed to identify recipe from image")
            return None

        if not food_name:
            self.notifier.error("Unable to identify food in the image")
            return None

        logger.info("Identified dish from image: %s", food_name[:200])
        recipe = await self.get_recipe_details(food_name)
        self.notifier.success(f"Identified recipe: {recipe.name}")
        return recipe

    async def get_recipe_details(self, food_name: str) -> RecipeData:
        """Full recipe for a dish name; placeholder recipe on failure."""
        try:
            response = await self.gemini_service.generate_text(prompt_service.create_recipe_prompt(food_name))
            if not response:
                raise GeminiError("No response from Gemini")
            return extract_recipe(response)
        except (GeminiError, ExtractionError) as e:
            logger.error(f"Error getting recipe details: {str(e)}", exc_info=True)
            self.notifier.error("Failed to get recipe details")
            return placeholder_recipe(food_name)

    async def generate_shopping_list(self, ingredients: List[str]) -> List[str]:
        """Organized shopping list; the ingredients themselves on failure."""
        try:
            response = await self.gemini_service.generate_text(
                prompt_service.create_shopping_list_prompt(ingredients)
            )
            if not response:
                raise GeminiError("No response from Gemini")
            return extract_string_list(response, wrapper_key="list")
        except (GeminiError, ExtractionError) as e:
            logger.error(f"Error generating shopping list: {str(e)}", exc_info=True)
            self.notifier.error("Failed to generate shopping list")
            return list(ingredients)

    async def check_for_allergens(self, ingredients: List[str], user_allergens: List[str]) -> List[str]:
        """Ingredients flagged for the user's allergens; empty on failure."""
        if not user_allergens:
            return []

        try:
            response = await self.gemini_service.generate_text(
                prompt_service.create_allergen_prompt(ingredients, user_allergens)
            )
            if not response:
                return []
            return extract_string_list(response, wrapper_key="allergens")
        except (GeminiError, ExtractionError) as e:
            logger.warning(f"Error checking allergens: {str(e)}")
            return []

    async def get_chatbot_response(self, question: str, context: str) -> str:
        """Assistant answer; a fixed apology when Gemini fails."""
        try:
            response = await self.gemini_service.generate_text(prompt_service.create_chat_prompt(question, context))
            return response or CHAT_NO_ANSWER
        except GeminiError as e:
            logger.error(f"Error getting chatbot response: {str(e)}", exc_info=True)
            return CHAT_APOLOGY

    async def get_voice_instructions(self, steps: List[str]) -> List[str]:
        """TTS-friendly rewrite of the steps; the steps themselves on failure."""
        try:
            response = await self.gemini_service.generate_text(
                prompt_service.create_voice_instructions_prompt(steps)
            )
            if not response:
                return list(steps)
            return extract_string_list(response, wrapper_key="instructions")
        except (GeminiError, ExtractionError) as e:
            logger.warning(f"Error generating voice instructions: {str(e)}")
            return list(steps)

    async def generate_image(self, description: str) -> Optional[str]:
        """Food photo as a data URI, or None."""
        try:
            return await self.gemini_service.generate_image(prompt_service.create_image_prompt(description))
        except GeminiError as e:
            logger.error(f"Error generating image: {str(e)}", exc_info=True)
            return None
