"""Shared API dependencies."""

from functools import lru_cache

from fastapi import Depends

from recipeai.models.notification import Notifier
from recipeai.services.gemini_service import GeminiService
from recipeai.services.recipe_service import RecipeService


@lru_cache(maxsize=1)
def get_gemini_service() -> GeminiService:
    """Get the process-wide Gemini service (client is created lazily)."""
    return GeminiService()


def get_recipe_service(gemini_service: GeminiService = Depends(get_gemini_service)) -> RecipeService:
    """Get a recipe service with a fresh notifier for this request."""
    return RecipeService(gemini_service=gemini_service, notifier=Notifier())
