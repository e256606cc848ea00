"""Pydantic models."""

from recipeai.models.chat import ChatMessage
from recipeai.models.notification import Notification, Notifier
from recipeai.models.recipe import (
    NutritionalInfo,
    RecipeData,
    placeholder_recipe,
)
from recipeai.models.shopping import ShoppingItem, ShoppingList

__all__ = [
    "ChatMessage",
    "Notification",
    "Notifier",
    "NutritionalInfo",
    "RecipeData",
    "ShoppingItem",
    "ShoppingList",
    "placeholder_recipe",
]
