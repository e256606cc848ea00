"""Shopping list endpoint."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipeai.api.dependencies import get_recipe_service
from recipeai.middleware.rate_limit import rate_limit_dependency
from recipeai.models.notification import Notification
from recipeai.models.shopping import ShoppingItem, ShoppingList
from recipeai.services.recipe_service import RecipeService
from recipeai.utils.exceptions import ValidationError
from recipeai.utils.validators import validate_text_list

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/shopping-list", tags=["shopping-list"])


class ShoppingListRequest(BaseModel):
    ingredients: List[str]


class ShoppingListResponse(BaseModel):
    items: List[ShoppingItem]
    text: str
    notifications: List[Notification] = Field(default_factory=list)


@router.post("", response_model=ShoppingListResponse)
async def create_shopping_list(
    body: ShoppingListRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> ShoppingListResponse:
    """
    Organize recipe ingredients into a shopping list.

    Falls back to the ingredients themselves when Gemini fails.
    """
    try:
        ingredients = validate_text_list(body.ingredients, "Ingredients")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid ingredients", "detail": str(e)},
        ) from e

    logger.info("Route /shopping-list called", extra={"params": {"ingredients_count": len(ingredients)}})

    shopping_list = ShoppingList.from_items(await recipe_service.generate_shopping_list(ingredients))
    return ShoppingListResponse(
        items=shopping_list.items,
        text=shopping_list.to_text(),
        notifications=recipe_service.notifier.drain(),
    )
