"""Food image generation endpoint."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipeai.api.dependencies import get_recipe_service
from recipeai.middleware.rate_limit import rate_limit_dependency
from recipeai.models.notification import Notification
from recipeai.services.recipe_service import RecipeService
from recipeai.utils.exceptions import ValidationError
from recipeai.utils.validators import validate_text

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/images", tags=["images"])


class ImageRequest(BaseModel):
    prompt: str


class ImageResponse(BaseModel):
    image: Optional[str] = None
    notifications: List[Notification] = Field(default_factory=list)


@router.post("/generate", response_model=ImageResponse)
async def generate_image(
    body: ImageRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> ImageResponse:
    """Generate a food photo. `image` is a data URI, or null if none was produced."""
    try:
        prompt = validate_text(body.prompt, "Prompt")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid prompt", "detail": str(e)},
        ) from e

    image = await recipe_service.generate_image(prompt)
    return ImageResponse(image=image, notifications=recipe_service.notifier.drain())
