"""Recipe identification, lookup, nutrition and allergen endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from recipeai.api.dependencies import get_recipe_service
from recipeai.config import settings
from recipeai.middleware.rate_limit import rate_limit_dependency
from recipeai.models.notification import Notification
from recipeai.models.recipe import NutritionalInfo, RecipeData
from recipeai.services.allergens import report_allergens
from recipeai.services.image_service import ALLOWED_IMAGE_MIME, ImageService
from recipeai.services.nutrition import FOOTNOTE, NutrientFact, nutrition_facts
from recipeai.services.recipe_service import RecipeService
from recipeai.utils.exceptions import ImageProcessingError, ValidationError
from recipeai.utils.validators import validate_text

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recipes", tags=["recipes"])


class Base64ImageRequest(BaseModel):
    """Camera capture or file read by the browser as base64 / data URI."""

    image: str


class RecipeDetailsRequest(BaseModel):
    foodName: str


class RecipeResponse(BaseModel):
    recipe: Optional[RecipeData] = None
    notifications: List[Notification] = Field(default_factory=list)


class NutritionRequest(BaseModel):
    nutritionalInfo: NutritionalInfo


class NutritionResponse(BaseModel):
    facts: List[NutrientFact]
    footnote: str


class AllergenRequest(BaseModel):
    recipe: RecipeData
    userAllergens: Optional[List[str]] = None


class AllergenResponse(BaseModel):
    matches: List[str]
    flaggedIngredients: List[str]
    notifications: List[Notification] = Field(default_factory=list)


async def _identify(image_data: bytes, recipe_service: RecipeService) -> RecipeResponse:
    if len(image_data) > settings.max_request_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={"error": "File too large", "detail": f"Max size is {settings.max_request_size} bytes"},
        )

    try:
        validated, mime_type = ImageService.validate_image(image_data)
    except ImageProcessingError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid image", "detail": str(e)},
        ) from e

    optimized, optimized_mime = ImageService.optimize_for_vision(validated, mime_type)
    if len(optimized) != len(validated):
        logger.info(
            "Image optimized for vision",
            extra={"orig_bytes": len(validated), "opt_bytes": len(optimized), "mime_out": optimized_mime},
        )

    recipe = await recipe_service.identify_recipe_from_image(optimized, optimized_mime)
    return RecipeResponse(recipe=recipe, notifications=recipe_service.notifier.drain())


@router.post("/identify", response_model=RecipeResponse)
async def identify_from_upload(
    file: UploadFile = File(...),
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """
    Identify the dish in an uploaded photo and return its recipe.

    - **file**: Image file (JPEG, PNG, or WebP, max 10MB)
    - `recipe` is null when the dish could not be identified
    """
    logger.info(
        "Route /recipes/identify called",
        extra={"params": {"filename": file.filename, "content_type": file.content_type}},
    )

    if file.content_type and file.content_type.lower() not in ALLOWED_IMAGE_MIME:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid image type",
                "detail": f"Unsupported content-type: {file.content_type}. Allowed: {sorted(ALLOWED_IMAGE_MIME)}",
            },
        )

    image_data = await file.read()
    return await _identify(image_data, recipe_service)


@router.post("/identify/base64", response_model=RecipeResponse)
async def identify_from_base64(
    body: Base64ImageRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Identify the dish in a base64 image (raw or `data:image/...;base64,` URI)."""
    try:
        image_data = ImageService.decode_base64_image(body.image)
    except ImageProcessingError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid image", "detail": str(e)},
        ) from e

    return await _identify(image_data, recipe_service)


@router.post("/details", response_model=RecipeResponse)
async def recipe_details(
    body: RecipeDetailsRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Recipe for a dish name. Falls back to a placeholder recipe when Gemini fails."""
    try:
        food_name = validate_text(body.foodName, "Food name")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid food name", "detail": str(e)},
        ) from e

    logger.info("Route /recipes/details called", extra={"params": {"foodName": food_name[:200]}})
    recipe = await recipe_service.get_recipe_details(food_name)
    return RecipeResponse(recipe=recipe, notifications=recipe_service.notifier.drain())


@router.post("/nutrition", response_model=NutritionResponse)
async def recipe_nutrition(body: NutritionRequest) -> NutritionResponse:
    """Parsed nutrient values with percent of daily value."""
    return NutritionResponse(facts=nutrition_facts(body.nutritionalInfo), footnote=FOOTNOTE)


@router.post("/allergens", response_model=AllergenResponse)
async def recipe_allergens(
    body: AllergenRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> AllergenResponse:
    """
    Check a recipe against the user's allergens.

    - `matches`: recipe allergens matching the user's list
    - `flaggedIngredients`: ingredients Gemini flagged as containing them
    """
    user_allergens = (
        body.userAllergens if body.userAllergens is not None else settings.default_user_allergens_list
    )
    user_allergens = [a.strip() for a in user_allergens if a and a.strip()]

    matches = report_allergens(body.recipe, user_allergens, recipe_service.notifier)
    flagged = await recipe_service.check_for_allergens(body.recipe.ingredients, user_allergens)

    return AllergenResponse(
        matches=matches,
        flaggedIngredients=flagged,
        notifications=recipe_service.notifier.drain(),
    )
