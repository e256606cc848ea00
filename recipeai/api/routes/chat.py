"""Cooking assistant chat endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from recipeai.api.dependencies import get_recipe_service
from recipeai.middleware.rate_limit import rate_limit_dependency
from recipeai.models.chat import ChatMessage
from recipeai.models.notification import Notification
from recipeai.models.recipe import RecipeData
from recipeai.services.chat_service import ChatSession, welcome_message
from recipeai.services.prompt_service import build_recipe_context
from recipeai.services.recipe_service import RecipeService
from recipeai.utils.exceptions import ValidationError
from recipeai.utils.validators import validate_text

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"])


class ChatRequest(BaseModel):
    """
    A question about the active recipe.

    Send either the recipe (its context is built server-side) or a
    ready-made context string.
    """

    question: str
    recipe: Optional[RecipeData] = None
    context: Optional[str] = None


class ChatResponse(BaseModel):
    message: ChatMessage
    notifications: List[Notification] = Field(default_factory=list)


class WelcomeResponse(BaseModel):
    message: ChatMessage


@router.post("", response_model=ChatResponse)
async def chat(
    chat_request: ChatRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> ChatResponse:
    """Answer a cooking question. A fixed apology is returned when Gemini fails."""
    try:
        question = validate_text(chat_request.question, "Question")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid request", "detail": str(e)},
        ) from e

    if chat_request.recipe is not None:
        context = build_recipe_context(chat_request.recipe)
    else:
        context = chat_request.context or ""

    logger.info(
        "Route /chat called",
        extra={"params": {"question": question[:200], "has_recipe": chat_request.recipe is not None}},
    )

    session = ChatSession(recipe_service, context)
    reply = await session.ask(question)
    return ChatResponse(message=reply, notifications=recipe_service.notifier.drain())


@router.get("/welcome", response_model=WelcomeResponse)
async def chat_welcome(recipe_name: str = Query(..., min_length=1)) -> WelcomeResponse:
    """Greeting shown when the chat panel opens for a recipe."""
    return WelcomeResponse(message=welcome_message(recipe_name))
