"""Cooking mode endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipeai.api.dependencies import get_recipe_service
from recipeai.middleware.rate_limit import rate_limit_dependency
from recipeai.models.notification import Notification
from recipeai.services.cooking_mode import CookingSession, CookingState, VoiceCommand
from recipeai.services.recipe_service import RecipeService
from recipeai.utils.exceptions import ValidationError
from recipeai.utils.validators import validate_text_list

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cooking", tags=["cooking"])


class VoiceInstructionsRequest(BaseModel):
    steps: List[str]


class VoiceInstructionsResponse(BaseModel):
    instructions: List[str]


class CommandRequest(BaseModel):
    """A transcribed voice command for the session at ``currentStep``."""

    transcript: str
    currentStep: int = Field(0, ge=0)
    steps: List[str]
    voiceInstructions: Optional[List[str]] = None


class CommandResponse(BaseModel):
    command: VoiceCommand
    state: CookingState
    notifications: List[Notification] = Field(default_factory=list)


def _validated_steps(steps: List[str]) -> List[str]:
    try:
        return validate_text_list(steps, "Steps")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid steps", "detail": str(e)},
        ) from e


@router.post("/voice-instructions", response_model=VoiceInstructionsResponse)
async def voice_instructions(
    body: VoiceInstructionsRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> VoiceInstructionsResponse:
    """Rewrite recipe steps for text-to-speech. Falls back to the steps unchanged."""
    steps = _validated_steps(body.steps)
    logger.info("Route /cooking/voice-instructions called", extra={"params": {"steps_count": len(steps)}})
    return VoiceInstructionsResponse(instructions=await recipe_service.get_voice_instructions(steps))


@router.post("/command", response_model=CommandResponse)
async def voice_command(body: CommandRequest) -> CommandResponse:
    """
    Apply a voice command ("next", "previous", "repeat", "exit") and return
    the new session state. Speech output stays on the client.
    """
    steps = _validated_steps(body.steps)
    session = CookingSession(steps, body.voiceInstructions, current_step=body.currentStep)
    command = session.handle_command(body.transcript)
    return CommandResponse(command=command, state=session.state(), notifications=session.notifier.drain())
