"""Cooking assistant conversation."""

import logging
from typing import List, Optional

from recipeai.models.chat import ChatMessage
from recipeai.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


def welcome_message(recipe_name: str) -> ChatMessage:
    return ChatMessage(
        id="welcome",
        sender="bot",
        content=(
            f"Hi there! I'm your cooking assistant for {recipe_name}. You can ask me any questions "
            "about the recipe, cooking techniques, substitutions, or other culinary advice. "
            "How can I help you today?"
        ),
    )


class ChatSession:
    """Transcript of one conversation about the active recipe."""

    def __init__(self, recipe_service: RecipeService, context: str, recipe_name: Optional[str] = None):
        self.recipe_service = recipe_service
        self.context = context
        self.messages: List[ChatMessage] = [welcome_message(recipe_name)] if recipe_name else []

    async def ask(self, question: str) -> Optional[ChatMessage]:
        """Append the question and the assistant's answer. Blank questions are ignored."""
        if not question.strip():
            return None

        self.messages.append(ChatMessage(content=question, sender="user"))
        answer = await self.recipe_service.get_chatbot_response(question, self.context)
        reply = ChatMessage(content=answer, sender="bot")
        self.messages.append(reply)
        return reply
