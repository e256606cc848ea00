"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("RATE_LIMIT_PER_HOUR", "10000")

from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from recipeai.api.dependencies import get_gemini_service
from recipeai.main import app
from recipeai.models.notification import Notifier
from recipeai.services.gemini_service import GeminiService
from recipeai.services.recipe_service import RecipeService


def text_reply(text: str) -> SimpleNamespace:
    """A generate_content response carrying one text part."""
    part = SimpleNamespace(text=text, inline_data=None)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeModels:
    """Stands in for `genai.Client().models`, replaying queued replies in order."""

    def __init__(self) -> None:
        self.replies: List[Any] = []
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.replies:
            raise AssertionError("Unexpected Gemini call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            return text_reply(reply)
        return reply


class FakeGenaiClient:
    def __init__(self) -> None:
        self.models = FakeModels()

    def queue(self, *replies: Any) -> None:
        """Queue replies: str -> text reply, Exception -> raised, anything else returned as-is."""
        self.models.replies.extend(replies)

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return self.models.calls


@pytest.fixture
def fake_genai() -> FakeGenaiClient:
    return FakeGenaiClient()


@pytest.fixture
def gemini_service(fake_genai: FakeGenaiClient) -> GeminiService:
    return GeminiService(client=fake_genai)


@pytest.fixture
def recipe_service(gemini_service: GeminiService) -> RecipeService:
    return RecipeService(gemini_service=gemini_service, notifier=Notifier())


@pytest.fixture
def client(gemini_service: GeminiService):
    """Test client whose routes talk to the fake Gemini client."""
    app.dependency_overrides[get_gemini_service] = lambda: gemini_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def recipe_dict() -> Dict[str, Any]:
    return {
        "name": "Chicken Curry",
        "description": "A fragrant, mildly spiced curry.",
        "ingredients": ["500g chicken thighs", "1 onion", "2 tbsp curry paste", "400ml coconut milk"],
        "steps": [
            "Brown the chicken in a hot pan.",
            "Soften the onion, then stir in the curry paste.",
            "Add coconut milk and simmer for 20 minutes.",
        ],
        "nutritionalInfo": {
            "calories": "~520 kcal",
            "protein": "38g",
            "carbs": "12g",
            "fat": "35g",
            "fiber": "3g",
            "sodium": "780mg",
        },
        "cookingTime": "40 minutes",
        "servings": "4",
        "tips": ["Use thighs rather than breast so the meat stays juicy."],
        "allergens": ["Peanut oil", "Shellfish (fish sauce)"],
    }
