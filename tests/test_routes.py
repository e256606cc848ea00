"""Tests for the HTTP API."""

import base64
import json

from fastapi.testclient import TestClient

from recipeai.config import settings

JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_readiness_check(client: TestClient):
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["dependencies"]["gemini"]["configured"] is True


def test_metrics_and_headers(client: TestClient):
    response = client.get("/health/metrics")
    assert response.status_code == 200
    assert "total_requests" in response.json()
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Response-Time"].endswith("ms")


def test_identify_upload(client: TestClient, fake_genai, recipe_dict):
    fake_genai.queue("Chicken Curry", json.dumps(recipe_dict))

    response = client.post("/recipes/identify", files={"file": ("dish.jpg", JPEG, "image/jpeg")})

    assert response.status_code == 200
    data = response.json()
    assert data["recipe"]["name"] == "Chicken Curry"
    assert data["recipe"]["nutritionalInfo"]["sodium"] == "780mg"
    assert data["notifications"] == [{"level": "success", "message": "Identified recipe: Chicken Curry"}]


def test_identify_model_failure_returns_null_recipe(client: TestClient, fake_genai):
    fake_genai.queue(RuntimeError("upstream returned 500"))

    response = client.post("/recipes/identify", files={"file": ("dish.jpg", JPEG, "image/jpeg")})

    assert response.status_code == 200
    assert response.json() == {
        "recipe": None,
        "notifications": [{"level": "error", "message": "Failed to identify recipe from image"}],
    }


def test_identify_rejects_non_image(client: TestClient, fake_genai):
    response = client.post("/recipes/identify", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400
    assert fake_genai.calls == []


def test_identify_rejects_unknown_bytes(client: TestClient):
    response = client.post("/recipes/identify", files={"file": ("dish.jpg", b"not really a jpeg", "image/jpeg")})
    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Invalid image"


def test_identify_base64_data_uri(client: TestClient, fake_genai, recipe_dict):
    fake_genai.queue("Chicken Curry", json.dumps(recipe_dict))
    data_uri = "data:image/jpeg;base64," + base64.b64encode(JPEG).decode()

    response = client.post("/recipes/identify/base64", json={"image": data_uri})

    assert response.status_code == 200
    assert response.json()["recipe"]["name"] == "Chicken Curry"
    assert fake_genai.calls[0]["contents"][1].inline_data.data == JPEG


def test_identify_base64_too_large(client: TestClient, fake_genai, monkeypatch):
    monkeypatch.setattr(settings, "max_request_size", 16)
    data_uri = "data:image/jpeg;base64," + base64.b64encode(JPEG).decode()

    response = client.post("/recipes/identify/base64", json={"image": data_uri})

    assert response.status_code == 413
    assert response.json()["detail"]["error"] == "File too large"
    assert fake_genai.calls == []


def test_identify_upload_too_large(client: TestClient, fake_genai, monkeypatch):
    monkeypatch.setattr(settings, "max_request_size", 16)

    response = client.post("/recipes/identify", files={"file": ("dish.jpg", JPEG, "image/jpeg")})

    assert response.status_code == 413
    assert fake_genai.calls == []


def test_identify_base64_invalid(client: TestClient):
    response = client.post("/recipes/identify/base64", json={"image": "%%%not base64%%%"})
    assert response.status_code == 400


def test_details_placeholder_on_failure(client: TestClient, fake_genai):
    fake_genai.queue("no idea")

    response = client.post("/recipes/details", json={"foodName": "Moon Cheese"})

    assert response.status_code == 200
    data = response.json()
    assert data["recipe"]["name"] == "Moon Cheese"
    assert data["recipe"]["servings"] == "4"
    assert data["notifications"][0]["message"] == "Failed to get recipe details"


def test_details_requires_food_name(client: TestClient):
    assert client.post("/recipes/details", json={"foodName": "  "}).status_code == 400
    assert client.post("/recipes/details", json={}).status_code == 422


def test_nutrition(client: TestClient, recipe_dict):
    response = client.post("/recipes/nutrition", json={"nutritionalInfo": recipe_dict["nutritionalInfo"]})
    assert response.status_code == 200
    facts = {f["name"]: f for f in response.json()["facts"]}
    assert facts["protein"]["percentDailyValue"] == 76
    assert facts["sodium"]["percentDailyValue"] is None


def test_allergens_with_default_user_allergens(client: TestClient, fake_genai, recipe_dict):
    fake_genai.queue('["Peanut oil (peanuts)"]')

    response = client.post("/recipes/allergens", json={"recipe": recipe_dict})

    assert response.status_code == 200
    data = response.json()
    # "peanuts" is not a substring of "Peanut oil"
    assert data["matches"] == ["Shellfish (fish sauce)"]
    assert data["flaggedIngredients"] == ["Peanut oil (peanuts)"]
    assert data["notifications"][0]["level"] == "warning"
    assert "peanuts, gluten, shellfish" in fake_genai.calls[0]["contents"]


def test_allergens_empty_user_list_skips_model(client: TestClient, fake_genai, recipe_dict):
    response = client.post("/recipes/allergens", json={"recipe": recipe_dict, "userAllergens": []})
    assert response.json()["flaggedIngredients"] == []
    assert fake_genai.calls == []


def test_shopping_list(client: TestClient, fake_genai):
    fake_genai.queue('```json\n["Chicken breast 200g", "Onion x1"]\n```')

    response = client.post("/shopping-list", json={"ingredients": ["200g chicken breast", "1 onion"]})

    assert response.status_code == 200
    data = response.json()
    assert [i["item"] for i in data["items"]] == ["Chicken breast 200g", "Onion x1"]
    assert data["text"] == "☐ Chicken breast 200g\n☐ Onion x1"


def test_shopping_list_fallback(client: TestClient, fake_genai):
    fake_genai.queue("Just buy what the recipe says.")

    response = client.post("/shopping-list", json={"ingredients": ["200g chicken breast", "1 onion"]})

    data = response.json()
    assert [i["item"] for i in data["items"]] == ["200g chicken breast", "1 onion"]
    assert data["notifications"] == [{"level": "error", "message": "Failed to generate shopping list"}]


def test_shopping_list_rejects_empty(client: TestClient):
    assert client.post("/shopping-list", json={"ingredients": []}).status_code == 400


def test_chat_with_recipe_context(client: TestClient, fake_genai, recipe_dict):
    fake_genai.queue("Yes, use chickpeas instead.")

    response = client.post("/chat", json={"question": "Vegetarian swap?", "recipe": recipe_dict})

    assert response.status_code == 200
    message = response.json()["message"]
    assert message["sender"] == "bot"
    assert message["content"] == "Yes, use chickpeas instead."
    assert "Recipe: Chicken Curry" in fake_genai.calls[0]["contents"]


def test_chat_failure_returns_apology(client: TestClient, fake_genai):
    fake_genai.queue(TimeoutError("read timed out"))

    response = client.post("/chat", json={"question": "How spicy?", "context": "Recipe: Curry"})

    assert response.status_code == 200
    assert response.json()["message"]["content"] == (
        "I'm having trouble answering that right now. Please try again."
    )


def test_chat_welcome(client: TestClient):
    response = client.get("/chat/welcome", params={"recipe_name": "Ramen"})
    assert response.status_code == 200
    assert "cooking assistant for Ramen" in response.json()["message"]["content"]


def test_voice_instructions(client: TestClient, fake_genai):
    fake_genai.queue('{"instructions": ["Okay, boil the water."]}')
    response = client.post("/cooking/voice-instructions", json={"steps": ["Boil water."]})
    assert response.json() == {"instructions": ["Okay, boil the water."]}


def test_cooking_command(client: TestClient):
    response = client.post(
        "/cooking/command",
        json={"transcript": "next please", "currentStep": 0, "steps": ["Chop.", "Fry.", "Serve."]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["command"] == "next"
    assert data["state"]["currentStep"] == 1
    assert data["state"]["progress"] == 50


def test_cooking_command_completion(client: TestClient):
    response = client.post(
        "/cooking/command",
        json={"transcript": "next", "currentStep": 1, "steps": ["Chop.", "Serve."]},
    )
    data = response.json()
    assert data["state"]["completed"] is True
    assert data["notifications"] == [{"level": "success", "message": "Recipe completed! Enjoy your meal!"}]


def test_generate_image_none(client: TestClient, fake_genai):
    fake_genai.queue("Sorry, no image.")
    response = client.post("/images/generate", json={"prompt": "lemon tart"})
    assert response.status_code == 200
    assert response.json()["image"] is None
