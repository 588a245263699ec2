"""Recipe generation, flavor debugger and content validation endpoints."""

import json
import uuid
from types import SimpleNamespace

import pytest

from chefini.routes import ai as ai_routes
from chefini.utils.errors import UpstreamServiceError

RECIPE_JSON = json.dumps({
    "title": "Golden Egg Fried Rice",
    "time": "15 mins",
    "ingredients": [
        {"item": "2 eggs", "missing": False},
        {"item": "1 cup leftover rice", "missing": False},
        {"item": "1 tbsp soy sauce", "missing": False},
    ],
    "instructions": ["Scramble the eggs.", "Add rice and soy sauce."],
    "macros": {"calories": 380, "protein": 16, "carbs": 48, "fats": 12},
    "tip": "Cold rice has retrograded starch, so the grains stay separate.",
})


@pytest.fixture
def saved_recipes(monkeypatch):
    """Replaces the cookbook write; records what would have been saved."""
    saved = []

    async def fake_create_recipe(owner_id, data, is_public=False):
        saved.append((owner_id, data))
        return SimpleNamespace(uid=uuid.uuid4())

    monkeypatch.setattr(ai_routes, "create_recipe", fake_create_recipe)
    return saved


class TestGenerate:
    async def test_requires_session(self, client):
        response = await client.post("/generate", json={"ingredients": ["eggs"]})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    async def test_empty_ingredients_rejected(self, client, session_headers, fake_gemini):
        response = await client.post("/generate", json={"ingredients": []}, headers=session_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Please provide at least one ingredient"
        assert fake_gemini.calls == []

    async def test_generates_and_saves(self, client, session_headers, fake_gemini, saved_recipes):
        fake_gemini.queue(f"```json\n{RECIPE_JSON}\n```")

        response = await client.post(
            "/generate",
            json={"ingredients": ["Eggs", "rice"], "healthyMode": True},
            headers=session_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert "recipeId" in body
        missing = {entry["item"]: entry["missing"] for entry in body["recipe"]["ingredients"]}
        assert missing == {"2 eggs": False, "1 cup leftover rice": False, "1 tbsp soy sauce": True}
        assert len(saved_recipes) == 1
        assert fake_gemini.calls[0]["temperature"] == 0.8
        assert fake_gemini.calls[0]["json_mode"] is True
        assert "PRIORITY" in fake_gemini.calls[0]["user_prompt"]

    async def test_upstream_failure_is_503(self, client, session_headers, fake_gemini, saved_recipes):
        fake_gemini.queue(UpstreamServiceError("AI service error. Please try again.", detail="timeout"))

        response = await client.post("/generate", json={"ingredients": ["eggs"]}, headers=session_headers)

        assert response.status_code == 503
        assert response.json() == {"error": "AI service error. Please try again."}
        assert saved_recipes == []

    async def test_unparseable_response_writes_nothing(self, client, session_headers, fake_gemini, saved_recipes):
        fake_gemini.queue("Sorry, I can only talk about cooking.")

        response = await client.post("/generate", json={"ingredients": ["eggs"]}, headers=session_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to parse AI response. Please try again."}
        assert saved_recipes == []

    async def test_incomplete_recipe_writes_nothing(self, client, session_headers, fake_gemini, saved_recipes):
        fake_gemini.queue(json.dumps({"title": "Mystery", "ingredients": []}))

        response = await client.post("/generate", json={"ingredients": ["eggs"]}, headers=session_headers)

        assert response.status_code == 500
        assert saved_recipes == []

    async def test_database_failure_returns_recipe_with_warning(
        self, client, session_headers, fake_gemini, monkeypatch
    ):
        async def failing_create_recipe(owner_id, data, is_public=False):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(ai_routes, "create_recipe", failing_create_recipe)
        fake_gemini.queue(RECIPE_JSON)

        response = await client.post("/generate", json={"ingredients": ["eggs"]}, headers=session_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["recipe"]["title"] == "Golden Egg Fried Rice"
        assert body["warning"] == "Recipe generated but not saved to database."
        assert "recipeId" not in body


class TestDebugDish:
    async def test_returns_fix(self, client, session_headers, fake_gemini):
        fake_gemini.queue(json.dumps({
            "diagnosis": "Salt dominates because there is no acid or fat to balance it.",
            "fix_title": "Lemon and cream",
            "instruction": "Stir in a tablespoon of cream, then a squeeze of lemon.",
        }))

        response = await client.post(
            "/debug-dish",
            json={"dish": "Dal", "issue": "salty"},
            headers=session_headers,
        )

        assert response.status_code == 200
        assert response.json()["fix_title"] == "Lemon and cream"
        assert "too salty" in fake_gemini.calls[0]["user_prompt"]
        assert fake_gemini.calls[0]["json_mode"] is True

    @pytest.mark.parametrize("completion", [
        "not json",
        json.dumps({"diagnosis": "x", "fix_title": "", "instruction": "y"}),
        UpstreamServiceError("AI service error. Please try again."),
    ])
    async def test_any_failure_is_generic_500(self, client, session_headers, fake_gemini, completion):
        fake_gemini.queue(completion)

        response = await client.post(
            "/debug-dish",
            json={"dish": "Curry", "issue": "burnt"},
            headers=session_headers,
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Unable to calculate fix. Please try again or rephrase your issue."
        }


class TestValidateContent:
    async def test_empty_text_skips_classifier(self, client, session_headers, fake_gemini):
        response = await client.post("/validate-content", json={"text": "   "}, headers=session_headers)
        assert response.json() == {"valid": True}
        assert fake_gemini.calls == []

    async def test_classifier_verdict_returned(self, client, session_headers, fake_gemini):
        fake_gemini.queue('{"valid": false, "reason": "That is not food."}')

        response = await client.post("/validate-content", json={"text": "asdfgh"}, headers=session_headers)

        assert response.json() == {"valid": False, "reason": "That is not food."}
        assert fake_gemini.calls[0]["temperature"] == 0
        assert fake_gemini.calls[0]["json_mode"] is True

    @pytest.mark.parametrize("completion", [
        "garbage",
        UpstreamServiceError("AI service error. Please try again."),
    ])
    async def test_fails_open(self, client, session_headers, fake_gemini, completion):
        fake_gemini.queue(completion)

        response = await client.post("/validate-content", json={"text": "paneer"}, headers=session_headers)

        assert response.status_code == 200
        assert response.json() == {"valid": True}
