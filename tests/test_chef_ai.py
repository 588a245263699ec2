"""Prompt building and AI response parsing."""

import json

from chefini.services.chef_ai import (
    ISSUE_DESCRIPTIONS,
    Ok,
    ParseError,
    SchemaError,
    build_batch_prompts,
    build_flavor_prompts,
    build_recipe_prompts,
    mark_missing_ingredients,
    parse_ai_json,
    parse_batch_plan,
    parse_flavor_fix,
    parse_moderation,
    parse_recipe,
    strip_code_fences,
    to_title_case,
)

RECIPE = {
    "title": "Crispy Rice Frittata",
    "time": "20 mins",
    "ingredients": [{"item": "2 eggs", "missing": False}, {"item": "1 cup rice", "missing": False}],
    "instructions": ["Whisk the eggs.", "Fold in the rice."],
    "macros": {"calories": 420, "protein": "18g", "carbs": 45, "fats": 16},
    "tip": "Dry rice crisps faster.",
}


def _batch(days):
    return {
        "batch_title": "The Mediterranean Stack",
        "total_prep_time": "90 mins",
        "build_phase": [{"task": "Roast chicken", "duration": "40 mins", "temp": "200C", "why": "Protein base"}],
        "runtime_phase": [
            {"day": day, "title": f"Day {day}", "time": "10 mins", "instructions": ["Assemble"], "macros": {}}
            for day in range(1, days + 1)
        ],
        "storage_tip": "Keep sauces separate.",
    }


class TestFenceStripping:
    def test_strips_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_fenced_and_bare_parse_alike(self):
        bare = json.dumps(RECIPE)
        assert parse_ai_json(f"```json\n{bare}\n```") == parse_ai_json(bare)

    def test_ignores_prose_around_object(self):
        result = parse_ai_json('Here you go:\n{"valid": true}\nEnjoy!')
        assert isinstance(result, Ok)
        assert result.value == {"valid": True}

    def test_not_json_is_parse_error(self):
        assert isinstance(parse_ai_json("I cannot help with that."), ParseError)
        assert isinstance(parse_ai_json("{not json}"), ParseError)


class TestParseRecipe:
    def test_valid_recipe(self):
        result = parse_recipe(json.dumps(RECIPE))
        assert isinstance(result, Ok)
        assert result.value["title"] == "Crispy Rice Frittata"
        assert result.value["macros"]["protein"] == 18

    def test_missing_title_is_schema_error(self):
        data = dict(RECIPE, title="")
        result = parse_recipe(json.dumps(data))
        assert isinstance(result, SchemaError)
        assert "title" in result.missing

    def test_missing_instructions_is_schema_error(self):
        data = {key: value for key, value in RECIPE.items() if key != "instructions"}
        result = parse_recipe(json.dumps(data))
        assert isinstance(result, SchemaError)
        assert result.missing == ["instructions"]

    def test_plain_string_ingredients_accepted(self):
        data = dict(RECIPE, ingredients=["2 eggs", "salt"])
        result = parse_recipe(json.dumps(data))
        assert isinstance(result, Ok)
        assert result.value["ingredients"][1] == {"item": "salt", "missing": False}


class TestMissingIngredients:
    def test_contained_ingredient_is_present(self):
        marked = mark_missing_ingredients([{"item": "2 cups basmati rice"}], ["Rice"])
        assert marked[0]["missing"] is False

    def test_unlisted_ingredient_is_missing(self):
        marked = mark_missing_ingredients([{"item": "1 tbsp olive oil"}], ["eggs", "rice"])
        assert marked[0]["missing"] is True

    def test_only_forward_containment_counts(self):
        # "egg" is inside "eggplant", but "eggplant" is not inside "egg"
        marked = mark_missing_ingredients([{"item": "egg"}], ["eggplant"])
        assert marked[0]["missing"] is True

    def test_order_and_fields_preserved(self):
        ingredients = [{"item": "onion", "missing": True}, {"item": "garlic"}]
        marked = mark_missing_ingredients(ingredients, ["onion"])
        assert [entry["item"] for entry in marked] == ["onion", "garlic"]
        assert [entry["missing"] for entry in marked] == [False, True]


class TestParseBatchPlan:
    def test_exact_day_count_accepted(self):
        result = parse_batch_plan(json.dumps(_batch(3)), 3)
        assert isinstance(result, Ok)
        assert [meal["day"] for meal in result.value["runtime_phase"]] == [1, 2, 3]

    def test_wrong_day_count_rejected(self):
        result = parse_batch_plan(json.dumps(_batch(2)), 3)
        assert isinstance(result, SchemaError)
        assert result.missing == ["runtime_phase"]

    def test_missing_build_phase_rejected(self):
        data = dict(_batch(3), build_phase=[])
        assert isinstance(parse_batch_plan(json.dumps(data), 3), SchemaError)


class TestFlavorAndModeration:
    def test_flavor_fix_requires_all_fields(self):
        complete = {"diagnosis": "Too much salt.", "fix_title": "Add acid", "instruction": "Squeeze a lemon."}
        assert isinstance(parse_flavor_fix(json.dumps(complete)), Ok)
        partial = dict(complete, instruction="")
        assert isinstance(parse_flavor_fix(json.dumps(partial)), SchemaError)

    def test_moderation_requires_boolean(self):
        assert parse_moderation('{"valid": false, "reason": "Not food"}').value == {
            "valid": False,
            "reason": "Not food",
        }
        assert isinstance(parse_moderation('{"valid": "yes"}'), SchemaError)


class TestPrompts:
    def test_recipe_prompt_flags(self):
        _, user_prompt = build_recipe_prompts(["eggs"], dietary=["vegan"], healthy_mode=True, staples=False)
        assert "eggs" in user_prompt
        assert "DIETARY RESTRICTIONS: vegan." in user_prompt
        assert "PRIORITY" in user_prompt
        assert "kitchen staples" not in user_prompt

    def test_batch_prompt_names_day_count(self):
        system_prompt, user_prompt = build_batch_prompts(["rice"], 4, cooking_level="beginner")
        assert "Exactly 4 distinct recipes" in system_prompt
        assert "4-day" in user_prompt
        assert "simple and foolproof" in user_prompt

    def test_known_issue_is_described(self):
        _, user_prompt = build_flavor_prompts("Dal", "salty")
        assert ISSUE_DESCRIPTIONS["salty"] in user_prompt

    def test_unknown_issue_used_verbatim(self):
        _, user_prompt = build_flavor_prompts("Dal", "gluey texture", context="used old lentils")
        assert "gluey texture" in user_prompt
        assert "used old lentils" in user_prompt


def test_title_case():
    assert to_title_case("chicken THIGHS") == "Chicken Thighs"
