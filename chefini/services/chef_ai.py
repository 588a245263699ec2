"""
Chefini API - Prompt construction and AI response parsing.

Each AI feature builds a (system, user) prompt pair here and turns the raw
completion text into a tagged result:

    Ok(value) | ParseError(raw) | SchemaError(missing)

Callers branch on the result type before touching any downstream field.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Ok(Generic[T]):
    """Parsed and shape-checked AI payload."""

    value: T


@dataclass
class ParseError:
    """The completion text was not JSON."""

    raw: str
    reason: str = "not valid JSON"


@dataclass
class SchemaError:
    """The completion was JSON but required fields were missing or malformed."""

    missing: List[str]
    raw: str = ""


ParseResult = Union[Ok, ParseError, SchemaError]


_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\n?")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code-fence wrappers from a completion.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    return _FENCE_RE.sub("", text or "").strip()


def parse_ai_json(text: str) -> Union[Ok, ParseError]:
    """
    Extract and parse the JSON object in a completion.

    Fences are stripped first; any prose around the outermost braces is
    ignored. Anything else is a ParseError.
    """
    cleaned = strip_code_fences(text)

    json_start = cleaned.find("{")
    json_end = cleaned.rfind("}") + 1
    if json_start == -1 or json_end <= json_start:
        return ParseError(raw=text or "", reason="no JSON object found")

    try:
        data = json.loads(cleaned[json_start:json_end])
    except json.JSONDecodeError as e:
        return ParseError(raw=text or "", reason=f"JSON parsing error: {e}")

    if not isinstance(data, dict):
        return ParseError(raw=text or "", reason="JSON root is not an object")
    return Ok(data)


def _number(value: Any) -> float:
    """Coerce a macro value such as 450, "450" or "450 kcal" to a number."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if match:
            number = float(match.group(0))
            return int(number) if number.is_integer() else number
    return 0


def normalize_macros(raw: Any) -> Dict[str, float]:
    raw = raw if isinstance(raw, dict) else {}
    return {key: _number(raw.get(key)) for key in ("calories", "protein", "carbs", "fats")}


def _string_list(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    return [str(entry).strip() for entry in raw if str(entry).strip()]


def to_title_case(text: str) -> str:
    """
    Capitalize the first letter of every word and lowercase the rest.

    Example:
        >>> to_title_case("chicken THIGHS")
        'Chicken Thighs'
    """
    return re.sub(r"\w\S*", lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


# ---------------------------------------------------------------------------
# Recipe generation
# ---------------------------------------------------------------------------

RECIPE_SYSTEM_PROMPT = """You are Chefini, a culinary wizard who hates food waste. You speak confidently but briefly.

YOUR RULES:
1. Transform random leftovers into gourmet meals
2. ALWAYS provide exactly ONE "Magic Tip" - a scientific reason why flavors work together
3. Respond ONLY in valid JSON format (no markdown, no explanations)
4. Be creative but practical

RESPOND WITH THIS EXACT JSON STRUCTURE:
{
  "title": "Creative dish name",
  "time": "XX mins",
  "ingredients": [
    {"item": "amount + ingredient", "missing": false}
  ],
  "instructions": ["Step by step array"],
  "macros": {
    "calories": 450,
    "protein": 25,
    "carbs": 50,
    "fats": 15
  },
  "tip": "One scientific Magic Tip explaining flavor chemistry"
}"""


def build_recipe_prompts(
    ingredients: List[str],
    dietary: Optional[List[str]] = None,
    healthy_mode: bool = False,
    staples: bool = True
) -> Tuple[str, str]:
    """Build the (system, user) prompt pair for recipe generation."""
    staples_text = (
        " You can also use kitchen staples like oil, salt, pepper, and common spices."
        if staples else ""
    )
    dietary_text = f" DIETARY RESTRICTIONS: {', '.join(dietary)}." if dietary else ""
    healthy_text = (
        " PRIORITY: Make this dish healthy with balanced macros and nutrient-dense ingredients."
        if healthy_mode else ""
    )

    user_prompt = (
        f"Create a recipe using these ingredients: {', '.join(ingredients)}."
        f"{staples_text}{dietary_text}{healthy_text}"
    )
    return RECIPE_SYSTEM_PROMPT, user_prompt


def _normalize_ingredient(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, dict):
        item = str(raw.get("item") or raw.get("name") or "").strip()
    else:
        item = str(raw or "").strip()
    if not item:
        return None
    return {"item": item, "missing": False}


def parse_recipe(text: str) -> ParseResult:
    """
    Parse a recipe completion.

    Required fields: title, ingredients (non-empty list), instructions
    (non-empty list).
    """
    result = parse_ai_json(text)
    if not isinstance(result, Ok):
        return result
    data = result.value

    title = str(data.get("title") or "").strip()
    ingredients = [
        ingredient
        for ingredient in (
            _normalize_ingredient(entry)
            for entry in (data.get("ingredients") if isinstance(data.get("ingredients"), list) else [])
        )
        if ingredient
    ]
    instructions = _string_list(data.get("instructions"))

    missing = [
        name for name, present in (
            ("title", bool(title)),
            ("ingredients", bool(ingredients)),
            ("instructions", bool(instructions)),
        )
        if not present
    ]
    if missing:
        return SchemaError(missing=missing, raw=text)

    return Ok({
        "title": title,
        "time": str(data.get("time") or "").strip(),
        "ingredients": ingredients,
        "instructions": instructions,
        "macros": normalize_macros(data.get("macros")),
        "tip": str(data.get("tip") or "").strip(),
    })


def mark_missing_ingredients(
    ingredients: List[Dict[str, Any]],
    supplied: List[str]
) -> List[Dict[str, Any]]:
    """
    Flag recipe ingredients the cook did not supply.

    An ingredient is present when its text contains one of the supplied
    ingredient strings (case-insensitive); everything else is missing.

    Example:
        >>> mark_missing_ingredients([{"item": "2 eggs"}, {"item": "1 tbsp oil"}], ["egg"])
        [{'item': '2 eggs', 'missing': False}, {'item': '1 tbsp oil', 'missing': True}]
    """
    have = [entry.lower().strip() for entry in supplied if entry and entry.strip()]
    marked = []
    for ingredient in ingredients:
        item = ingredient.get("item", "")
        item_lower = item.lower()
        marked.append({
            **ingredient,
            "missing": not any(candidate in item_lower for candidate in have),
        })
    return marked


# ---------------------------------------------------------------------------
# Batch meal-prep plans
# ---------------------------------------------------------------------------

BATCH_SYSTEM_PROMPT = """You are Chefini's Batch Compiler - a meal prep architect who thinks like a software engineer.

YOUR MISSION:
Transform bulk ingredients into a "Build Once, Eat All Week" system with two distinct phases:
1. BUILD PHASE (Sunday Prep): Heavy processing tasks done once
2. RUNTIME PHASE (Daily Meals): Quick assembly meals using prepped components

CORE PRINCIPLES:
- Optimize for reusability, not redundancy
- Build Phase = heavy processing (roast, boil, marinate)
- Runtime Phase = quick assembly (mix, plate, serve)
- Each runtime recipe must feel DISTINCT (different cuisines, textures, temperatures)
- Never waste ingredients

RESPOND WITH THIS EXACT JSON STRUCTURE (no markdown, no explanations):
{
  "batch_title": "Creative batch name (e.g., 'The Mediterranean Stack')",
  "total_prep_time": "XX mins",
  "build_phase": [
    {
      "task": "What to do (e.g., 'Roast all chicken thighs')",
      "duration": "XX mins",
      "temp": "Temperature/setting (e.g., '200C' or 'Medium heat')",
      "why": "Reason (e.g., 'Creates reusable protein base')"
    }
  ],
  "runtime_phase": [
    {
      "day": 1,
      "title": "Day 1 meal name",
      "time": "XX mins assembly",
      "instructions": ["Step-by-step array for quick assembly"],
      "macros": {"calories": 450, "protein": 30, "carbs": 40, "fats": 15}
    }
  ],
  "storage_tip": "One critical storage/reheating tip"
}

CONSTRAINTS:
- Build Phase: 3-6 tasks maximum
- Runtime Phase: Exactly {days} distinct recipes
- Each runtime meal: Under 15 mins assembly time
- Vary cuisines/styles across the days"""

SKILL_HINTS = {
    "beginner": "Keep techniques simple and foolproof. ",
    "advanced": "Feel free to use complex techniques. ",
}


def build_batch_prompts(
    ingredients: List[str],
    days: int,
    dietary: Optional[List[str]] = None,
    cooking_level: str = "intermediate"
) -> Tuple[str, str]:
    """Build the (system, user) prompt pair for a batch plan."""
    system_prompt = BATCH_SYSTEM_PROMPT.replace("{days}", str(days))
    dietary_text = f"DIETARY RESTRICTIONS: {', '.join(dietary)}. " if dietary else ""
    skill_text = SKILL_HINTS.get(cooking_level, "")

    user_prompt = (
        f"Create a {days}-day batch meal prep plan using these ingredients: {', '.join(ingredients)}.\n"
        f"{dietary_text}{skill_text}\n"
        "Focus on creating a smart \"build once, eat all week\" system where the prep day "
        "makes weekday cooking effortless."
    )
    return system_prompt, user_prompt


def parse_batch_plan(text: str, days: int) -> ParseResult:
    """
    Parse a batch plan completion.

    Required fields: batch_title, build_phase (list) and runtime_phase
    (list with exactly `days` entries).
    """
    result = parse_ai_json(text)
    if not isinstance(result, Ok):
        return result
    data = result.value

    batch_title = str(data.get("batch_title") or "").strip()
    build_phase = data.get("build_phase")
    runtime_phase = data.get("runtime_phase")

    missing = []
    if not batch_title:
        missing.append("batch_title")
    if not isinstance(build_phase, list) or not build_phase:
        missing.append("build_phase")
    if not isinstance(runtime_phase, list) or len(runtime_phase) != days:
        missing.append("runtime_phase")
    if missing:
        return SchemaError(missing=missing, raw=text)

    steps = [
        {
            "task": str(step.get("task") or ""),
            "duration": str(step.get("duration") or ""),
            "temp": str(step.get("temp") or ""),
            "why": str(step.get("why") or ""),
        }
        for step in build_phase
        if isinstance(step, dict)
    ]
    meals = []
    for index, meal in enumerate(runtime_phase, start=1):
        meal = meal if isinstance(meal, dict) else {}
        day = _number(meal.get("day"))
        meals.append({
            "day": int(day) if day else index,
            "title": str(meal.get("title") or ""),
            "time": str(meal.get("time") or ""),
            "instructions": _string_list(meal.get("instructions")),
            "macros": normalize_macros(meal.get("macros")),
        })

    return Ok({
        "batch_title": batch_title,
        "total_prep_time": str(data.get("total_prep_time") or ""),
        "build_phase": steps,
        "runtime_phase": meals,
        "storage_tip": str(data.get("storage_tip") or ""),
    })


# ---------------------------------------------------------------------------
# Flavor debugger
# ---------------------------------------------------------------------------

ISSUE_DESCRIPTIONS = {
    "salty": "too salty",
    "acidic": "too sour/acidic",
    "spicy": "too spicy",
    "sweet": "too sweet",
    "bland": "tastes bland",
    "burnt": "slightly burnt",
}

FLAVOR_SYSTEM_PROMPT = """You are Chefini's Head of Flavor Rescue, an expert in food chemistry and culinary problem-solving.

Your job is to diagnose cooking mistakes and provide scientific fixes using culinary techniques.

RESPONSE FORMAT (JSON ONLY):
{
  "diagnosis": "Brief explanation of WHY this happened (1-2 sentences, scientific but accessible)",
  "fix_title": "The key solution ingredient or technique (short, actionable)",
  "instruction": "Step-by-step how to apply the fix (2-3 sentences, clear and practical)"
}

RULES:
- Be direct and practical
- Focus on chemistry (acids balance salt, fats coat heat receptors, etc.)
- Give specific measurements when possible
- Use the additional context provided to give more specific and accurate solutions
- DO NOT include markdown, code blocks, or extra formatting
- Return ONLY valid JSON"""


def build_flavor_prompts(dish: str, issue: str, context: Optional[str] = None) -> Tuple[str, str]:
    """Build the (system, user) prompt pair for the flavor debugger."""
    issue_description = ISSUE_DESCRIPTIONS.get(issue, issue)

    user_prompt = f"Dish: {dish}\nProblem: The dish is {issue_description}"
    if context and context.strip():
        user_prompt += (
            f"\n\nAdditional Context: {context.strip()}\n\n"
            "Use this context to provide a more specific and accurate fix."
        )
    user_prompt += "\n\nProvide a scientific fix using culinary chemistry principles."
    return FLAVOR_SYSTEM_PROMPT, user_prompt


def parse_flavor_fix(text: str) -> ParseResult:
    """Parse a flavor debugger completion. All three fields are required."""
    result = parse_ai_json(text)
    if not isinstance(result, Ok):
        return result
    data = result.value

    fix = {key: str(data.get(key) or "").strip() for key in ("diagnosis", "fix_title", "instruction")}
    missing = [key for key, value in fix.items() if not value]
    if missing:
        return SchemaError(missing=missing, raw=text)
    return Ok(fix)


# ---------------------------------------------------------------------------
# Content moderation
# ---------------------------------------------------------------------------

MODERATION_SYSTEM_PROMPT = """You are a content moderator for a cooking app.
Analyze the user input. It should be a food ingredient, a dish name, or a cooking-related question.

If the input is:
1. Offensive, hate speech, or inappropriate -> INVALID
2. Complete gibberish (random characters) -> INVALID
3. Clearly not related to food/cooking contexts -> INVALID
4. Valid food/cooking text -> VALID

Respond with ONLY JSON: { "valid": boolean, "reason": "short explanation for user" }"""


def parse_moderation(text: str) -> ParseResult:
    """Parse the classifier verdict; `valid` must be a boolean."""
    result = parse_ai_json(text)
    if not isinstance(result, Ok):
        return result
    data = result.value

    if not isinstance(data.get("valid"), bool):
        return SchemaError(missing=["valid"], raw=text)

    verdict = {"valid": data["valid"]}
    if data.get("reason"):
        verdict["reason"] = str(data["reason"])
    return Ok(verdict)


def describe_failure(result: Union[ParseError, SchemaError]) -> str:
    """One-line server-side description of a failed parse."""
    if isinstance(result, SchemaError):
        return f"missing or invalid fields: {', '.join(result.missing)}"
    return result.reason
