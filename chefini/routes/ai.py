"""
Chefini API - AI Routes.

Recipe generation, the flavor debugger and content validation. Each call
is one completion round trip through the Gemini service, no retries.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from chefini.dependencies import get_gemini_service, get_session
from chefini.schemas.ai import DebugDishRequest, GenerateRecipeRequest, ValidateContentRequest
from chefini.services.auth import SessionContext
from chefini.services.chef_ai import (
    MODERATION_SYSTEM_PROMPT,
    Ok,
    SchemaError,
    build_flavor_prompts,
    build_recipe_prompts,
    describe_failure,
    mark_missing_ingredients,
    parse_flavor_fix,
    parse_moderation,
    parse_recipe,
)
from chefini.services.gemini import GeminiService
from chefini.services.recipe_service import create_recipe
from chefini.utils.errors import AIResponseError, ChefiniException

logger = logging.getLogger(__name__)
router = APIRouter()

DEBUG_FAILED_MESSAGE = "Unable to calculate fix. Please try again or rephrase your issue."


@router.post("/generate")
async def generate_recipe(
    request: GenerateRecipeRequest,
    session: SessionContext = Depends(get_session),
    gemini: GeminiService = Depends(get_gemini_service)
) -> dict:
    """
    Turn leftover ingredients into a recipe and save it to the cookbook.

    Returns:
        {"recipe", "recipeId"}, or {"recipe", "warning"} when the recipe was
        generated but could not be saved.

    Raises:
        UpstreamServiceError: 503 when the AI call fails.
        AIResponseError: 500 when the response is not a usable recipe.
    """
    logger.info(
        f"Generating recipe for {session.email}: {len(request.ingredients)} ingredients, "
        f"dietary={request.dietary}, healthy={request.healthy_mode}, staples={request.staples}"
    )

    system_prompt, user_prompt = build_recipe_prompts(
        request.ingredients,
        dietary=request.dietary,
        healthy_mode=request.healthy_mode,
        staples=request.staples,
    )
    response_text = await gemini.complete(
        system_prompt, user_prompt, temperature=0.8, max_tokens=2000, json_mode=True
    )

    result = parse_recipe(response_text)
    if not isinstance(result, Ok):
        logger.error(f"Recipe response rejected: {describe_failure(result)}. Raw response: {response_text}")
        if isinstance(result, SchemaError):
            raise AIResponseError("Invalid recipe format. Please try again.")
        raise AIResponseError()

    recipe = result.value
    recipe["ingredients"] = mark_missing_ingredients(recipe["ingredients"], request.ingredients)

    owner_id = UUID(session.user_id)
    try:
        saved = await create_recipe(owner_id, recipe)
    except Exception as e:
        logger.error(f"Database error saving generated recipe: {e}")
        return {"recipe": recipe, "warning": "Recipe generated but not saved to database."}

    logger.info(f"Recipe saved to database with ID: {saved.uid}")
    return {"recipe": recipe, "recipeId": str(saved.uid)}


@router.post("/debug-dish")
async def debug_dish(
    request: DebugDishRequest,
    session: SessionContext = Depends(get_session),
    gemini: GeminiService = Depends(get_gemini_service)
) -> dict:
    """
    Diagnose a cooking mistake and suggest a fix.

    Returns:
        {"diagnosis", "fix_title", "instruction"}
    """
    system_prompt, user_prompt = build_flavor_prompts(request.dish, request.issue, request.context)

    try:
        response_text = await gemini.complete(
            system_prompt, user_prompt, temperature=0.6, max_tokens=500, json_mode=True
        )
    except ChefiniException as e:
        logger.error(f"Flavor debugger AI call failed: {e.detail}")
        raise ChefiniException(DEBUG_FAILED_MESSAGE, status_code=500) from e

    result = parse_flavor_fix(response_text)
    if not isinstance(result, Ok):
        logger.error(f"Flavor fix rejected: {describe_failure(result)}. Raw response: {response_text}")
        raise ChefiniException(DEBUG_FAILED_MESSAGE, status_code=500)

    logger.info(f"Flavor fix for '{request.dish}' ({request.issue}): {result.value['fix_title']}")
    return result.value


@router.post("/validate-content")
async def validate_content(
    request: ValidateContentRequest,
    session: SessionContext = Depends(get_session),
    gemini: GeminiService = Depends(get_gemini_service)
) -> dict:
    """
    Classify free text as food-related or not.

    Fails open: if the classifier cannot be reached or answers garbage the
    text is accepted.
    """
    text = (request.text or "").strip()
    if not text:
        return {"valid": True}

    try:
        response_text = await gemini.complete(
            MODERATION_SYSTEM_PROMPT, text, temperature=0, max_tokens=100, json_mode=True
        )
    except Exception as e:
        logger.warning(f"Moderation call failed, accepting input: {e}")
        return {"valid": True}

    result = parse_moderation(response_text)
    if not isinstance(result, Ok):
        logger.warning(f"Moderation parse error ({describe_failure(result)}), accepting input")
        return {"valid": True}

    return result.value
