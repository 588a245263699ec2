"""
Chefini API - Recipe Routes.

Personal cookbook, the public feed, likes and the curated daily dishes.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from chefini.dependencies import get_optional_session, get_session
from chefini.schemas.recipe import RecipeUpdateRequest, SaveRecipeRequest
from chefini.services import recipe_service
from chefini.services.auth import SessionContext
from chefini.services.ready_recipes import list_ready_recipes
from chefini.utils.errors import AuthenticationError

logger = logging.getLogger(__name__)
router = APIRouter()


def _owner_id(session: SessionContext) -> UUID:
    try:
        return UUID(session.user_id)
    except ValueError:
        raise AuthenticationError("Invalid session")


@router.get("")
async def list_recipes(
    type: Optional[str] = Query(None, description="'public' for the feed, otherwise your cookbook"),
    session: Optional[SessionContext] = Depends(get_optional_session)
) -> dict:
    """
    Public feed (no session needed) or the caller's own recipes.

    Raises:
        AuthenticationError: 401 when asking for your cookbook without a session.
    """
    if type == "public":
        recipes = await recipe_service.list_public_recipes()
    elif session:
        recipes = await recipe_service.list_user_recipes(_owner_id(session))
    else:
        raise AuthenticationError()

    logger.info(f"Found {len(recipes)} recipes (type={type or 'my'})")
    return {"recipes": recipes}


@router.get("/ready")
async def ready_recipes(category: Optional[str] = None) -> dict:
    """Curated daily dishes."""
    return {"recipes": list_ready_recipes(category)}


@router.get("/liked")
async def liked_recipes(session: SessionContext = Depends(get_session)) -> dict:
    """Ids of the recipes the caller likes."""
    return {"likedRecipes": await recipe_service.liked_recipe_ids(_owner_id(session))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_recipe(
    request: SaveRecipeRequest,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Copy a recipe into the caller's cookbook as a private recipe with no likes."""
    recipe = await recipe_service.create_recipe(_owner_id(session), request.model_dump())
    logger.info(f"Recipe saved to cookbook: {recipe.uid}")
    return {"recipe": recipe_service.serialize_recipe(recipe)}


@router.patch("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    request: RecipeUpdateRequest,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Share/unshare or rename an owned recipe; anyone else's is a 404."""
    recipe = await recipe_service.update_recipe(
        recipe_id,
        _owner_id(session),
        is_public=request.is_public,
        title=request.title,
    )
    return {"recipe": recipe_service.serialize_recipe(recipe)}


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: str,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Delete an owned recipe; anyone else's is a 404 and stays."""
    await recipe_service.delete_recipe(recipe_id, _owner_id(session))
    return {"success": True}


@router.post("/{recipe_id}/like")
async def toggle_like(
    recipe_id: str,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Like or unlike a recipe."""
    return await recipe_service.toggle_like(recipe_id, _owner_id(session))
