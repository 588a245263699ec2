"""
Chefini API - Recipe service.

Cookbook CRUD, the public feed and likes. A like is one document in
`recipe_likes`; the unique (user_id, recipe_id) index decides which of two
concurrent toggles wins, and the counter on the recipe only moves when a
like document was actually inserted or deleted.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from beanie.operators import In, Inc
from pymongo.errors import DuplicateKeyError

from chefini.models.mongodb import (
    Ingredient,
    Macros,
    RecipeDocument,
    RecipeLikeDocument,
    UserDocument,
)
from chefini.utils.errors import NotFoundError, ValidationError
from chefini.utils.security import parse_uuid, sanitize_string

logger = logging.getLogger(__name__)

PUBLIC_FEED_LIMIT = 50


def serialize_recipe(
    recipe: RecipeDocument,
    author: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Client shape of a recipe. `createdBy` is the author card when given."""
    return {
        "id": str(recipe.uid),
        "title": recipe.title,
        "time": recipe.time,
        "ingredients": [ingredient.model_dump() for ingredient in recipe.ingredients],
        "instructions": recipe.instructions,
        "macros": recipe.macros.model_dump(),
        "tip": recipe.tip,
        "createdBy": author if author is not None else str(recipe.created_by),
        "isPublic": recipe.is_public,
        "likes": recipe.likes,
        "createdAt": recipe.created_at.isoformat(),
    }


def author_card(user: Optional[UserDocument]) -> Dict[str, Any]:
    if not user:
        return {"name": "Unknown chef", "image": None, "avatar": None}
    return {"name": user.name, "image": user.image, "avatar": user.avatar}


async def create_recipe(owner_id: UUID, data: Dict[str, Any], is_public: bool = False) -> RecipeDocument:
    """Insert a recipe owned by `owner_id`. Likes always start at 0."""
    recipe = RecipeDocument(
        title=data["title"],
        time=data.get("time") or "",
        ingredients=[Ingredient(**ingredient) for ingredient in data.get("ingredients", [])],
        instructions=list(data.get("instructions", [])),
        macros=Macros(**(data.get("macros") or {})),
        tip=data.get("tip") or "",
        created_by=owner_id,
        is_public=is_public,
        likes=0,
    )
    await recipe.insert()
    return recipe


async def list_public_recipes() -> List[Dict[str, Any]]:
    """Newest public recipes, each with its author card."""
    recipes = await RecipeDocument.find(
        RecipeDocument.is_public == True  # noqa: E712
    ).sort(-RecipeDocument.created_at).limit(PUBLIC_FEED_LIMIT).to_list()

    author_ids = list({recipe.created_by for recipe in recipes})
    authors = {}
    if author_ids:
        users = await UserDocument.find(In(UserDocument.uid, author_ids)).to_list()
        authors = {user.uid: user for user in users}

    return [serialize_recipe(recipe, author_card(authors.get(recipe.created_by))) for recipe in recipes]


async def list_user_recipes(user_id: UUID) -> List[Dict[str, Any]]:
    recipes = await RecipeDocument.find(
        RecipeDocument.created_by == user_id
    ).sort(-RecipeDocument.created_at).to_list()
    return [serialize_recipe(recipe) for recipe in recipes]


async def get_recipe(recipe_id: str) -> RecipeDocument:
    recipe_uid = parse_uuid(recipe_id)
    recipe = None
    if recipe_uid:
        recipe = await RecipeDocument.find_one(RecipeDocument.uid == recipe_uid)
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


async def get_owned_recipe(recipe_id: str, owner_id: UUID) -> RecipeDocument:
    """Someone else's recipe is reported as not found."""
    recipe_uid = parse_uuid(recipe_id)
    recipe = None
    if recipe_uid:
        recipe = await RecipeDocument.find_one(
            RecipeDocument.uid == recipe_uid,
            RecipeDocument.created_by == owner_id,
        )
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


async def update_recipe(
    recipe_id: str,
    owner_id: UUID,
    is_public: Optional[bool] = None,
    title: Optional[str] = None
) -> RecipeDocument:
    recipe = await get_owned_recipe(recipe_id, owner_id)

    if is_public is not None:
        recipe.is_public = is_public
    if title is not None:
        title = sanitize_string(title, max_length=200)
        if not title:
            raise ValidationError("Title cannot be empty")
        recipe.title = title

    await recipe.save()
    logger.info(f"Recipe {recipe.uid} updated by {owner_id}")
    return recipe


async def delete_recipe(recipe_id: str, owner_id: UUID) -> None:
    """Delete an owned recipe together with every like it received."""
    recipe = await get_owned_recipe(recipe_id, owner_id)
    await RecipeLikeDocument.find(RecipeLikeDocument.recipe_id == recipe.uid).delete()
    await recipe.delete()
    logger.info(f"Recipe {recipe.uid} deleted by {owner_id}")


async def toggle_like(recipe_id: str, user_id: UUID) -> Dict[str, Any]:
    """
    Like the recipe, or unlike it if the user already does.

    Returns:
        {"liked": bool, "likes": int, "message": str}
    """
    recipe = await get_recipe(recipe_id)

    removed = await RecipeLikeDocument.find_one(
        RecipeLikeDocument.user_id == user_id,
        RecipeLikeDocument.recipe_id == recipe.uid,
    ).delete()

    if removed is not None and removed.deleted_count == 1:
        # Never below zero
        await RecipeDocument.find_one(
            RecipeDocument.uid == recipe.uid,
            RecipeDocument.likes > 0,
        ).update(Inc({RecipeDocument.likes: -1}))
        liked = False
    else:
        try:
            await RecipeLikeDocument(user_id=user_id, recipe_id=recipe.uid).insert()
        except DuplicateKeyError:
            # A concurrent request already recorded this like
            logger.info(f"Like by {user_id} on {recipe.uid} already recorded")
        else:
            await RecipeDocument.find_one(
                RecipeDocument.uid == recipe.uid
            ).update(Inc({RecipeDocument.likes: 1}))
        liked = True

    refreshed = await RecipeDocument.find_one(RecipeDocument.uid == recipe.uid)
    likes = refreshed.likes if refreshed else 0
    logger.info(f"User {user_id} {'liked' if liked else 'unliked'} recipe {recipe.uid}")

    return {
        "liked": liked,
        "likes": likes,
        "message": "Recipe liked" if liked else "Recipe unliked",
    }


async def liked_recipe_ids(user_id: UUID) -> List[str]:
    likes = await RecipeLikeDocument.find(
        RecipeLikeDocument.user_id == user_id
    ).sort(-RecipeLikeDocument.created_at).to_list()
    return [str(like.recipe_id) for like in likes]
