# chefini/routes/shopping.py
"""
Chefini API - Shopping List Routes.

One list per user with set semantics, plus ordering links per item.
"""

from fastapi import APIRouter, Depends
from typing import Optional
from uuid import UUID
import logging

from beanie.operators import AddToSet, Pull, Set
from pymongo.errors import DuplicateKeyError

from chefini.dependencies import get_session
from chefini.models.mongodb import ShoppingListDocument, utc_now
from chefini.schemas.shopping import AddItemRequest
from chefini.services.auth import SessionContext
from chefini.services.shopping_services import clean_item, order_links
from chefini.utils.errors import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_or_create_list(user_id: UUID) -> ShoppingListDocument:
    shopping_list = await ShoppingListDocument.find_one(ShoppingListDocument.user_id == user_id)
    if shopping_list:
        return shopping_list

    shopping_list = ShoppingListDocument(user_id=user_id, items=[])
    try:
        await shopping_list.insert()
        logger.info(f"Created shopping list for user {user_id}")
    except DuplicateKeyError:
        # Created by a concurrent request
        shopping_list = await ShoppingListDocument.find_one(ShoppingListDocument.user_id == user_id)
    return shopping_list


@router.get("")
async def get_shopping_list(session: SessionContext = Depends(get_session)) -> dict:
    """Get the caller's list, creating an empty one on first use."""
    shopping_list = await _get_or_create_list(UUID(session.user_id))
    return {"items": shopping_list.items}


@router.post("")
async def add_item(
    request: AddItemRequest,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Add an item; adding an existing item changes nothing."""
    user_id = UUID(session.user_id)
    shopping_list = await _get_or_create_list(user_id)

    await ShoppingListDocument.find_one(ShoppingListDocument.uid == shopping_list.uid).update(
        AddToSet({ShoppingListDocument.items: request.item}),
        Set({ShoppingListDocument.updated_at: utc_now()}),
    )

    shopping_list = await ShoppingListDocument.find_one(ShoppingListDocument.uid == shopping_list.uid)
    return {"items": shopping_list.items}


@router.delete("")
async def remove_item(
    item: Optional[str] = None,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Remove an item (query parameter `item`)."""
    if not item:
        raise ValidationError("Item parameter required")

    user_id = UUID(session.user_id)
    await ShoppingListDocument.find_one(ShoppingListDocument.user_id == user_id).update(
        Pull({ShoppingListDocument.items: item}),
        Set({ShoppingListDocument.updated_at: utc_now()}),
    )

    shopping_list = await ShoppingListDocument.find_one(ShoppingListDocument.user_id == user_id)
    return {"items": shopping_list.items if shopping_list else []}


@router.get("/order-links")
async def get_order_links(
    item: Optional[str] = None,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Where to order an item, with quantities stripped from the search."""
    if not item or not item.strip():
        raise ValidationError("Item parameter required")
    return {"item": clean_item(item), "services": order_links(item)}
