"""
Chefini API - Batch Meal-Prep Routes.

"Build once, eat all week" plans: generation and history.
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends

from chefini.dependencies import get_gemini_service, get_session
from chefini.models.mongodb import BatchPlanDocument
from chefini.schemas.ai import BatchPlanRequest
from chefini.services.auth import SessionContext
from chefini.services.chef_ai import (
    Ok,
    SchemaError,
    build_batch_prompts,
    describe_failure,
    parse_batch_plan,
    to_title_case,
)
from chefini.services.gemini import GeminiService
from chefini.utils.errors import AIResponseError, NotFoundError
from chefini.utils.security import parse_uuid

logger = logging.getLogger(__name__)
router = APIRouter()

HISTORY_LIMIT = 50


def serialize_plan(plan: BatchPlanDocument) -> dict:
    return {
        "id": str(plan.uid),
        "batch_title": plan.batch_title,
        "total_prep_time": plan.total_prep_time,
        "build_phase": [step.model_dump() for step in plan.build_phase],
        "runtime_phase": [meal.model_dump() for meal in plan.runtime_phase],
        "storage_tip": plan.storage_tip,
        "ingredients": plan.ingredients,
        "days": plan.days,
        "cookingLevel": plan.cooking_level,
        "createdAt": plan.created_at.isoformat(),
    }


@router.post("")
async def create_batch_plan(
    request: BatchPlanRequest,
    session: SessionContext = Depends(get_session),
    gemini: GeminiService = Depends(get_gemini_service)
) -> dict:
    """
    Generate a batch plan and save it to history.

    The response always carries the plan; `saved` / `batchId` are replaced
    by a `warning` when the database write fails.

    Raises:
        UpstreamServiceError: 503 when the AI call fails.
        AIResponseError: 500 when the plan is unparseable or has the wrong
            number of days.
    """
    logger.info(
        f"Generating {request.days}-day batch plan for {session.email} "
        f"({len(request.ingredients)} ingredients, level={request.cooking_level})"
    )

    system_prompt, user_prompt = build_batch_prompts(
        request.ingredients,
        request.days,
        dietary=request.dietary,
        cooking_level=request.cooking_level,
    )
    response_text = await gemini.complete(
        system_prompt, user_prompt, temperature=0.7, max_tokens=3000, json_mode=True
    )

    result = parse_batch_plan(response_text, request.days)
    if not isinstance(result, Ok):
        logger.error(f"Batch plan rejected: {describe_failure(result)}. Raw response: {response_text}")
        if isinstance(result, SchemaError):
            raise AIResponseError("Invalid batch plan format. Please try again.")
        raise AIResponseError()

    batch = result.value
    meta = {
        "user": session.email,
        "ingredients": len(request.ingredients),
        "days": request.days,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    owner_id = UUID(session.user_id)
    try:
        plan = BatchPlanDocument(
            **batch,
            ingredients=[to_title_case(ingredient) for ingredient in request.ingredients],
            days=request.days,
            cooking_level=request.cooking_level,
            created_by=owner_id,
        )
        await plan.insert()
    except Exception as e:
        logger.error(f"Database error saving batch plan: {e}")
        return {
            "success": True,
            "batch": batch,
            "warning": "Batch plan generated but not saved to database.",
            "meta": meta,
        }

    logger.info(f"Batch plan saved with ID: {plan.uid}")
    return {
        "success": True,
        "batch": batch,
        "batchId": str(plan.uid),
        "saved": True,
        "meta": meta,
    }


@router.get("/history")
async def batch_history(session: SessionContext = Depends(get_session)) -> dict:
    """The caller's saved plans, newest first."""
    plans = await BatchPlanDocument.find(
        BatchPlanDocument.created_by == UUID(session.user_id)
    ).sort(-BatchPlanDocument.created_at).limit(HISTORY_LIMIT).to_list()

    return {"plans": [serialize_plan(plan) for plan in plans]}


@router.delete("/history/{plan_id}")
async def delete_batch_plan(
    plan_id: str,
    session: SessionContext = Depends(get_session)
) -> dict:
    """Delete an owned plan; anyone else's is a 404."""
    plan_uid = parse_uuid(plan_id)
    plan = None
    if plan_uid:
        plan = await BatchPlanDocument.find_one(
            BatchPlanDocument.uid == plan_uid,
            BatchPlanDocument.created_by == UUID(session.user_id),
        )
    if not plan:
        raise NotFoundError("Plan not found")

    await plan.delete()
    logger.info(f"Batch plan {plan.uid} deleted")
    return {"success": True, "message": "Plan deleted successfully"}
