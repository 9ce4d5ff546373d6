"""Goal Routes: create, list and delete the caller's goals."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.api.dependencies import ensure_owner, get_current_user_id
from tracker.core.domain_types import Resource, UserId
from tracker.core.errors import ResourceNotFoundError, TrackerError
from tracker.infrastructure.database import get_db
from tracker.schemas.records import GoalCreate, GoalResponse
from tracker.services.storage import GoalStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/goals", tags=["goals"])

RESOURCE = Resource.GOALS.value


@router.post("", response_model=GoalResponse)
async def create_goal(
    body: GoalCreate,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    owner = ensure_owner(body.user_id, current_user_id, RESOURCE)
    logger.info("Creating goal", extra={"user_id": owner, "resource": RESOURCE})
    try:
        goal = await GoalStore(db).create(
            owner,
            description=body.description,
            target_score=body.target_score,
            deadline=body.deadline,
        )
    except TrackerError as e:
        logger.error(
            f"Goal creation failed: {e.message}",
            extra={"user_id": owner, "error_code": e.code},
        )
        raise
    return GoalResponse.model_validate(goal)


@router.get("", response_model=list[GoalResponse])
async def list_own_goals(
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await _list(current_user_id, db)


@router.get("/{user_id}", response_model=list[GoalResponse])
async def list_goals(
    user_id: str,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    owner = ensure_owner(user_id, current_user_id, RESOURCE)
    return await _list(owner, db)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(
    record_id: int,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    logger.info(
        "Deleting goal",
        extra={"user_id": current_user_id, "record_id": record_id},
    )
    if not await GoalStore(db).delete(record_id, current_user_id):
        raise ResourceNotFoundError("Goal", str(record_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _list(owner: UserId, db: AsyncSession) -> list[GoalResponse]:
    logger.info("Listing goals", extra={"user_id": owner, "resource": RESOURCE})
    goals = await GoalStore(db).list_for_user(owner)
    return [GoalResponse.model_validate(g) for g in goals]
