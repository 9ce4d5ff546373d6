"""Score Routes: create, list and delete the caller's scores.

Invariants:
    - value arrives as number or numeric string; stored and returned as a number
    - Every Score response embeds its Subject
    - A subject_id that is unknown or foreign fails with PersistenceError (400)
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.api.dependencies import ensure_owner, get_current_user_id
from tracker.core.domain_types import Resource, UserId
from tracker.core.errors import ResourceNotFoundError, TrackerError
from tracker.infrastructure.database import get_db
from tracker.schemas.records import ScoreCreate, ScoreResponse
from tracker.services.storage import ScoreStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/scores", tags=["scores"])

RESOURCE = Resource.SCORES.value


@router.post("", response_model=ScoreResponse)
async def create_score(
    body: ScoreCreate,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Record a score for one of the caller's subjects."""
    owner = ensure_owner(body.user_id, current_user_id, RESOURCE)
    logger.info(
        f"Creating score '{body.assignment_name}' for subject {body.subject_id}",
        extra={"user_id": owner, "resource": RESOURCE},
    )
    try:
        score = await ScoreStore(db).create(
            owner,
            value=body.value,
            assignment_name=body.assignment_name,
            date=body.date,
            subject_id=body.subject_id,
        )
    except TrackerError as e:
        logger.error(
            f"Score creation failed: {e.message} ({e.details})",
            extra={"user_id": owner, "error_code": e.code},
        )
        raise
    return ScoreResponse.model_validate(score)


@router.get("", response_model=list[ScoreResponse])
async def list_own_scores(
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await _list(current_user_id, db)


@router.get("/{user_id}", response_model=list[ScoreResponse])
async def list_scores(
    user_id: str,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    owner = ensure_owner(user_id, current_user_id, RESOURCE)
    return await _list(owner, db)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_score(
    record_id: int,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    logger.info(
        "Deleting score",
        extra={"user_id": current_user_id, "record_id": record_id},
    )
    if not await ScoreStore(db).delete(record_id, current_user_id):
        raise ResourceNotFoundError("Score", str(record_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _list(owner: UserId, db: AsyncSession) -> list[ScoreResponse]:
    logger.info("Listing scores", extra={"user_id": owner, "resource": RESOURCE})
    scores = await ScoreStore(db).list_for_user(owner)
    return [ScoreResponse.model_validate(s) for s in scores]
