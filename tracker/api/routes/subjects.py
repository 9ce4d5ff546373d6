"""Subject Routes: create, list and delete the caller's subjects.

Invariants:
    - Ownership comes from the verified token (get_current_user_id)
    - GET /{user_id} rejects non-integer ids (400) and foreign ids (403)
    - Unknown-but-own user id yields [] rather than 404
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.api.dependencies import ensure_owner, get_current_user_id
from tracker.core.domain_types import Resource, UserId
from tracker.core.errors import ResourceNotFoundError, TrackerError
from tracker.infrastructure.database import get_db
from tracker.schemas.records import SubjectCreate, SubjectResponse
from tracker.services.storage import SubjectStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/subjects", tags=["subjects"])

RESOURCE = Resource.SUBJECTS.value


@router.post("", response_model=SubjectResponse)
async def create_subject(
    body: SubjectCreate,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a subject for the authenticated user."""
    owner = ensure_owner(body.user_id, current_user_id, RESOURCE)
    logger.info("Creating subject", extra={"user_id": owner, "resource": RESOURCE})
    try:
        subject = await SubjectStore(db).create(owner, name=body.name)
    except TrackerError as e:
        logger.error(
            f"Subject creation failed: {e.message}",
            extra={"user_id": owner, "error_code": e.code},
        )
        raise
    return SubjectResponse.model_validate(subject)


@router.get("", response_model=list[SubjectResponse])
async def list_own_subjects(
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """List the authenticated user's subjects."""
    return await _list(current_user_id, db)


@router.get("/{user_id}", response_model=list[SubjectResponse])
async def list_subjects(
    user_id: str,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """List subjects for user_id (must be the authenticated user)."""
    owner = ensure_owner(user_id, current_user_id, RESOURCE)
    return await _list(owner, db)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subject(
    record_id: int,
    current_user_id: UserId = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the caller's subjects together with its scores."""
    logger.info(
        "Deleting subject",
        extra={"user_id": current_user_id, "record_id": record_id},
    )
    if not await SubjectStore(db).delete(record_id, current_user_id):
        raise ResourceNotFoundError("Subject", str(record_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _list(owner: UserId, db: AsyncSession) -> list[SubjectResponse]:
    logger.info("Listing subjects", extra={"user_id": owner, "resource": RESOURCE})
    subjects = await SubjectStore(db).list_for_user(owner)
    return [SubjectResponse.model_validate(s) for s in subjects]
