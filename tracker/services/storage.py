"""Storage Adapter: owner-scoped create/list/get/delete over SQLAlchemy.

Invariants:
    - Every query on subjects/scores/goals filters by user_id
    - Lists are ordered by id (insertion order)
    - A score's subject must exist and belong to the same user
    - SQLAlchemy failures roll back the session and surface as PersistenceError
      (ConflictError for a duplicate user email)

Design Decisions:
    - One small class per entity sharing _OwnedStore: stores stay pass-through,
      no caching or multi-statement transactions
    - Score is constructed with its Subject object attached, so the response can
      embed the subject without a lazy load after commit
"""

import logging
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.domain_types import Resource, UserId
from tracker.core.errors import ConflictError, ErrorContext, PersistenceError
from tracker.models.goal import Goal
from tracker.models.score import Score
from tracker.models.subject import Subject
from tracker.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """User persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"User insert rejected: {e.orig}")
            raise ConflictError(details=str(e.orig))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User insert failed: {e}")
            raise PersistenceError("User registration failed", details=str(e))
        await self.db.refresh(user)
        return user


class _OwnedStore:
    """Shared create/list/get/delete for records scoped by user_id."""

    model: Any
    resource: Resource

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: UserId) -> Sequence[Any]:
        result = await self.db.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.id),
        )
        return result.scalars().all()

    async def get_owned(self, record_id: int, user_id: UserId) -> Any | None:
        result = await self.db.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .where(self.model.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: UserId, **fields: Any) -> Any:
        record = self.model(user_id=user_id, **fields)
        self.db.add(record)
        await self._commit("create", user_id)
        return record

    async def delete(self, record_id: int, user_id: UserId) -> bool:
        """Delete an owned record. False when absent or owned by someone else."""
        record = await self.get_owned(record_id, user_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self._commit("delete", user_id)
        return True

    async def _commit(self, operation: str, user_id: UserId) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            reason = str(getattr(e, "orig", None) or e)
            logger.error(
                f"Failed to {operation} {self.resource.label.lower()}: {reason}",
                extra={"resource": self.resource.value, "user_id": user_id},
            )
            raise PersistenceError(
                f"Failed to {operation} {self.resource.label.lower()}",
                details=reason,
                context=ErrorContext(user_id=user_id, resource=self.resource.value),
            )


class SubjectStore(_OwnedStore):
    model = Subject
    resource = Resource.SUBJECTS


class GoalStore(_OwnedStore):
    model = Goal
    resource = Resource.GOALS


class ScoreStore(_OwnedStore):
    model = Score
    resource = Resource.SCORES

    async def create(self, user_id: UserId, **fields: Any) -> Score:
        """Create a score after checking its subject belongs to the same user."""
        subject_id = fields.pop("subject_id")
        subject = await SubjectStore(self.db).get_owned(subject_id, user_id)
        if subject is None:
            raise PersistenceError(
                "Failed to create score",
                details=f"Subject {subject_id} not found",
                context=ErrorContext(user_id=user_id, resource=self.resource.value),
            )
        return await super().create(user_id, subject=subject, **fields)
