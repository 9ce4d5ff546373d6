"""Subject ORM: a course the user tracks scores against.

Invariants:
    - Always belongs to a User (user_id FK)
    - Deleting a subject deletes its scores
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.db.base import Base


class Subject(Base):
    """Subject entity: groups scores."""
    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="subjects")
    scores: Mapped[list["Score"]] = relationship(
        "Score", back_populates="subject", cascade="all, delete-orphan",
    )
