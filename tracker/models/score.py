"""Score ORM: one graded assignment within a subject.

Invariants:
    - value is within 0–100 (checked at the API boundary and by a CHECK constraint)
    - subject_id references a Subject owned by the same user_id

Design Decisions:
    - user_id denormalized next to subject_id: owner scoping without a JOIN
    - subject loaded with selectin: every Score response embeds its Subject
"""

from datetime import date as date_type, datetime, timezone

from sqlalchemy import (
    CheckConstraint, Date, DateTime, Float, ForeignKey, Integer, String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.db.base import Base


class Score(Base):
    """Score entity: value earned on one assignment."""
    __tablename__ = "scores"
    __table_args__ = (
        CheckConstraint("value >= 0 AND value <= 100", name="ck_scores_value_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    assignment_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    subject_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    subject: Mapped["Subject"] = relationship(
        "Subject", back_populates="scores", lazy="selectin",
    )
