"""User ORM: registered account that owns subjects, scores and goals.

Invariants:
    - email is unique across all users
    - password holds a salted one-way hash, never plaintext
    - Never mutated after registration

Design Decisions:
    - Integer primary key: ids travel in URLs (/subjects/:userId) and tokens
    - cascade delete for owned records: removing a user removes everything it owns
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tracker.db.base import Base


class User(Base):
    """User aggregate root: owns all tracked records."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    subjects: Mapped[list["Subject"]] = relationship(
        "Subject", back_populates="user", cascade="all, delete-orphan",
    )
    goals: Mapped[list["Goal"]] = relationship(
        "Goal", back_populates="user", cascade="all, delete-orphan",
    )
