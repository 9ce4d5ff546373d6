"""ORM Models: SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; subjects, scores and goals scoped by user_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tracker.models.user import User  # noqa: F401
from tracker.models.subject import Subject  # noqa: F401
from tracker.models.score import Score  # noqa: F401
from tracker.models.goal import Goal  # noqa: F401
