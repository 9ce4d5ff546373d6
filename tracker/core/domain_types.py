"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the owner id: never mixed up with record ids in signatures
    - Scores and goal targets are bounded MIN_SCORE..MAX_SCORE
    - Tracked record kinds encoded as an Enum: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: doubles as the URL segment and the log `resource` field
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Value Types ─────────────────────────────────────────────────

MIN_SCORE = 0.0
MAX_SCORE = 100.0


# ─── Enums ───────────────────────────────────────────────────────

class Resource(str, Enum):
    """Owner-scoped record kinds exposed under /api/<value>."""
    SUBJECTS = "subjects"
    SCORES = "scores"
    GOALS = "goals"

    @property
    def label(self) -> str:
        """Singular, capitalized name for messages ("Subject")."""
        return self.value[:-1].capitalize()
