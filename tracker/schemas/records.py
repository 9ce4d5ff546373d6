"""Record Schemas: create payloads and responses for subjects, scores and goals.

Invariants:
    - Numeric strings coerce to numbers ("95" -> 95.0), date strings to dates
    - value and target_score bounded 0–100
    - user_id in a payload is optional; the verified token decides ownership
    - ScoreResponse always embeds its SubjectResponse

Design Decisions:
    - Pydantic lax mode does the coercion: a missing field raises
      RequestValidationError, which the global handler turns into a 400 listing
      every missing field
"""

import datetime as dt

from pydantic import Field, field_validator

from tracker.core.domain_types import MAX_SCORE, MIN_SCORE
from tracker.schemas.base import CamelModel


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("cannot be empty or whitespace")
    return value


# --- Subject ------------------------------------------------------------------

class SubjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    user_id: int | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class SubjectResponse(CamelModel):
    id: int
    name: str
    user_id: int


# --- Score --------------------------------------------------------------------

class ScoreCreate(CamelModel):
    value: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    assignment_name: str = Field(min_length=1, max_length=200)
    date: dt.date
    subject_id: int
    user_id: int | None = None

    @field_validator("assignment_name")
    @classmethod
    def strip_assignment_name(cls, v: str) -> str:
        return _strip_required(v)


class ScoreResponse(CamelModel):
    id: int
    value: float
    assignment_name: str
    date: dt.date
    subject_id: int
    user_id: int
    subject: SubjectResponse


# --- Goal ---------------------------------------------------------------------

class GoalCreate(CamelModel):
    description: str = Field(min_length=1, max_length=5000)
    target_score: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    deadline: dt.date
    user_id: int | None = None

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return _strip_required(v)


class GoalResponse(CamelModel):
    id: int
    description: str
    target_score: float
    deadline: dt.date
    user_id: int
