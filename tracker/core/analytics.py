"""Chart Aggregations: pure functions behind the dashboard and analytics views.

Invariants:
    - Inputs are plain dicts in the API's camelCase shape (as received by the client)
    - Subjects with no scores average 0.0 (never NaN, never omitted)
    - Output order follows subject order / score order of the inputs
"""

from typing import Any

RECENT_GOALS_LIMIT = 3


def average_by_subject(
    subjects: list[dict[str, Any]], scores: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Average score per subject: [{"name": ..., "average": ...}]."""
    totals: dict[int, tuple[float, int]] = {}
    for score in scores:
        total, count = totals.get(score["subjectId"], (0.0, 0))
        totals[score["subjectId"]] = (total + float(score["value"]), count + 1)
    series = []
    for subject in subjects:
        total, count = totals.get(subject["id"], (0.0, 0))
        series.append({
            "name": subject["name"],
            "average": total / count if count else 0.0,
        })
    return series


def score_trend(
    scores: list[dict[str, Any]], subject_id: int | None,
) -> list[dict[str, Any]]:
    """Assignment-by-assignment values for one subject; empty when none selected."""
    if subject_id is None:
        return []
    return [
        {"name": s["assignmentName"], "score": float(s["value"])}
        for s in scores
        if s["subjectId"] == subject_id
    ]


def score_series(scores: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Recent-scores bar chart series across all subjects."""
    return [
        {"name": s["assignmentName"], "score": float(s["value"])}
        for s in scores
    ]


def recent_goals(
    goals: list[dict[str, Any]], limit: int = RECENT_GOALS_LIMIT,
) -> list[dict[str, Any]]:
    return goals[:limit]


def default_subject_id(subjects: list[dict[str, Any]]) -> int | None:
    """First subject is pre-selected for the trend chart."""
    return subjects[0]["id"] if subjects else None
