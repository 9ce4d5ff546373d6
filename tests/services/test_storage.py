"""Storage Adapter: owner scoping and error mapping without HTTP.

Invariants checked:
    - list_for_user returns only the owner's rows, in id order
    - get_owned / delete ignore other users' rows
    - Store rejections become PersistenceError with the driver message attached
"""

from datetime import date

import pytest

from tracker.core.errors import ConflictError, PersistenceError
from tracker.services.storage import GoalStore, ScoreStore, SubjectStore, UserStore


@pytest.fixture
async def users(test_db):
    store = UserStore(test_db)
    ada = await store.create("Ada", "ada@example.com", "hash-a")
    grace = await store.create("Grace", "grace@example.com", "hash-g")
    return ada, grace


async def test_duplicate_email_raises_conflict(test_db, users):
    with pytest.raises(ConflictError):
        await UserStore(test_db).create("Again", "ada@example.com", "hash")


async def test_get_by_email(test_db, users):
    ada, _ = users
    found = await UserStore(test_db).get_by_email("ada@example.com")
    assert found.id == ada.id
    assert await UserStore(test_db).get_by_email("missing@example.com") is None


async def test_list_for_user_is_scoped_and_ordered(test_db, users):
    ada, grace = users
    store = SubjectStore(test_db)
    first = await store.create(ada.id, name="Math")
    await store.create(grace.id, name="Poetry")
    second = await store.create(ada.id, name="Art")

    subjects = await store.list_for_user(ada.id)
    assert [s.id for s in subjects] == [first.id, second.id]
    assert await store.list_for_user(9999) == []


async def test_get_owned_ignores_other_users(test_db, users):
    ada, grace = users
    subject = await SubjectStore(test_db).create(ada.id, name="Math")
    assert await SubjectStore(test_db).get_owned(subject.id, grace.id) is None
    assert await SubjectStore(test_db).delete(subject.id, grace.id) is False
    assert await SubjectStore(test_db).get_owned(subject.id, ada.id) is not None


async def test_score_create_attaches_subject(test_db, users):
    ada, _ = users
    subject = await SubjectStore(test_db).create(ada.id, name="Math")
    score = await ScoreStore(test_db).create(
        ada.id, value=88.0, assignment_name="Quiz", date=date(2024, 1, 1),
        subject_id=subject.id,
    )
    assert score.subject_id == subject.id
    assert score.subject.name == "Math"


async def test_score_for_foreign_subject_raises(test_db, users):
    ada, grace = users
    subject = await SubjectStore(test_db).create(ada.id, name="Math")
    with pytest.raises(PersistenceError) as exc:
        await ScoreStore(test_db).create(
            grace.id, value=50.0, assignment_name="Quiz", date=date(2024, 1, 1),
            subject_id=subject.id,
        )
    assert exc.value.message == "Failed to create score"
    assert await ScoreStore(test_db).list_for_user(grace.id) == []


async def test_store_rejection_maps_to_persistence_error(test_db, users):
    ada, _ = users
    # rollback expires loaded instances; keep plain ids
    ada_id = ada.id
    subject = await SubjectStore(test_db).create(ada_id, name="Math")
    subject_id = subject.id
    with pytest.raises(PersistenceError) as exc:
        await ScoreStore(test_db).create(
            ada_id, value=150.0, assignment_name="Quiz", date=date(2024, 1, 1),
            subject_id=subject_id,
        )
    assert exc.value.message == "Failed to create score"
    assert "CHECK constraint failed" in exc.value.details
    assert await ScoreStore(test_db).list_for_user(ada_id) == []


async def test_goal_round_trip(test_db, users):
    ada, _ = users
    store = GoalStore(test_db)
    goal = await store.create(
        ada.id, description="Ace finals", target_score=95.0, deadline=date(2024, 6, 30),
    )
    assert [g.id for g in await store.list_for_user(ada.id)] == [goal.id]
    assert await store.delete(goal.id, ada.id) is True
    assert await store.list_for_user(ada.id) == []
