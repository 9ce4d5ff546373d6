"""Score Routes: coercion, embedded subject and subject ownership."""

import pytest


@pytest.fixture
async def math(client, ada):
    _, headers = ada
    res = await client.post("/api/subjects", json={"name": "Math"}, headers=headers)
    return res.json()


async def test_subject_then_score_scenario(client, ada):
    """POST subject, list it, then POST a score with string value and date."""
    user, headers = ada
    assert user["id"] == 1

    res = await client.post("/api/subjects", json={"name": "Math", "userId": 1}, headers=headers)
    assert res.status_code == 200
    subject = res.json()
    assert subject["name"] == "Math" and subject["userId"] == 1

    res = await client.get("/api/subjects/1", headers=headers)
    assert res.json() == [subject]

    res = await client.post("/api/scores", json={
        "value": "95", "assignmentName": "Quiz", "date": "2024-01-01",
        "subjectId": subject["id"], "userId": 1,
    }, headers=headers)
    assert res.status_code == 200
    score = res.json()
    assert score["value"] == 95
    assert isinstance(score["value"], (int, float))
    assert score["assignmentName"] == "Quiz"
    assert score["date"] == "2024-01-01"
    assert score["subjectId"] == subject["id"]
    assert score["userId"] == 1
    assert score["subject"]["name"] == "Math"


async def test_list_scores_embeds_subject(client, ada, math):
    user, headers = ada
    await client.post("/api/scores", json={
        "value": 81.5, "assignmentName": "Midterm", "date": "2024-03-01", "subjectId": math["id"],
    }, headers=headers)

    scores = (await client.get(f"/api/scores/{user['id']}", headers=headers)).json()
    assert len(scores) == 1
    assert scores[0]["value"] == 81.5
    assert scores[0]["subject"] == math


async def test_missing_fields_listed_and_nothing_persisted(client, ada, math):
    _, headers = ada
    res = await client.post("/api/scores", json={
        "assignmentName": "Quiz", "subjectId": math["id"],
    }, headers=headers)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["missing_fields"] == ["value", "date"]
    assert "value" in error["message"] and "date" in error["message"]
    assert (await client.get("/api/scores", headers=headers)).json() == []


async def test_zero_is_a_valid_score(client, ada, math):
    _, headers = ada
    res = await client.post("/api/scores", json={
        "value": 0, "assignmentName": "Missed", "date": "2024-01-02", "subjectId": math["id"],
    }, headers=headers)
    assert res.status_code == 200
    assert res.json()["value"] == 0


async def test_out_of_range_value_rejected(client, ada, math):
    _, headers = ada
    res = await client.post("/api/scores", json={
        "value": "120", "assignmentName": "Quiz", "date": "2024-01-01", "subjectId": math["id"],
    }, headers=headers)
    assert res.status_code == 400


async def test_unknown_subject_is_a_creation_failure(client, ada):
    _, headers = ada
    res = await client.post("/api/scores", json={
        "value": 70, "assignmentName": "Quiz", "date": "2024-01-01", "subjectId": 999,
    }, headers=headers)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "Failed to create score"
    assert error["details"] == "Subject 999 not found"


async def test_other_users_subject_rejected(client, math, grace):
    _, grace_headers = grace
    res = await client.post("/api/scores", json={
        "value": 70, "assignmentName": "Quiz", "date": "2024-01-01", "subjectId": math["id"],
    }, headers=grace_headers)
    assert res.status_code == 400
    assert (await client.get("/api/scores", headers=grace_headers)).json() == []


async def test_delete_score(client, ada, math):
    _, headers = ada
    score = (await client.post("/api/scores", json={
        "value": 70, "assignmentName": "Quiz", "date": "2024-01-01", "subjectId": math["id"],
    }, headers=headers)).json()

    assert (await client.delete(f"/api/scores/{score['id']}", headers=headers)).status_code == 204
    assert (await client.delete(f"/api/scores/{score['id']}", headers=headers)).status_code == 404
