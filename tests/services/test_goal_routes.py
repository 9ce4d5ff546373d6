"""Goal Routes: create/list/delete with coercion and owner scoping."""


async def test_create_goal_coerces_fields(client, ada):
    user, headers = ada
    res = await client.post("/api/goals", json={
        "description": "Ace finals", "targetScore": "90", "deadline": "2024-06-30",
        "userId": user["id"],
    }, headers=headers)
    assert res.status_code == 200
    goal = res.json()
    assert goal == {
        "id": goal["id"], "description": "Ace finals", "targetScore": 90.0,
        "deadline": "2024-06-30", "userId": user["id"],
    }


async def test_list_goals_for_owner(client, ada, grace):
    ada_user, ada_headers = ada
    _, grace_headers = grace
    for description in ("First", "Second"):
        await client.post("/api/goals", json={
            "description": description, "targetScore": 80, "deadline": "2024-12-01",
        }, headers=ada_headers)
    await client.post("/api/goals", json={
        "description": "Not Ada's", "targetScore": 80, "deadline": "2024-12-01",
    }, headers=grace_headers)

    goals = (await client.get(f"/api/goals/{ada_user['id']}", headers=ada_headers)).json()
    assert [g["description"] for g in goals] == ["First", "Second"]


async def test_missing_deadline_rejected(client, ada):
    _, headers = ada
    res = await client.post("/api/goals", json={
        "description": "Ace finals", "targetScore": 90,
    }, headers=headers)
    assert res.status_code == 400
    assert res.json()["error"]["missing_fields"] == ["deadline"]
    assert (await client.get("/api/goals", headers=headers)).json() == []


async def test_invalid_user_id_rejected(client, ada):
    _, headers = ada
    res = await client.get("/api/goals/1.5", headers=headers)
    assert res.status_code == 400


async def test_delete_goal(client, ada):
    _, headers = ada
    goal = (await client.post("/api/goals", json={
        "description": "Ace finals", "targetScore": 90, "deadline": "2024-06-30",
    }, headers=headers)).json()
    res = await client.delete(f"/api/goals/{goal['id']}", headers=headers)
    assert res.status_code == 204
    assert (await client.get("/api/goals", headers=headers)).json() == []
