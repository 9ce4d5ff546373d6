"""API Client: bearer interceptor, 401 handling and error mapping.

Invariants checked:
    - register/login store the token; later requests carry it
    - A 401 clears the session and raises SessionExpiredError
    - Other errors raise ApiError with the server's message
"""

import httpx
import pytest

from tracker.client.api_client import ApiClient, ApiError, SessionExpiredError
from tracker.client.session import SessionContext


async def test_register_stores_session(api, session):
    data = await api.register("Ada", "ada@example.com", "s3cret!")
    assert session.token == data["token"]
    assert session.user_id == data["user"]["id"]


async def test_authenticated_round_trip(logged_in):
    subject = await logged_in.create_subject("Math")
    score = await logged_in.create_score("95", "Quiz", "2024-01-01", subject["id"])
    assert score["value"] == 95
    assert score["subject"]["name"] == "Math"
    assert await logged_in.list_subjects() == [subject]
    assert await logged_in.list_scores() == [score]


async def test_login_after_logout(logged_in, session):
    logged_in.logout()
    assert not session.is_authenticated
    await logged_in.login("ada@example.com", "s3cret!")
    assert session.is_authenticated


async def test_bad_credentials_raise_api_error(api, session):
    await api.register("Ada", "ada@example.com", "s3cret!")
    api.logout()
    with pytest.raises(ApiError) as exc:
        await api.login("ada@example.com", "wrong")
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid credentials"
    assert not isinstance(exc.value, SessionExpiredError)
    assert not session.is_authenticated


async def test_unauthenticated_request_clears_session(api, session):
    session.set("forged-token")
    with pytest.raises(SessionExpiredError):
        await api.list_goals()
    assert session.token is None


async def test_delete_returns_none(logged_in):
    goal = await logged_in.create_goal("Ace finals", 90, "2024-06-30")
    assert await logged_in.delete_goal(goal["id"]) is None
    assert await logged_in.list_goals() == []


async def test_bearer_header_attached():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    session = SessionContext(token="abc")
    async with ApiClient(
        session, base_url="http://test/api", transport=httpx.MockTransport(handler),
    ) as api:
        await api.list_subjects()
    assert seen["auth"] == "Bearer abc"


async def test_no_header_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json=[])

    async with ApiClient(
        SessionContext(), base_url="http://test/api", transport=httpx.MockTransport(handler),
    ) as api:
        await api.list_goals()
    assert seen == {"auth": None, "path": "/api/goals"}


async def test_non_json_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    async with ApiClient(
        SessionContext(token="abc"), base_url="http://test/api",
        transport=httpx.MockTransport(handler),
    ) as api:
        with pytest.raises(ApiError) as exc:
            await api.list_scores()
    assert exc.value.status_code == 502
    assert exc.value.message == "Bad Gateway"
