"""API Client: httpx wrapper that speaks the tracker JSON API.

Invariants:
    - Every outgoing request carries "Authorization: Bearer <token>" when the session has one
    - A 401 response clears the session and raises SessionExpiredError
    - Any other 4xx/5xx raises ApiError with the server's message
    - register/login store the returned token in the session

Design Decisions:
    - httpx.Auth for the outgoing interceptor: reads the token per request, so a
      login mid-session takes effect immediately
    - Response event hook for the 401 interceptor: runs before callers see the response
"""

import logging
from datetime import date
from typing import Any

import httpx

from tracker.client.session import SessionContext
from tracker.config import get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, code: str | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code
        self.details = details

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            return cls(response.status_code, response.text or response.reason_phrase)
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            return cls(
                response.status_code,
                error.get("message", "Request failed"),
                error.get("code"),
                error.get("details"),
            )
        return cls(response.status_code, str(error or body))


class SessionExpiredError(ApiError):
    """401 from the API; the session has already been cleared."""


class BearerAuth(httpx.Auth):
    """Attach the session's bearer token to outgoing requests."""

    def __init__(self, session: SessionContext):
        self.session = session

    def auth_flow(self, request: httpx.Request):
        if self.session.token:
            request.headers["Authorization"] = f"Bearer {self.session.token}"
        yield request


class ApiClient:
    """Async client for /api. Use as an async context manager or call aclose()."""

    def __init__(
        self,
        session: SessionContext,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=base_url or get_settings().api_base_url,
            auth=BearerAuth(session),
            event_hooks={"response": [self._on_response]},
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _on_response(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            await response.aread()
            self.session.clear()
            logger.warning(f"Session invalidated by 401 on {response.request.url.path}")
            error = ApiError.from_response(response)
            raise SessionExpiredError(401, error.message, error.code)

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = await self._client.request(method, path, json=json)
        if response.is_error:
            error = ApiError.from_response(response)
            logger.warning(f"{method} {path} failed ({response.status_code}): {error.message}")
            raise error
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ─── Auth ────────────────────────────────────────────────────

    async def register(self, name: str, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/register",
            {"name": name, "email": email, "password": password},
        )
        self.session.set(data["token"], data["user"])
        return data

    async def login(self, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/login", {"email": email, "password": password},
        )
        self.session.set(data["token"], data["user"])
        return data

    def logout(self) -> None:
        self.session.clear()

    # ─── Resources ───────────────────────────────────────────────

    async def list_subjects(self) -> list[dict]:
        return await self._request("GET", "/subjects")

    async def create_subject(self, name: str) -> dict:
        return await self._request("POST", "/subjects", {"name": name})

    async def delete_subject(self, subject_id: int) -> None:
        await self._request("DELETE", f"/subjects/{subject_id}")

    async def list_scores(self) -> list[dict]:
        return await self._request("GET", "/scores")

    async def create_score(
        self, value: float | str, assignment_name: str,
        score_date: date | str, subject_id: int,
    ) -> dict:
        return await self._request("POST", "/scores", {
            "value": value,
            "assignmentName": assignment_name,
            "date": _iso(score_date),
            "subjectId": subject_id,
        })

    async def delete_score(self, score_id: int) -> None:
        await self._request("DELETE", f"/scores/{score_id}")

    async def list_goals(self) -> list[dict]:
        return await self._request("GET", "/goals")

    async def create_goal(
        self, description: str, target_score: float | str, deadline: date | str,
    ) -> dict:
        return await self._request("POST", "/goals", {
            "description": description,
            "targetScore": target_score,
            "deadline": _iso(deadline),
        })

    async def delete_goal(self, goal_id: int) -> None:
        await self._request("DELETE", f"/goals/{goal_id}")


def _iso(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value
