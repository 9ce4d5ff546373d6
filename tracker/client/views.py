"""Views: per-page state loaders for subjects, scores, goals, dashboard and analytics.

Invariants:
    - load() fetches independent lists concurrently and joins before updating state
    - loading is True only while load() runs; error holds an inline message or None
    - submit() appends the created record to local state only on success
    - remove() drops the record from local state only after the server confirmed
    - SessionExpiredError is never swallowed: a 401 always reaches the caller
    - In-flight fetches are not cancelled when a view is discarded

Design Decisions:
    - Views take an ApiClient, never a token: the SessionContext lives in the client
"""

import asyncio
import logging
from typing import Any

from tracker.client.api_client import ApiClient, ApiError, SessionExpiredError
from tracker.core import analytics

logger = logging.getLogger(__name__)


class ListView:
    """Shared load/submit/remove state machine for one resource list."""

    load_error = "Failed to load data. Please try again."

    def __init__(self, api: ApiClient):
        self.api = api
        self.items: list[dict[str, Any]] = []
        self.loading = False
        self.error: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.items

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            await self._fetch()
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.error(f"{type(self).__name__} load failed: {e.message}")
            self.error = self.load_error
        finally:
            self.loading = False

    async def submit(self, **fields: Any) -> dict[str, Any] | None:
        """Create a record; returns it, or None with self.error set."""
        self.error = None
        try:
            created = await self._create(**fields)
        except SessionExpiredError:
            raise
        except ApiError as e:
            self.error = e.message
            return None
        self.items.append(created)
        return created

    async def remove(self, record_id: int) -> bool:
        self.error = None
        try:
            await self._delete(record_id)
        except SessionExpiredError:
            raise
        except ApiError as e:
            self.error = e.message
            return False
        self.items = [item for item in self.items if item["id"] != record_id]
        return True

    async def _fetch(self) -> None:
        raise NotImplementedError

    async def _create(self, **fields: Any) -> dict[str, Any]:
        raise NotImplementedError

    async def _delete(self, record_id: int) -> None:
        raise NotImplementedError


class SubjectsView(ListView):
    async def _fetch(self) -> None:
        self.items = await self.api.list_subjects()

    async def _create(self, name: str) -> dict[str, Any]:
        return await self.api.create_subject(name)

    async def _delete(self, record_id: int) -> None:
        await self.api.delete_subject(record_id)


class GoalsView(ListView):
    async def _fetch(self) -> None:
        self.items = await self.api.list_goals()

    async def _create(self, description: str, target_score, deadline) -> dict[str, Any]:
        return await self.api.create_goal(description, target_score, deadline)

    async def _delete(self, record_id: int) -> None:
        await self.api.delete_goal(record_id)


class ScoresView(ListView):
    """Scores list plus the subjects offered in the score form."""

    def __init__(self, api: ApiClient):
        super().__init__(api)
        self.subjects: list[dict[str, Any]] = []

    async def _fetch(self) -> None:
        self.items, self.subjects = await asyncio.gather(
            self.api.list_scores(), self.api.list_subjects(),
        )

    async def _create(
        self, value, assignment_name: str, score_date, subject_id: int,
    ) -> dict[str, Any]:
        return await self.api.create_score(value, assignment_name, score_date, subject_id)

    async def _delete(self, record_id: int) -> None:
        await self.api.delete_score(record_id)


class DashboardView:
    """Subjects, scores and goals side by side, with chart series."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.subjects: list[dict[str, Any]] = []
        self.scores: list[dict[str, Any]] = []
        self.goals: list[dict[str, Any]] = []
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.subjects, self.scores, self.goals = await asyncio.gather(
                self.api.list_subjects(),
                self.api.list_scores(),
                self.api.list_goals(),
            )
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.error(f"Dashboard load failed: {e.message}")
            self.error = "Failed to load data. Please try again."
        finally:
            self.loading = False

    @property
    def is_empty(self) -> bool:
        return not (self.subjects or self.scores or self.goals)

    @property
    def score_chart(self) -> list[dict[str, Any]]:
        return analytics.score_series(self.scores)

    @property
    def subject_averages(self) -> list[dict[str, Any]]:
        return analytics.average_by_subject(self.subjects, self.scores)

    @property
    def recent_goals(self) -> list[dict[str, Any]]:
        return analytics.recent_goals(self.goals)


class AnalyticsView:
    """Per-subject averages and the score trend of one selected subject."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.subjects: list[dict[str, Any]] = []
        self.scores: list[dict[str, Any]] = []
        self.selected_subject_id: int | None = None
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.scores, self.subjects = await asyncio.gather(
                self.api.list_scores(), self.api.list_subjects(),
            )
            self.selected_subject_id = analytics.default_subject_id(self.subjects)
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.error(f"Analytics load failed: {e.message}")
            self.error = "Failed to load analytics data. Please try again later."
        finally:
            self.loading = False

    def select_subject(self, subject_id: int) -> None:
        self.selected_subject_id = subject_id

    @property
    def subject_averages(self) -> list[dict[str, Any]]:
        return analytics.average_by_subject(self.subjects, self.scores)

    @property
    def trend(self) -> list[dict[str, Any]]:
        return analytics.score_trend(self.scores, self.selected_subject_id)
