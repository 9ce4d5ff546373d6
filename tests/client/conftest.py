"""Client fixtures: ApiClient talking to the ASGI app in-process."""

import pytest
from httpx import ASGITransport

from tracker.client.api_client import ApiClient
from tracker.client.session import SessionContext


@pytest.fixture
def session(tmp_path):
    return SessionContext.start(tmp_path / "token")


@pytest.fixture
async def api(asgi_app, session):
    async with ApiClient(
        session, base_url="http://test/api", transport=ASGITransport(app=asgi_app),
    ) as client:
        yield client


@pytest.fixture
async def logged_in(api):
    await api.register("Ada", "ada@example.com", "s3cret!")
    return api
