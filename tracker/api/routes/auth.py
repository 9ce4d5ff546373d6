"""Auth Routes: register and login.

Invariants:
    - Both endpoints return {user: {id, name, email}, token}
    - Missing fields rejected by Pydantic before reaching the handler (400)
    - Failures logged without the submitted password or email
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import Settings, get_settings
from tracker.infrastructure.database import get_db
from tracker.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from tracker.services.auth_service import AuthService
from tracker.services.storage import UserStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])


def _auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(UserStore(db), settings)


@router.post("/register", response_model=AuthResponse)
async def register(
    body: RegisterRequest, service: AuthService = Depends(_auth_service),
):
    """Create an account and return a bearer token for it."""
    logger.info("Registration requested")
    return await service.register(body.name, body.email, body.password)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest, service: AuthService = Depends(_auth_service),
):
    """Exchange credentials for a bearer token."""
    logger.info("Login requested")
    return await service.login(body.email, body.password)
