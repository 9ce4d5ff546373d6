"""Auth Service: registration and login on top of UserStore and security primitives.

Invariants:
    - Plaintext passwords never reach the store
    - Registration with a used email raises ConflictError; exactly one row survives
    - Unknown email and wrong password are indistinguishable to the caller (AuthError)
    - register and login return the same {user, token} shape
"""

import logging

from tracker.config import Settings
from tracker.core.errors import AuthError, ConflictError
from tracker.core.repository_protocols import UserRepository
from tracker.infrastructure.security import hash_password, issue_token, verify_password
from tracker.schemas.auth import AuthResponse, UserPublic

logger = logging.getLogger(__name__)


class AuthService:
    """Registers users and issues bearer tokens."""

    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.settings = settings

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        if await self.users.get_by_email(email) is not None:
            logger.warning("Registration rejected: email already in use")
            raise ConflictError()
        user = await self.users.create(name, email, hash_password(password))
        logger.info("User registered", extra={"user_id": user.id})
        return self._auth_response(user)

    async def login(self, email: str, password: str) -> AuthResponse:
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(user.password, password):
            logger.warning("Login rejected: invalid credentials")
            raise AuthError()
        logger.info("User logged in", extra={"user_id": user.id})
        return self._auth_response(user)

    def _auth_response(self, user) -> AuthResponse:
        token = issue_token(
            user.id,
            self.settings.jwt_secret,
            self.settings.jwt_algorithm,
            self.settings.token_ttl_minutes,
        )
        return AuthResponse(user=UserPublic.model_validate(user), token=token)
