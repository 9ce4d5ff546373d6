"""Session Context: the single holder of the client's bearer token.

Invariants:
    - token and user are set together (login/register) and cleared together
    - clear() is the only way a session ends (explicit logout or a 401)
    - When a token_path is configured, the file mirrors the in-memory token

Design Decisions:
    - Injected into ApiClient rather than read from global storage by each view
    - user_id decoded from the token without verification: the client only needs
      the claim, the server verifies the signature
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jwt

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    token: str | None = None
    user: dict[str, Any] | None = None
    token_path: Path | None = field(default=None, repr=False)

    @classmethod
    def start(cls, token_path: Path | str | None = None) -> "SessionContext":
        """Initialize at app start, restoring a persisted token when present."""
        path = Path(token_path) if token_path else None
        session = cls(token_path=path)
        if path and path.exists():
            token = path.read_text(encoding="utf-8").strip()
            session.token = token or None
            logger.info("Restored session token from disk")
        return session

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def user_id(self) -> int | None:
        if self.user and "id" in self.user:
            return int(self.user["id"])
        if not self.token:
            return None
        try:
            claims = jwt.decode(self.token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            logger.warning("Stored token could not be decoded")
            return None
        user_id = claims.get("userId", claims.get("sub"))
        return int(user_id) if user_id is not None else None

    def set(self, token: str, user: dict[str, Any] | None = None) -> None:
        self.token = token
        self.user = user
        if self.token_path:
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            self.token_path.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.token_path and self.token_path.exists():
            self.token_path.unlink()
