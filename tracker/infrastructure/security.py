"""Security Primitives: password hashing and bearer-token signing.

Invariants:
    - Passwords stored only as werkzeug salted hashes (scrypt/pbkdf2 per werkzeug default)
    - Tokens are JWTs signed with settings.jwt_secret; "sub" holds the user id as a string
    - exp claim present only when a TTL is configured
    - decode_token raises TokenError for any invalid/expired/malformed token

Design Decisions:
    - PyJWT over a hand-rolled HMAC envelope: standard claims and exp validation
    - userId claim kept alongside sub for clients that decode the token themselves
"""

from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from tracker.core.domain_types import UserId
from tracker.core.errors import TokenError


def hash_password(raw: str) -> str:
    return generate_password_hash(raw)


def verify_password(stored_hash: str, provided: str) -> bool:
    if not stored_hash:
        return False
    return check_password_hash(stored_hash, provided)


def issue_token(
    user_id: int,
    secret: str,
    algorithm: str = "HS256",
    ttl_minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    """Sign a bearer token for user_id."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "userId": user_id, "iat": issued_at}
    if ttl_minutes is not None:
        payload["exp"] = issued_at + timedelta(minutes=ttl_minutes)
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> UserId:
    """Verify token signature (and expiry when present) and return its user id."""
    try:
        payload = jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token expired")
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")
    try:
        return UserId(int(payload["sub"]))
    except (TypeError, ValueError):
        raise TokenError("Invalid token subject")
