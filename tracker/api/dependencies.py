"""Request Dependencies: authenticated identity and owner checks.

Invariants:
    - get_current_user_id is the only source of ownership for resource routes
    - Missing, malformed, badly signed or expired tokens raise TokenError (401)
    - A client-supplied userId that differs from the token's user raises ForbiddenError (403)
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tracker.config import Settings, get_settings
from tracker.core.domain_types import UserId
from tracker.core.errors import ErrorContext, ForbiddenError, TokenError
from tracker.core.validation import parse_user_id
from tracker.infrastructure.security import decode_token

_bearer = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> UserId:
    """Decode the bearer token into the requesting user's id."""
    if credentials is None or not credentials.credentials:
        raise TokenError()
    return decode_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )


def ensure_owner(
    claimed: str | int | None, current_user_id: UserId, resource: str,
) -> UserId:
    """Reconcile a client-supplied userId with the authenticated one.

    Absent claims fall back to the token's user. Present claims must parse as an
    integer and match it.
    """
    if claimed is None:
        return current_user_id
    user_id = parse_user_id(claimed)
    if user_id != current_user_id:
        raise ForbiddenError(
            ErrorContext(user_id=current_user_id, resource=resource),
        )
    return user_id
