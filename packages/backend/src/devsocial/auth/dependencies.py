"""FastAPI auth dependencies.

Learn: get_current_user is the token verifier for protected routes.
It's attached per-router in api/__init__.py (or per-route via Depends),
so handlers only ever run with a verified identity.

    no x-auth-token        → 401 "No token, authorization denied"
    token fails to verify  → 401 "Token is not valid"
    token verifies         → CurrentIdentity(user_id) → handler

Expired, forged and malformed tokens all get the same message. The
actual reason is only logged. The user store is never consulted here;
the signature alone is trusted.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header

from devsocial.auth.jwt import TokenError, verify_token
from devsocial.config import Settings, get_settings
from devsocial.errors import AuthenticationError

logger = structlog.get_logger(__name__)

NO_TOKEN_MESSAGE = "No token, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid"


class CurrentIdentity:
    """The authenticated caller, valid for one request."""

    def __init__(self, user_id: str):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id!r})"


async def get_current_user(
    x_auth_token: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> CurrentIdentity:
    """Verify the x-auth-token header (required - 401 if absent or invalid)."""
    if not x_auth_token:
        raise AuthenticationError(NO_TOKEN_MESSAGE)

    try:
        user_id = verify_token(
            x_auth_token,
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
    except TokenError as e:
        logger.info("auth.token_rejected", reason=str(e))
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    return CurrentIdentity(user_id=user_id)
