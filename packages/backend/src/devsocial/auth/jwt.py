"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The
server keeps nothing per session; a token is valid as long as the
signature checks out and `exp` is in the future.

Claims:
- sub: the user id (the only identity claim)
- iat: issued-at
- exp: iat + Settings.token_expire_seconds

The secret and TTL are passed in explicitly by the caller.
"""

from datetime import datetime, timedelta, timezone

import jwt


class TokenError(Exception):
    """Raised when token creation/verification fails."""


def create_access_token(
    user_id: str,
    *,
    secret: str,
    expires_seconds: int,
    algorithm: str = "HS256",
) -> str:
    """Create a signed access token for user_id."""
    if not secret:
        raise TokenError("Signing secret is not configured")
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=expires_seconds),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, *, secret: str, algorithm: str = "HS256") -> str:
    """Verify a token and return the user id it was issued for.

    Raises TokenError on a bad signature, expiry, malformed input or a
    missing subject. The message says which; callers must not forward
    it to clients.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        raise TokenError("Token has no subject")
    return user_id
