"""Application error taxonomy.

Learn: Services and auth code raise these instead of HTTPException so the
business layer stays HTTP-agnostic. main.py registers one exception
handler for AppError that renders status + body. Client-visible messages
are deliberately terse; the detail goes to the server log.

Body shapes:
- 400 → {"errors": [{"msg": ..., "param": ...}]}
- 401 / 404 → {"msg": ...}
- 500 → {"errors": [{"msg": "Server Error"}]}
"""

import uuid
from typing import Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    message = "Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"msg": self.message}


class ValidationError(AppError):
    """400 - invalid input or a business rule violation."""

    status_code = 400
    message = "Invalid request"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.errors = errors or [{"msg": self.message}]

    def to_body(self) -> dict:
        return {"errors": self.errors}


class AuthenticationError(AppError):
    """401 - missing or invalid token. Never says why."""

    status_code = 401
    message = "Token is not valid"


class AuthorizationError(AppError):
    """401 - authenticated, but not the owner of the resource."""

    status_code = 401
    message = "User not authorized"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class InvalidIdentifierError(NotFoundError):
    """A path identifier that can't belong to any stored record.

    Treated as "not found" so malformed and unknown ids look the same
    to clients.
    """


class UnexpectedError(AppError):
    status_code = 500

    def to_body(self) -> dict:
        return {"errors": [{"msg": self.message}]}


def parse_id(raw: str | uuid.UUID, what: str) -> uuid.UUID:
    """Parse a record identifier or raise InvalidIdentifierError("<what> not found")."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifierError(f"{what} not found")
