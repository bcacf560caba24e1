"""Ownership guard for mutating operations.

Learn: Every delete/update on a user-owned record goes through two
checks, always in this order:

1. found_or_404 - the record exists (else 404 "<What> not found")
2. ensure_owner - the caller owns it (else 401 "User not authorized")

Owner ids reach us as uuid.UUID from the ORM and as str from the token,
so both sides are normalised before comparing.
"""

import uuid
from typing import Optional, TypeVar

from devsocial.auth.dependencies import CurrentIdentity
from devsocial.errors import AuthorizationError, NotFoundError

T = TypeVar("T")


def canonical_id(value) -> str:
    """Render an identifier in one canonical form.

    UUIDs (objects or strings in any accepted spelling) become the
    lower-case hyphenated form. Anything else is compared as str.
    """
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return str(value)


def authorize(identity: CurrentIdentity, owner_id) -> bool:
    """True if the identity owns a record whose owner is owner_id."""
    if identity is None or owner_id is None:
        return False
    return canonical_id(identity.user_id) == canonical_id(owner_id)


def ensure_owner(identity: CurrentIdentity, owner_id) -> None:
    if not authorize(identity, owner_id):
        raise AuthorizationError()


def found_or_404(resource: Optional[T], what: str) -> T:
    """Return the resource, or raise NotFoundError("<what> not found")."""
    if resource is None:
        raise NotFoundError(f"{what} not found")
    return resource
