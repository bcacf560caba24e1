"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt generates a random salt
on every call and embeds it (plus the cost factor) in the "$2b$..."
string, so verification only needs the stored hash. The cost factor
comes from Settings.bcrypt_rounds (default 10). Hashing is slow on
purpose; that's the security property, so don't try to speed it up.
"""

import bcrypt

# bcrypt only looks at the first 72 bytes.
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh salt."""
    pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash (constant-time).

    A malformed or empty hash verifies as False rather than raising.
    """
    try:
        pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False
