"""Shared field validators with client-facing messages.

Learn: PydanticCustomError keeps our message verbatim in
RequestValidationError.errors() (a plain ValueError would be prefixed
with "Value error, "). The 400 handler in main.py forwards these
messages to the client as {"errors": [{"msg", "param"}]}.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic_core import PydanticCustomError


def required(value, message: str):
    """Reject None and blank strings."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", message)
    return value


def valid_email(value, message: str = "Please include a valid email") -> str:
    if not isinstance(value, str):
        raise PydanticCustomError("email", message)
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email", message)
    return value.strip().lower()


def min_length(value, length: int, message: str):
    if not isinstance(value, str) or len(value) < length:
        raise PydanticCustomError("min_length", message)
    return value
