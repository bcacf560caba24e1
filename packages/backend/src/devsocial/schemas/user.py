"""Pydantic schemas for registration, login and user reads.

Learn: Fields default to "" with validate_default=True so a missing
field runs through the same "before" validator as an empty one and
produces our message instead of pydantic's "Field required".
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from devsocial.schemas.validators import min_length, required, valid_email

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    name: str = Field("", validate_default=True, max_length=100)
    email: str = Field("", validate_default=True)
    password: str = Field("", validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, v):
        return required(v, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def _email_valid(cls, v):
        return valid_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password_length(cls, v):
        return min_length(
            v,
            MIN_PASSWORD_LENGTH,
            f"Password must have {MIN_PASSWORD_LENGTH} or more characters",
        )


class LoginRequest(BaseModel):
    email: str = Field("", validate_default=True)
    password: str = Field("", validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _email_valid(cls, v):
        return valid_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password_required(cls, v):
        return required(v, "Password is required")


class TokenResponse(BaseModel):
    token: str


class UserRead(BaseModel):
    """A user as returned to clients - never includes the password hash."""
    id: uuid.UUID
    name: str
    email: str
    avatar: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    msg: str
