"""Pydantic schemas for posts, likes and comments."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from devsocial.schemas.validators import required


class TextBody(BaseModel):
    """Body for creating a post or a comment."""
    text: str = Field("", validate_default=True)

    @field_validator("text", mode="before")
    @classmethod
    def _text_required(cls, v):
        return required(v, "Text is required")


class LikeRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PostRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: list[LikeRead] = []
    comments: list[CommentRead] = []
    created_at: datetime

    model_config = {"from_attributes": True}
