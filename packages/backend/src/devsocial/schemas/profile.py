"""Pydantic schemas for profiles and work experience.

Learn: ProfileUpsert flattens the social links (youtube, twitter, ...)
the way the frontend form posts them; the service folds them into the
`social` JSON column. skills accepts "python, go" or ["python", "go"].
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from devsocial.schemas.user import UserBrief
from devsocial.schemas.validators import required

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileUpsert(BaseModel):
    status: str = Field("", validate_default=True, max_length=100)
    skills: list[str] = Field(default_factory=list, validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    github_username: Optional[str] = None

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_required(cls, v):
        return required(v, "Status is required")

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            v = [s.strip() for s in v if isinstance(s, str) and s.strip()]
        if not v:
            required(None, "Skills is required")
        return v

    def social_links(self) -> dict:
        return {
            net: getattr(self, net)
            for net in SOCIAL_NETWORKS
            if getattr(self, net)
        }


class ExperienceCreate(BaseModel):
    title: str = Field("", validate_default=True)
    company: str = Field("", validate_default=True)
    from_date: Optional[date] = Field(None, validate_default=True)
    to_date: Optional[date] = None
    current: bool = False
    location: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, v):
        return required(v, "Title is required")

    @field_validator("company", mode="before")
    @classmethod
    def _company_required(cls, v):
        return required(v, "Company is required")

    @field_validator("from_date", mode="before")
    @classmethod
    def _from_required(cls, v):
        return required(v, "From date is required")


class ExperienceRead(BaseModel):
    id: uuid.UUID
    title: str
    company: str
    location: Optional[str] = None
    from_date: date
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    user: Optional[UserBrief] = None
    status: str
    skills: list[str] = []
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    github_username: Optional[str] = None
    social: dict[str, str] = {}
    experience: list[ExperienceRead] = []
    created_at: datetime

    model_config = {"from_attributes": True}
