"""Profile service - developer profiles and work experience.

Learn: A user edits only their own profile, so the owner is implied by
the lookup (Profile.user_id == caller) rather than checked after the
fact. Experience entries are found within that profile; someone else's
experience id is simply "not found" for the caller.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.auth.dependencies import CurrentIdentity
from devsocial.auth.ownership import found_or_404
from devsocial.db.models import Experience, Profile
from devsocial.errors import ValidationError, parse_id
from devsocial.schemas.profile import ExperienceCreate, ProfileUpsert
from devsocial.services.user_service import UserService

NO_PROFILE_MESSAGE = "There is no profile for this user"


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_user(self, user_id: str | uuid.UUID) -> Optional[Profile]:
        result = await self.db.execute(
            select(Profile)
            .where(Profile.user_id == parse_id(user_id, "Profile"))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_mine(self, identity: CurrentIdentity) -> Profile:
        profile = await self.get_for_user(identity.user_id)
        if not profile:
            raise ValidationError(NO_PROFILE_MESSAGE)
        return profile

    async def get_by_user_id(self, user_id: str) -> Profile:
        return found_or_404(await self.get_for_user(user_id), "Profile")

    async def list_profiles(self) -> list[Profile]:
        result = await self.db.execute(
            select(Profile)
            .order_by(Profile.created_at)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def upsert(self, identity: CurrentIdentity, body: ProfileUpsert) -> Profile:
        """Create the caller's profile, or overwrite its fields if it exists."""
        fields = {
            "status": body.status,
            "skills": body.skills,
            "company": body.company,
            "website": body.website,
            "location": body.location,
            "bio": body.bio,
            "github_username": body.github_username,
            "social": body.social_links(),
        }

        profile = await self.get_for_user(identity.user_id)
        if profile:
            for key, value in fields.items():
                setattr(profile, key, value)
        else:
            user = await UserService(self.db).get_by_id(parse_id(identity.user_id, "User"))
            if not user:
                raise ValidationError("User not found")
            profile = Profile(
                user_id=user.id,
                experience=[],
                **fields,
            )
            self.db.add(profile)

        await self.db.flush()
        await self.db.refresh(profile, ["user"])
        return profile

    # ─── Experience ─────────────────────────────────────

    async def add_experience(
        self, identity: CurrentIdentity, body: ExperienceCreate
    ) -> Profile:
        profile = await self.get_mine(identity)
        profile.experience.insert(
            0,
            Experience(
                title=body.title,
                company=body.company,
                location=body.location,
                from_date=body.from_date,
                to_date=body.to_date,
                current=body.current,
                description=body.description,
            ),
        )
        await self.db.flush()
        return profile

    async def delete_experience(self, identity: CurrentIdentity, exp_id: str) -> Profile:
        profile = await self.get_mine(identity)
        wanted = parse_id(exp_id, "Experience")
        entry = found_or_404(
            next((e for e in profile.experience if e.id == wanted), None),
            "Experience",
        )
        profile.experience.remove(entry)
        await self.db.flush()
        return profile
