"""Profile API routes.

Learn: Reads of other people's profiles are public; everything that
touches "my" profile resolves the owner from the token.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.auth.dependencies import CurrentIdentity, get_current_user
from devsocial.db.engine import get_db
from devsocial.errors import parse_id
from devsocial.schemas.profile import ExperienceCreate, ProfileRead, ProfileUpsert
from devsocial.schemas.user import MessageResponse
from devsocial.services.profile_service import ProfileService
from devsocial.services.user_service import UserService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/profile")


def _svc(db: AsyncSession = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


@router.get("/me", response_model=ProfileRead)
async def get_my_profile(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProfileService = Depends(_svc),
):
    return await svc.get_mine(identity)


@router.post("", response_model=ProfileRead)
async def upsert_profile(
    body: ProfileUpsert,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProfileService = Depends(_svc),
):
    """Create or update the caller's profile."""
    profile = await svc.upsert(identity, body)
    await svc.db.commit()
    return profile


@router.get("", response_model=list[ProfileRead])
async def list_profiles(svc: ProfileService = Depends(_svc)):
    return await svc.list_profiles()


@router.get("/user/{user_id}", response_model=ProfileRead)
async def get_profile_by_user(user_id: str, svc: ProfileService = Depends(_svc)):
    return await svc.get_by_user_id(user_id)


@router.delete("", response_model=MessageResponse)
async def delete_account(
    identity: CurrentIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete the caller's posts, profile and user account."""
    await UserService(db).delete_account(parse_id(identity.user_id, "User"))
    await db.commit()
    logger.info("profile.account_deleted", user_id=identity.user_id)
    return MessageResponse(msg="User deleted")


# ─── Experience ─────────────────────────────────────────

@router.put("/experience", response_model=ProfileRead)
async def add_experience(
    body: ExperienceCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProfileService = Depends(_svc),
):
    profile = await svc.add_experience(identity, body)
    await svc.db.commit()
    return profile


@router.delete("/experience/{exp_id}", response_model=ProfileRead)
async def delete_experience(
    exp_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProfileService = Depends(_svc),
):
    profile = await svc.delete_experience(identity, exp_id)
    await svc.db.commit()
    return profile
