"""Auth API - login and current user.

Learn: Mirrors the classic Express layout where /api/auth serves both:
- GET /auth → the authenticated user (protected)
- POST /auth → email/password → token (public)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.auth.dependencies import CurrentIdentity, get_current_user
from devsocial.auth.ownership import found_or_404
from devsocial.config import Settings, get_settings
from devsocial.db.engine import get_db
from devsocial.errors import parse_id
from devsocial.schemas.user import LoginRequest, TokenResponse, UserRead
from devsocial.services.auth_service import AuthService
from devsocial.services.user_service import UserService

router = APIRouter(prefix="/auth")


@router.get("", response_model=UserRead)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user (without the password hash)."""
    user = await UserService(db).get_by_id(parse_id(identity.user_id, "User"))
    return found_or_404(user, "User")


@router.post("", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Login with email and password → token."""
    token = await AuthService(db, settings).login(email=body.email, password=body.password)
    return TokenResponse(token=token)
