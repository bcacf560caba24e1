"""User registration route.

- POST /users → validate → reject duplicate email → hash → persist → token
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.config import Settings, get_settings
from devsocial.db.engine import get_db
from devsocial.schemas.user import RegisterRequest, TokenResponse
from devsocial.services.auth_service import AuthService

router = APIRouter(prefix="/users")


@router.post("", response_model=TokenResponse)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register a user and log them straight in."""
    token = await AuthService(db, settings).register(
        name=body.name, email=body.email, password=body.password
    )
    await db.commit()
    return TokenResponse(token=token)
