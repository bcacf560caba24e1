"""Auth service - registration and login orchestration.

Learn: Ties the credential store (UserService), the password hasher and
the token issuer together. Both failure paths of login raise the same
"Invalid Credentials" error, so a caller can't tell an unknown email
from a wrong password.
"""

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.auth.jwt import create_access_token
from devsocial.auth.password import hash_password, verify_password
from devsocial.config import Settings
from devsocial.errors import ValidationError
from devsocial.services.user_service import UserService

logger = structlog.get_logger(__name__)

USER_EXISTS_MESSAGE = "User already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid Credentials"


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.users = UserService(db)

    def issue_token(self, user_id) -> str:
        return create_access_token(
            str(user_id),
            secret=self.settings.jwt_secret,
            expires_seconds=self.settings.token_expire_seconds,
            algorithm=self.settings.jwt_algorithm,
        )

    async def register(self, name: str, email: str, password: str) -> str:
        """Create a user and return a token for them."""
        if await self.users.get_by_email(email):
            raise ValidationError(USER_EXISTS_MESSAGE)

        password_hash = hash_password(password, rounds=self.settings.bcrypt_rounds)
        try:
            user = await self.users.create(
                name=name, email=email, password_hash=password_hash
            )
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email.
            await self.db.rollback()
            raise ValidationError(USER_EXISTS_MESSAGE)
        logger.info("auth.registered", user_id=str(user.id))
        return self.issue_token(user.id)

    async def login(self, email: str, password: str) -> str:
        user = await self.users.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", known_email=user is not None)
            raise ValidationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("auth.login", user_id=str(user.id))
        return self.issue_token(user.id)
