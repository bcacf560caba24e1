"""User service - the credential store.

Learn: Service layer separates business logic from HTTP routing.
This is the only place that reads or writes the users table; the auth
service and the routes go through it.
"""

import hashlib
import uuid
from typing import Optional
from urllib.parse import urlencode

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.db.models import Comment, Experience, Like, Post, Profile, User

GRAVATAR_URL = "https://www.gravatar.com/avatar/"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Gravatar image URL for an email (falls back to the mystery-man image)."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_URL}{digest}?{query}"


class UserService:
    """Lookup and persistence for user records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalars().first()

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """Persist a new user. Callers check email uniqueness first."""
        email = email.strip().lower()
        user = User(
            name=name.strip(),
            email=email,
            password_hash=password_hash,
            avatar=gravatar_url(email),
        )
        self.db.add(user)
        await self.db.flush()
        return user

    async def delete_account(self, user_id: uuid.UUID) -> None:
        """Remove a user with their posts, profile, likes and comments.

        Learn: bulk deletes skip ORM cascades, so children go first and
        nothing relies on the database enforcing ON DELETE CASCADE.
        """
        own_posts = select(Post.id).where(Post.user_id == user_id)
        own_profile = select(Profile.id).where(Profile.user_id == user_id)

        await self.db.execute(
            delete(Like).where(or_(Like.user_id == user_id, Like.post_id.in_(own_posts)))
        )
        await self.db.execute(
            delete(Comment).where(
                or_(Comment.user_id == user_id, Comment.post_id.in_(own_posts))
            )
        )
        await self.db.execute(delete(Post).where(Post.user_id == user_id))
        await self.db.execute(
            delete(Experience).where(Experience.profile_id.in_(own_profile))
        )
        await self.db.execute(delete(Profile).where(Profile.user_id == user_id))
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.flush()
        # Loaded parents (other users' posts) may still hold deleted likes.
        self.db.expire_all()
