"""Post service - posts, likes and comments.

Learn: Every mutating method takes the caller's CurrentIdentity and runs
the same sequence: load → found_or_404 → (ensure_owner) → mutate → flush.
Existence is always checked before ownership, so a missing record is a
404 for everyone and an existing one is a 401 for non-owners.

Ids arrive from the URL as strings; parse_id turns a malformed one into
the same 404 as an unknown one. Reads use populate_existing so a post
already in the session never shows likes or comments deleted in bulk.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.auth.dependencies import CurrentIdentity
from devsocial.auth.ownership import authorize, ensure_owner, found_or_404
from devsocial.db.models import Comment, Like, Post, User
from devsocial.errors import ValidationError, parse_id

logger = structlog.get_logger(__name__)


class PostService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _author(self, identity: CurrentIdentity) -> User:
        user = await self.db.get(User, parse_id(identity.user_id, "User"))
        if not user:
            raise ValidationError("User not found")
        return user

    async def _get_post(self, post_id: str) -> Optional[Post]:
        return await self.db.get(
            Post, parse_id(post_id, "Post"), populate_existing=True
        )

    # ─── Posts ──────────────────────────────────────────

    async def create_post(self, identity: CurrentIdentity, text: str) -> Post:
        user = await self._author(identity)
        post = Post(
            user_id=user.id,
            text=text,
            name=user.name,
            avatar=user.avatar,
            likes=[],
            comments=[],
        )
        self.db.add(post)
        await self.db.flush()
        return post

    async def list_posts(self) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .order_by(Post.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_post(self, post_id: str) -> Post:
        return found_or_404(await self._get_post(post_id), "Post")

    async def delete_post(self, identity: CurrentIdentity, post_id: str) -> None:
        post = found_or_404(await self._get_post(post_id), "Post")
        ensure_owner(identity, post.user_id)
        await self.db.delete(post)
        await self.db.flush()
        logger.info("posts.deleted", post_id=str(post.id), user_id=identity.user_id)

    # ─── Likes ──────────────────────────────────────────

    async def like(self, identity: CurrentIdentity, post_id: str) -> list[Like]:
        user = await self._author(identity)
        post = found_or_404(await self._get_post(post_id), "Post")
        if any(authorize(identity, like.user_id) for like in post.likes):
            raise ValidationError("Post already liked")

        # Newest first, same as the relationship ordering.
        post.likes.insert(0, Like(user_id=user.id))
        await self.db.flush()
        return post.likes

    async def unlike(self, identity: CurrentIdentity, post_id: str) -> list[Like]:
        await self._author(identity)
        post = found_or_404(await self._get_post(post_id), "Post")
        mine = next(
            (like for like in post.likes if authorize(identity, like.user_id)),
            None,
        )
        if mine is None:
            raise ValidationError("Post has not been liked")

        post.likes.remove(mine)
        await self.db.flush()
        return post.likes

    # ─── Comments ───────────────────────────────────────

    async def add_comment(
        self, identity: CurrentIdentity, post_id: str, text: str
    ) -> list[Comment]:
        user = await self._author(identity)
        post = found_or_404(await self._get_post(post_id), "Post")

        comment = Comment(
            user_id=user.id,
            text=text,
            name=user.name,
            avatar=user.avatar,
        )
        post.comments.insert(0, comment)
        await self.db.flush()
        return post.comments

    async def delete_comment(
        self, identity: CurrentIdentity, post_id: str, comment_id: str
    ) -> list[Comment]:
        post = found_or_404(await self._get_post(post_id), "Post")

        wanted = parse_id(comment_id, "Comment")
        comment = found_or_404(
            next((c for c in post.comments if c.id == wanted), None),
            "Comment",
        )
        ensure_owner(identity, comment.user_id)

        post.comments.remove(comment)
        await self.db.flush()
        return post.comments
