"""Post API routes - every route here requires a token.

Learn: Routes handle HTTP concerns (bodies, status codes, commit);
PostService does the lookups and the ownership checks.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devsocial.auth.dependencies import CurrentIdentity, get_current_user
from devsocial.db.engine import get_db
from devsocial.schemas.post import CommentRead, LikeRead, PostRead, TextBody
from devsocial.schemas.user import MessageResponse
from devsocial.services.post_service import PostService

router = APIRouter(prefix="/posts")


def _svc(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


# ─── Posts ──────────────────────────────────────────────

@router.post("", response_model=PostRead)
async def create_post(
    body: TextBody,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = await svc.create_post(identity, body.text)
    await svc.db.commit()
    return post


@router.get("", response_model=list[PostRead])
async def list_posts(svc: PostService = Depends(_svc)):
    """All posts, newest first."""
    return await svc.list_posts()


@router.get("/{post_id}", response_model=PostRead)
async def get_post(post_id: str, svc: PostService = Depends(_svc)):
    return await svc.get_post(post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    await svc.delete_post(identity, post_id)
    await svc.db.commit()
    return MessageResponse(msg="Post removed")


# ─── Likes ──────────────────────────────────────────────

@router.put("/like/{post_id}", response_model=list[LikeRead])
async def like_post(
    post_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    likes = await svc.like(identity, post_id)
    await svc.db.commit()
    return likes


@router.put("/unlike/{post_id}", response_model=list[LikeRead])
async def unlike_post(
    post_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    likes = await svc.unlike(identity, post_id)
    await svc.db.commit()
    return likes


# ─── Comments ───────────────────────────────────────────

@router.post("/comment/{post_id}", response_model=list[CommentRead])
async def add_comment(
    post_id: str,
    body: TextBody,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    comments = await svc.add_comment(identity, post_id, body.text)
    await svc.db.commit()
    return comments


@router.delete("/comment/{post_id}/{comment_id}", response_model=list[CommentRead])
async def delete_comment(
    post_id: str,
    comment_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    """Delete a comment. Post must exist, then the comment, then it must be yours."""
    comments = await svc.delete_comment(identity, post_id, comment_id)
    await svc.db.commit()
    return comments
