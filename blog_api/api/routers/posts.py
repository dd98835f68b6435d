# blog_api/api/routers/posts.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from blog_api.core.config import settings
from blog_api.core.auth import get_current_user_dependency
from blog_api.db.session import get_session
from blog_api.schemas.auth import TokenUser
from blog_api.schemas.post import MessageResponse, PostCreate, PostPublic, PostUpdate
from blog_api.services.post_service import post_service
from blog_api.api.deps import list_params

router = APIRouter()


@router.post("", response_model=PostPublic, status_code=status.HTTP_201_CREATED)
async def create_post(
    *,
    session: AsyncSession = Depends(get_session),
    post_in: PostCreate,
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Create a new post owned by the current user.

    For posts with an image, upload it first through `/upload` and send the
    returned URL as `imageUrl`.
    """
    return await post_service.create_post(session, post_in=post_in, current_user=current_user)


@router.get("", response_model=List[PostPublic])
async def read_posts(
    *,
    session: AsyncSession = Depends(get_session),
    params: list_params = Depends(),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    List every post with its author name, like and comment counts.
    `search` filters title/content (case-insensitive), `orderBy=oldest` flips the order.
    """
    return await post_service.list_posts(session, search=params.search, newest_first=params.newest_first)


@router.get("/{post_id}", response_model=PostPublic)
async def read_post(
    *,
    post_id: str,
    session: AsyncSession = Depends(get_session),
):
    """
    Get a single post by its ID.
    """
    return await post_service.get_post(session, post_id)


@router.put("/{post_id}", response_model=PostPublic)
async def update_post(
    *,
    post_id: str,
    post_in: PostUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Update a post. Only the post author can edit.
    """
    return await post_service.update_post(session, post_id=post_id, post_in=post_in, current_user=current_user)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    *,
    session: AsyncSession = Depends(get_session),
    post_id: str,
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Delete a post, its comments and every like on them. Only the post author can delete.
    """
    await post_service.delete_post(session, post_id=post_id, current_user=current_user)
    return MessageResponse(message="Post deleted")
