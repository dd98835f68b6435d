# blog_api/api/routers/comments.py
from fastapi import APIRouter, Depends, Query, status
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.session import get_session
from blog_api.core.auth import get_current_user_dependency
from blog_api.core.config import settings
from blog_api.schemas.auth import TokenUser
from blog_api.schemas.comment import CommentCreate, CommentPublic, CommentUpdate
from blog_api.schemas.post import MessageResponse
from blog_api.services.comment_service import comment_service
from blog_api.api.deps import list_params

router = APIRouter()


@router.post("", response_model=CommentPublic, status_code=status.HTTP_201_CREATED)
async def create_comment(
    *,
    session: AsyncSession = Depends(get_session),
    comment_in: CommentCreate,
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings))
):
    return await comment_service.create_comment(session, comment_in=comment_in, current_user=current_user)


@router.get("", response_model=List[CommentPublic])
async def read_comments(
    *,
    session: AsyncSession = Depends(get_session),
    post_id: str = Query(alias="postId", min_length=1),
    params: list_params = Depends(),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    return await comment_service.list_comments(
        session, post_id=post_id, search=params.search, newest_first=params.newest_first
    )


@router.put("/{comment_id}", response_model=CommentPublic)
async def update_comment(
    *,
    comment_id: str,
    comment_in: CommentUpdate,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Edit a comment. Only its author can edit.
    """
    return await comment_service.update_comment(
        session, comment_id=comment_id, comment_in=comment_in, current_user=current_user
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    *,
    comment_id: str,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Delete a comment and its likes. Only its author can delete.
    """
    await comment_service.delete_comment(session, comment_id=comment_id, current_user=current_user)
    return MessageResponse(message="Comment deleted")
