# blog_api/api/routers/likes.py
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from blog_api.db.session import get_session
from blog_api.core.auth import get_current_user_dependency
from blog_api.core.config import settings
from blog_api.errors import AuthorizationDenied
from blog_api.schemas.auth import TokenUser
from blog_api.schemas.like import CommentLikeRequest, LikeStatusResponse, LikeToggleResponse, PostLikeRequest
from blog_api.services.like_service import comment_like_service, post_like_service

router = APIRouter()
comment_router = APIRouter()


# ==============================
# POST LIKES
# ==============================
@router.post("", response_model=LikeToggleResponse)
async def toggle_like_post(
    like_in: PostLikeRequest,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings)),
):
    """
    Like the post, or remove the like if the current user already liked it.
    A concurrent duplicate like answers 409.
    """
    state = await post_like_service.toggle(session, user_id=current_user.id, target_id=like_in.post_id)
    return LikeToggleResponse(
        message="Post liked" if state.liked else "Like removed",
        liked=state.liked,
        count=state.count,
    )


@router.delete("", response_model=LikeToggleResponse)
async def unlike_post(
    like_in: PostLikeRequest,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings)),
):
    state = await post_like_service.unlike(session, user_id=current_user.id, target_id=like_in.post_id)
    return LikeToggleResponse(message="Like removed", liked=state.liked, count=state.count)


@router.get("/status", response_model=LikeStatusResponse)
async def like_status(
    post_id: str = Query(alias="postId", min_length=1),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings)),
):
    """
    Whether the current user likes the post. `userId`, when sent, must be the
    token's own user.
    """
    if user_id is not None and user_id != current_user.id:
        raise AuthorizationDenied(message="The requested user does not match the authenticated user.")

    await post_like_service.ensure_target(session, post_id)
    is_liked = await post_like_service.is_liked(session, user_id=current_user.id, target_id=post_id)
    count = await post_like_service.count(session, post_id)
    return LikeStatusResponse(isLiked=is_liked, count=count)


# ==============================
# COMMENT LIKES
# ==============================
@comment_router.post("/likes", response_model=LikeToggleResponse)
async def toggle_like_comment(
    like_in: CommentLikeRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings)),
):
    """
    Like the comment (201) or remove an existing like (200).
    A concurrent duplicate like answers 409.
    """
    state = await comment_like_service.toggle(session, user_id=current_user.id, target_id=like_in.comment_id)
    if state.liked:
        response.status_code = status.HTTP_201_CREATED
    return LikeToggleResponse(
        message="Comment liked" if state.liked else "Like removed",
        liked=state.liked,
        count=state.count,
    )


@comment_router.delete("/likes", response_model=LikeToggleResponse)
async def unlike_comment(
    like_in: CommentLikeRequest,
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings)),
):
    state = await comment_like_service.unlike(session, user_id=current_user.id, target_id=like_in.comment_id)
    return LikeToggleResponse(message="Like removed", liked=state.liked, count=state.count)
