import logging
from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from blog_api.db.models import Comment, Post, utcnow
from blog_api.db.repositories.comment_repo import comment_repo
from blog_api.errors import AuthorizationDenied, CommentNotFound, PostNotFound
from blog_api.schemas.auth import TokenUser
from blog_api.schemas.comment import CommentAuthor, CommentCreate, CommentPublic, CommentUpdate

logger = logging.getLogger(__name__)


def to_comment_public(row: Row) -> CommentPublic:
    comment, username, like_count = row
    return CommentPublic(
        **comment.model_dump(),
        user=CommentAuthor(id=comment.user_id, name=username),
        like_count=like_count or 0,
    )


class CommentService:
    async def list_comments(
        self,
        session: AsyncSession,
        *,
        post_id: str,
        search: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[CommentPublic]:
        rows = await comment_repo.get_comments_for_post(
            session, post_id=post_id, search=search, newest_first=newest_first
        )
        return [to_comment_public(row) for row in rows]

    async def get_comment(self, session: AsyncSession, comment_id: str) -> CommentPublic:
        row = await comment_repo.get_with_like_count(session, id=comment_id)
        if row is None:
            raise CommentNotFound()
        return to_comment_public(row)

    async def create_comment(
        self, session: AsyncSession, *, comment_in: CommentCreate, current_user: TokenUser
    ) -> CommentPublic:
        if await session.get(Post, comment_in.post_id) is None:
            raise PostNotFound()

        comment = Comment(
            content=comment_in.content,
            post_id=comment_in.post_id,
            user_id=current_user.id,
        )
        new_comment = await comment_repo.create(session, obj_in=comment)
        logger.info(f"User {current_user.id} commented on post {comment_in.post_id}")
        return await self.get_comment(session, new_comment.id)

    async def _get_owned(self, session: AsyncSession, comment_id: str, current_user: TokenUser, action: str) -> Comment:
        comment = await comment_repo.get(session, id=comment_id)
        if comment is None:
            raise CommentNotFound()
        if comment.user_id != current_user.id:
            logger.warning(f"User {current_user.id} tried to {action} comment {comment_id} owned by {comment.user_id}")
            raise AuthorizationDenied(message=f"You can only {action} your own comments.")
        return comment

    async def update_comment(
        self, session: AsyncSession, *, comment_id: str, comment_in: CommentUpdate, current_user: TokenUser
    ) -> CommentPublic:
        comment = await self._get_owned(session, comment_id, current_user, "edit")
        await comment_repo.update(
            session, db_obj=comment, values={"content": comment_in.content, "updated_at": utcnow()}
        )
        return await self.get_comment(session, comment_id)

    async def delete_comment(self, session: AsyncSession, *, comment_id: str, current_user: TokenUser) -> None:
        comment = await self._get_owned(session, comment_id, current_user, "delete")
        await comment_repo.delete_with_likes(session, comment=comment)
        logger.info(f"User {current_user.id} deleted comment {comment_id}")


comment_service = CommentService()
