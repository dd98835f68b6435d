# blog_api/db/repositories/comment_repo.py
from typing import Optional, Sequence
from sqlmodel import select
from sqlalchemy import Row, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models import Comment, CommentLike, User
from blog_api.db.repositories.base import BaseRepository
from blog_api.db.repositories.post_repo import contains_pattern


class CommentRepository(BaseRepository[Comment]):
    def _with_like_count(self):
        like_count = (
            select(func.count(CommentLike.id))
            .where(CommentLike.comment_id == Comment.id)
            .correlate(Comment)
            .scalar_subquery()
            .label("like_count")
        )
        return (
            select(Comment, User.name.label("username"), like_count)
            .join(User, User.id == Comment.user_id)
        )

    async def get_comments_for_post(
        self,
        session: AsyncSession,
        *,
        post_id: str,
        search: Optional[str] = None,
        newest_first: bool = True,
    ) -> Sequence[Row]:
        statement = self._with_like_count().where(Comment.post_id == post_id)
        if search:
            statement = statement.where(Comment.content.ilike(contains_pattern(search), escape="\\"))
        order = Comment.created_at.desc() if newest_first else Comment.created_at.asc()
        statement = statement.order_by(order, Comment.id)
        result = await session.execute(statement)
        return result.all()

    async def get_with_like_count(self, session: AsyncSession, *, id: str) -> Optional[Row]:
        statement = self._with_like_count().where(Comment.id == id)
        result = await session.execute(statement)
        return result.first()

    async def delete_with_likes(self, session: AsyncSession, *, comment: Comment) -> None:
        await session.execute(delete(CommentLike).where(CommentLike.comment_id == comment.id))
        await session.execute(delete(Comment).where(Comment.id == comment.id))
        await session.commit()

comment_repo = CommentRepository(Comment)
