# blog_api/db/repositories/post_repo.py
from typing import Optional, Sequence
from sqlmodel import select
from sqlalchemy import Row, delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models import Comment, CommentLike, Like, Post, User
from blog_api.db.repositories.base import BaseRepository


def contains_pattern(keyword: str) -> str:
    """LIKE pattern matching ``keyword`` anywhere, with wildcards escaped."""
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostRepository(BaseRepository[Post]):
    def _with_counts(self):
        like_count = (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
            .label("like_count")
        )
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
            .label("comment_count")
        )
        return (
            select(Post, User.name.label("username"), like_count, comment_count)
            .join(User, User.id == Post.user_id)
        )

    async def list_with_counts(
        self,
        session: AsyncSession,
        *,
        search: Optional[str] = None,
        newest_first: bool = True,
    ) -> Sequence[Row]:
        statement = self._with_counts()
        if search:
            pattern = contains_pattern(search)
            statement = statement.where(
                or_(Post.title.ilike(pattern, escape="\\"), Post.content.ilike(pattern, escape="\\"))
            )
        order = Post.created_at.desc() if newest_first else Post.created_at.asc()
        statement = statement.order_by(order, Post.id)
        result = await session.execute(statement)
        return result.all()

    async def get_with_counts(self, session: AsyncSession, *, id: str) -> Optional[Row]:
        statement = self._with_counts().where(Post.id == id)
        result = await session.execute(statement)
        return result.first()

    async def delete_with_comments(self, session: AsyncSession, *, post: Post) -> None:
        """Delete a post together with its likes, comments and their likes, in one transaction."""
        comment_ids = select(Comment.id).where(Comment.post_id == post.id)
        await session.execute(delete(CommentLike).where(CommentLike.comment_id.in_(comment_ids)))
        await session.execute(delete(Comment).where(Comment.post_id == post.id))
        await session.execute(delete(Like).where(Like.post_id == post.id))
        await session.execute(delete(Post).where(Post.id == post.id))
        await session.commit()

post_repo = PostRepository(Post)
