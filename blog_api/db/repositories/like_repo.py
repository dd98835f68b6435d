# blog_api/db/repositories/like_repo.py
from typing import Generic, Optional, Type
from sqlmodel import select
from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models import CommentLike, Like
from blog_api.db.repositories.base import BaseRepository, ModelType


class LikeRepository(BaseRepository[ModelType], Generic[ModelType]):
    """
    Rows keyed by (user_id, <target>_id). None of these methods commit:
    the caller owns the transaction.
    """

    def __init__(self, model: Type[ModelType], target_field: str):
        super().__init__(model)
        self.target_field = target_field

    @property
    def target_column(self):
        return getattr(self.model, self.target_field)

    def _for_user(self, user_id: str, target_id: str):
        return (self.model.user_id == user_id, self.target_column == target_id)

    async def get_for_user(self, session: AsyncSession, *, user_id: str, target_id: str) -> Optional[ModelType]:
        statement = select(self.model).where(*self._for_user(user_id, target_id))
        result = await session.execute(statement)
        return result.scalars().first()

    async def add(self, session: AsyncSession, *, user_id: str, target_id: str) -> ModelType:
        """Insert the row and flush, so a unique violation surfaces here."""
        like = self.model(user_id=user_id, **{self.target_field: target_id})
        session.add(like)
        await session.flush()
        return like

    async def remove(self, session: AsyncSession, *, user_id: str, target_id: str) -> bool:
        """Single-statement delete; False when there was no row to remove."""
        statement = (
            delete(self.model)
            .where(*self._for_user(user_id, target_id))
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(statement)
        return result.rowcount > 0

    async def count_for_target(self, session: AsyncSession, *, target_id: str) -> int:
        statement = select(func.count(self.model.id)).where(self.target_column == target_id)
        result = await session.execute(statement)
        return result.scalar_one()


post_like_repo = LikeRepository(Like, "post_id")
comment_like_repo = LikeRepository(CommentLike, "comment_id")
