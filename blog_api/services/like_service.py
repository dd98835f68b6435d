import logging
from dataclasses import dataclass
from typing import Type

from sqlmodel import SQLModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.errors import is_foreign_key_violation, is_unique_violation
from blog_api.db.models import Comment, Post
from blog_api.db.repositories.like_repo import LikeRepository, comment_like_repo, post_like_repo
from blog_api.errors import AlreadyLiked, CommentNotFound, LikeNotFound, NotFound, PostNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeState:
    liked: bool
    count: int


class LikeService:
    """
    Flips the like relationship between one user and one target (a post or a
    comment).

    Each call is one transaction: the row is either removed with a single
    DELETE or inserted, and the (user, target) unique constraint decides
    between two inserts racing for the same pair. The loser gets AlreadyLiked.
    """

    def __init__(
        self,
        repository: LikeRepository,
        target_model: Type[SQLModel],
        not_found: Type[NotFound],
    ):
        self.repository = repository
        self.target_model = target_model
        self.not_found = not_found

    async def ensure_target(self, session: AsyncSession, target_id: str) -> None:
        if await session.get(self.target_model, target_id) is None:
            raise self.not_found()

    async def count(self, session: AsyncSession, target_id: str) -> int:
        return await self.repository.count_for_target(session, target_id=target_id)

    async def is_liked(self, session: AsyncSession, *, user_id: str, target_id: str) -> bool:
        like = await self.repository.get_for_user(session, user_id=user_id, target_id=target_id)
        return like is not None

    async def toggle(self, session: AsyncSession, *, user_id: str, target_id: str) -> LikeState:
        await self.ensure_target(session, target_id)

        try:
            existing = await self.repository.get_for_user(session, user_id=user_id, target_id=target_id)
            if existing is not None:
                await self.repository.remove(session, user_id=user_id, target_id=target_id)
                liked = False
            else:
                await self.repository.add(session, user_id=user_id, target_id=target_id)
                liked = True
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            if is_foreign_key_violation(exc):
                logger.info(f"{self.target_model.__name__} {target_id} was deleted while user {user_id} liked it")
                raise self.not_found()
            if not is_unique_violation(exc):
                raise
            logger.info(f"Concurrent like by user {user_id} on {self.target_model.__name__} {target_id}")
            raise AlreadyLiked()

        count = await self.count(session, target_id)
        logger.info(
            f"User {user_id} {'liked' if liked else 'unliked'} "
            f"{self.target_model.__name__} {target_id} (count={count})"
        )
        return LikeState(liked=liked, count=count)

    async def unlike(self, session: AsyncSession, *, user_id: str, target_id: str) -> LikeState:
        removed = await self.repository.remove(session, user_id=user_id, target_id=target_id)
        await session.commit()
        if not removed:
            raise LikeNotFound()
        return LikeState(liked=False, count=await self.count(session, target_id))


post_like_service = LikeService(post_like_repo, Post, PostNotFound)
comment_like_service = LikeService(comment_like_repo, Comment, CommentNotFound)
