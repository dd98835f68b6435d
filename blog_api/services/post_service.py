import logging
from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from blog_api.db.models import Post, utcnow
from blog_api.db.repositories.post_repo import post_repo
from blog_api.errors import AuthorizationDenied, PostNotFound
from blog_api.schemas.auth import TokenUser
from blog_api.schemas.post import PostCreate, PostPublic, PostUpdate

logger = logging.getLogger(__name__)


def to_post_public(row: Row) -> PostPublic:
    post, username, like_count, comment_count = row
    return PostPublic(
        **post.model_dump(),
        username=username,
        like_count=like_count or 0,
        comment_count=comment_count or 0,
    )


class PostService:
    async def list_posts(
        self,
        session: AsyncSession,
        *,
        search: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[PostPublic]:
        rows = await post_repo.list_with_counts(session, search=search, newest_first=newest_first)
        return [to_post_public(row) for row in rows]

    async def get_post(self, session: AsyncSession, post_id: str) -> PostPublic:
        row = await post_repo.get_with_counts(session, id=post_id)
        if row is None:
            raise PostNotFound()
        return to_post_public(row)

    async def create_post(self, session: AsyncSession, *, post_in: PostCreate, current_user: TokenUser) -> PostPublic:
        post = Post(**post_in.model_dump(), user_id=current_user.id)
        new_post = await post_repo.create(session, obj_in=post)
        logger.info(f"User {current_user.id} created post {new_post.id}")
        return await self.get_post(session, new_post.id)

    async def _get_owned(self, session: AsyncSession, post_id: str, current_user: TokenUser, action: str) -> Post:
        post = await post_repo.get(session, id=post_id)
        if post is None:
            raise PostNotFound()
        if post.user_id != current_user.id:
            logger.warning(f"User {current_user.id} tried to {action} post {post_id} owned by {post.user_id}")
            raise AuthorizationDenied(message=f"You can only {action} your own posts.")
        return post

    async def update_post(
        self, session: AsyncSession, *, post_id: str, post_in: PostUpdate, current_user: TokenUser
    ) -> PostPublic:
        post = await self._get_owned(session, post_id, current_user, "edit")
        # fields left out of the body keep their stored value
        values = post_in.model_dump(exclude_unset=True)
        values["updated_at"] = utcnow()
        await post_repo.update(session, db_obj=post, values=values)
        logger.info(f"User {current_user.id} updated post {post_id}")
        return await self.get_post(session, post_id)

    async def delete_post(self, session: AsyncSession, *, post_id: str, current_user: TokenUser) -> None:
        post = await self._get_owned(session, post_id, current_user, "delete")
        await post_repo.delete_with_comments(session, post=post)
        logger.info(f"User {current_user.id} deleted post {post_id}")


post_service = PostService()
