# blog_api/db/repositories/user_repo.py
from typing import Optional
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models import User
from blog_api.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    async def get_by_email(self, session: AsyncSession, *, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        result = await session.execute(statement)
        return result.scalars().first()

user_repo = UserRepository(User)
