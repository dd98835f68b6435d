import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from blog_api.db.models import User
from blog_api.db.errors import is_unique_violation
from blog_api.db.repositories.user_repo import user_repo
from blog_api.errors import (
    UserAlreadyExists,
    InvalidCredentials,
    UserNotFound,
)
from blog_api.schemas.auth import AuthRequest
from blog_api.core.auth import generate_passwd_hash, verify_password

logger = logging.getLogger(__name__)


class UserService:
    async def get_user_by_email(
        self, email: str, session: AsyncSession
    ) -> Optional[User]:
        """Retrieve a user by their email address."""
        return await user_repo.get_by_email(session, email=email)

    async def user_exists(self, email: str, session: AsyncSession) -> bool:
        """Check if a user with the given email already exists."""
        user = await self.get_user_by_email(email, session)
        return user is not None

    async def create_user(self, user_data: AuthRequest, session: AsyncSession) -> User:
        """
        Create a new user. The display name defaults to the local part of the
        e-mail address. A duplicate e-mail raises UserAlreadyExists, also when
        two registrations race past the existence check.
        """
        if await self.user_exists(user_data.email, session):
            raise UserAlreadyExists(
                message="A user with this email already exists."
            )

        new_user = User(
            name=(user_data.name or "").strip() or user_data.email.split("@")[0],
            email=user_data.email,
            hashed_password=generate_passwd_hash(user_data.password),
        )

        try:
            created_user = await user_repo.create(session, obj_in=new_user)
        except IntegrityError as exc:
            await session.rollback()
            if not is_unique_violation(exc):
                raise
            raise UserAlreadyExists(message="A user with this email already exists.")

        logger.info(f"Created user {created_user.id}")
        return created_user

    async def authenticate_user(
        self, email: str, password: str, session: AsyncSession
    ) -> User:
        """Authenticate a user by email and password."""
        user = await self.get_user_by_email(email, session)
        if user is None:
            raise UserNotFound(
                message="The user with this email does not exist"
            )
        if not verify_password(password, user.hashed_password):
            logger.info(f"Failed login for user {user.id}")
            raise InvalidCredentials(
                message="The password is not correct"
            )
        return user

    async def get_profile(self, user_id: str, session: AsyncSession) -> User:
        user = await user_repo.get(session, id=user_id)
        if user is None:
            raise UserNotFound()
        return user


user_service = UserService()
