# tests/conftest.py
import os

# Settings are read at import time; point them at the test database first.
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-bytes-for-hs256"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ALLOWED_HOSTS"] = '["*"]'

import pytest
from typing import AsyncGenerator, Awaitable, Callable, Tuple
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from blog_api.main import app
from blog_api.core.auth import create_access_token
from blog_api.db.models import User
from blog_api.db.session import get_session

# Use an in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


UserFactory = Callable[..., Awaitable[Tuple[User, dict]]]


@pytest.fixture
def create_user(session_maker) -> UserFactory:
    """Insert a user directly and return it with ready-made auth headers."""

    async def _create_user(email: str = "author@example.com", name: str = "Author") -> Tuple[User, dict]:
        async with session_maker() as session:
            user = User(email=email, name=name, hashed_password="hashed_password")
            session.add(user)
            await session.commit()
            await session.refresh(user)
        token = create_access_token(user=user)
        return user, {"Authorization": f"Bearer {token}"}

    return _create_user
