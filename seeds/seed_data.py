import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from blog_api.core.auth import generate_passwd_hash
from blog_api.db.models import Comment, CommentLike, Like, Post, User
from blog_api.db.repositories.user_repo import user_repo
from blog_api.db.session import create_tables, get_async_session_maker

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

USERS = [
    {"name": "Aiko Tanaka", "email": "aiko@example.com"},
    {"name": "Min-jun Park", "email": "minjun@example.com"},
    {"name": "Sam Rivera", "email": "sam@example.com"},
]

POSTS = [
    {
        "author": "aiko@example.com",
        "title": "Hello, blog!",
        "content": "First post on the new blog. Comments and likes are open.",
    },
    {
        "author": "minjun@example.com",
        "title": "Weekend hiking notes",
        "content": "Three trails, two sunburns and one very good bowl of noodles.",
        "image_url": "https://picsum.photos/seed/hiking/800/450",
    },
]


async def _get_or_create_user(session: AsyncSession, name: str, email: str) -> User:
    existing = await user_repo.get_by_email(session, email=email)
    if existing:
        return existing
    user = User(name=name, email=email, hashed_password=generate_passwd_hash(DEMO_PASSWORD))
    return await user_repo.create(session, obj_in=user)


async def seed_all():
    """Seed demo users, posts, comments and likes.

    Idempotent: users are looked up by e-mail and posts are only created for
    an author that has none yet.
    """
    await create_tables()

    session_maker = get_async_session_maker()
    async with session_maker() as session:
        users = {}
        for user_data in USERS:
            users[user_data["email"]] = await _get_or_create_user(session, **user_data)

        aiko = users["aiko@example.com"]
        minjun = users["minjun@example.com"]
        sam = users["sam@example.com"]

        for post_data in POSTS:
            author = users[post_data["author"]]
            post_count = await session.scalar(select(func.count(Post.id)).where(Post.user_id == author.id))
            if post_count:
                continue

            post = Post(
                user_id=author.id,
                title=post_data["title"],
                content=post_data["content"],
                image_url=post_data.get("image_url"),
            )
            session.add(post)
            await session.commit()
            await session.refresh(post)

            comment = Comment(post_id=post.id, user_id=sam.id, content="Nice one!")
            session.add(comment)
            await session.commit()
            await session.refresh(comment)

            liker = minjun if author.id == aiko.id else aiko
            session.add_all([
                Like(user_id=liker.id, post_id=post.id),
                Like(user_id=sam.id, post_id=post.id),
                CommentLike(user_id=author.id, comment_id=comment.id),
            ])
            await session.commit()
            logger.info(f"Seeded post {post.id} for {author.email}")

    logger.info(f"Seeding done. Demo accounts use the password '{DEMO_PASSWORD}'.")
