# blog_api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from blog_api.core.config import settings
from blog_api.core.middleware import configure_logging, register_middleware
from blog_api.db.session import create_tables, dispose_engine
from blog_api.errors import register_all_errors
from blog_api.api.routers import (
    auth,
    users,
    posts,
    comments,
    likes,
    upload,
)

configure_logging()
logger = logging.getLogger(__name__)

# Lifespan manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")
    await create_tables()
    yield
    logger.info("Shutting down...")
    await dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend for a multi-user blog: accounts, posts, comments and likes.",
    version="0.1.0",
    lifespan=lifespan,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)


# Prometheus Metrics Integration
Instrumentator().instrument(app).expose(app)

# CORS, trusted hosts, request logging, framework-level errors
register_middleware(app)
register_all_errors(app)


# Include API Routers
api_prefix = settings.API_PREFIX
app.include_router(auth.router, prefix=f"{api_prefix}/auth", tags=["Auth"])
app.include_router(users.router, prefix=f"{api_prefix}/user", tags=["Users"])
app.include_router(posts.router, prefix=f"{api_prefix}/posts", tags=["Posts"])
# /comments/likes must be matched before /comments/{comment_id}
app.include_router(likes.comment_router, prefix=f"{api_prefix}/comments", tags=["Likes"])
app.include_router(comments.router, prefix=f"{api_prefix}/comments", tags=["Comments"])
app.include_router(likes.router, prefix=f"{api_prefix}/likes", tags=["Likes"])
app.include_router(upload.router, prefix=f"{api_prefix}/upload", tags=["Upload"])


@app.get("/", tags=["Health Check"])
async def root():
    """Health check endpoint."""
    return {"message": "Blog API is running!"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("blog_api.main:app", host="0.0.0.0", port=8000, reload=True)
