# blog_api/core/config.py
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Blog API"
    API_PREFIX: str = "/api"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database
    DATABASE_URL: str
    DATABASE_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30

    # CORS / hosts
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    ALLOWED_HOSTS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # S3-compatible media host
    S3_ENDPOINT_URL: Optional[str] = None
    S3_ACCESS_KEY_ID: Optional[str] = None
    S3_SECRET_ACCESS_KEY: Optional[str] = None
    S3_REGION_NAME: Optional[str] = None
    S3_BUCKET_NAME: str = "blog-media"
    S3_UPLOAD_PREFIX: str = "blog"
    MEDIA_PUBLIC_BASE_URL: Optional[str] = None
    MEDIA_UPLOAD_TIMEOUT: int = 30  # seconds
    MEDIA_MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10 MB

    model_config = ConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
