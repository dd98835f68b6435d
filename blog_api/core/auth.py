import logging
from datetime import datetime, timedelta, timezone
import jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional

from blog_api.schemas.auth import TokenUser
from blog_api.core.config import Settings, settings
from blog_api.db.models import User
from blog_api.errors import AuthenticationRequired, InvalidToken


passwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported through AuthenticationRequired
# so the response keeps the API's error envelope.
bearer_scheme = HTTPBearer(auto_error=False)


def generate_passwd_hash(password: str) -> str:
    return passwd_context.hash(password)


def verify_password(password: str, hash: str) -> bool:
    return passwd_context.verify(password, hash)


def create_access_token(user: User, expires_delta: timedelta | None = None, settings: Settings = settings) -> str:
    expires = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.name,
        "exp": datetime.now(timezone.utc) + expires,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, settings: Settings = settings) -> dict:
    """
    Verify signature and expiry. Malformed, expired and mis-signed tokens are
    all reported as InvalidToken.
    """
    try:
        return jwt.decode(
            token,
            key=settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        logger.info(f"Rejected access token: {e.__class__.__name__}")
        raise InvalidToken()


def get_current_user_dependency(settings: Settings):
    def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> TokenUser:
        if credentials is None or not credentials.credentials:
            raise AuthenticationRequired(
                message="You are not authenticated. Please login to continue"
            )

        payload = decode_token(credentials.credentials, settings)
        return TokenUser(
            id=payload["sub"],
            email=payload.get("email"),
            name=payload.get("name"),
        )

    return get_current_user
