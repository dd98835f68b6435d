from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.auth import create_access_token, get_current_user_dependency
from blog_api.core.config import settings
from blog_api.db.session import get_session
from blog_api.schemas.auth import (
    AuthRequest,
    LoginResponseModel,
    RegisterResponseModel,
    TokenUser,
    UserPublic,
)
from blog_api.services.user_service import user_service

router = APIRouter()


# ==============================
# REGISTER / LOGIN ENDPOINT
# ==============================
@router.post("", response_model=RegisterResponseModel | LoginResponseModel)
async def register_or_login(
    auth_in: AuthRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
):
    """
    Register a new account or log in, selected by ``type``.

    - ``register``: creates the user and answers 201. A taken e-mail is 409.
    - ``login``: checks the password and returns a bearer token. An unknown
      e-mail is 404, a wrong password 401.

    Args:
        auth_in (AuthRequest): type, optional name, email and password.
        response (Response): used to set the 201 status on registration.
        session (AsyncSession): SQLAlchemy async session.
    """
    if auth_in.type == "register":
        user = await user_service.create_user(auth_in, session)
        response.status_code = status.HTTP_201_CREATED
        return RegisterResponseModel(
            message="User registered successfully",
            user=UserPublic.model_validate(user),
        )

    user = await user_service.authenticate_user(auth_in.email, auth_in.password, session)
    return LoginResponseModel(
        message="Logged in successfully",
        token=create_access_token(user=user),
    )


# ==============================
# CURRENT IDENTITY ENDPOINT
# ==============================
@router.get("/me", response_model=TokenUser)
async def read_current_identity(
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Return the identity carried by the bearer token (no database lookup).
    """
    return current_user
