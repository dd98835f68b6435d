# blog_api/api/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.config import settings
from blog_api.db.session import get_session
from blog_api.core.auth import get_current_user_dependency
from blog_api.schemas.auth import ProfileResponseModel, TokenUser, UserRead
from blog_api.services.user_service import user_service

router = APIRouter()

@router.get("", response_model=ProfileResponseModel)
async def read_my_profile(
    session: AsyncSession = Depends(get_session),
    current_user: TokenUser = Depends(get_current_user_dependency(settings=settings)),
):
    """
    Get the stored profile of the token's user.
    """
    user = await user_service.get_profile(current_user.id, session)
    return ProfileResponseModel(message="Authenticated", user=UserRead.model_validate(user))
