from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, ConfigDict, Field


class AuthRequest(BaseModel):
    type: Literal["register", "login"]
    name: Optional[str] = Field(default=None, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "register",
                "name": "John Doe",
                "email": "johndoe123@co.com",
                "password": "testpass123",
            }
        }
    }


class UserPublic(BaseModel):
    id: str
    name: str
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserPublic):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegisterResponseModel(BaseModel):
    message: str
    user: UserPublic


class LoginResponseModel(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"


class ProfileResponseModel(BaseModel):
    message: str
    user: UserRead


class TokenUser(BaseModel):
    """Identity extracted from a verified access token."""
    id: str
    email: Optional[EmailStr] = None
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
