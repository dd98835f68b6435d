# blog_api/schemas/post.py
from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class PostBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "image_url"),
    )

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class PostCreate(PostBase):
    pass


class PostUpdate(PostBase):
    pass


class PostPublic(BaseModel):
    id: str
    title: str
    content: str
    image_url: Optional[str] = None
    user_id: str
    username: str
    like_count: int = 0
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
