from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)
    post_id: str = Field(alias="postId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        return value.strip() if isinstance(value, str) else value


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        return value.strip() if isinstance(value, str) else value


class CommentAuthor(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class CommentPublic(BaseModel):
    id: str
    content: str
    post_id: str
    user_id: str
    user: CommentAuthor
    like_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
