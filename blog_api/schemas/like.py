from pydantic import BaseModel, ConfigDict, Field


class PostLikeRequest(BaseModel):
    post_id: str = Field(alias="postId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class CommentLikeRequest(BaseModel):
    comment_id: str = Field(alias="commentId", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class LikeToggleResponse(BaseModel):
    message: str
    liked: bool
    count: int


class LikeStatusResponse(BaseModel):
    isLiked: bool
    count: int
