from typing import Callable, Optional
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from fastapi import FastAPI, status


class BlogException(Exception):
    """Base class for all blog API exceptions."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An error occurred"
    default_error_code: str = "error"

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None):
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        super().__init__(self.message)


class DatabaseError(BlogException):
    """An error occurred while interacting with the database."""
    default_message = "Database error occurred"
    default_error_code = "database_error"


class UploadFailed(BlogException):
    """The media host rejected or did not answer an upload."""
    default_message = "Image upload failed"
    default_error_code = "upload_failed"


class AuthenticationRequired(BlogException):
    """No usable credentials were sent with the request."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"
    default_error_code = "unauthenticated"


class InvalidToken(AuthenticationRequired):
    """User has provided an invalid or expired token."""
    default_message = "Invalid or expired token"
    default_error_code = "invalid_token"


class InvalidCredentials(BlogException):
    """User has provided an incorrect password."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "The password is not correct"
    default_error_code = "invalid_credentials"


class AuthorizationDenied(BlogException):
    """Valid identity, but it does not own the resource."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"
    default_error_code = "forbidden"


class DataValidationError(BlogException):
    """Submitted data failed validation checks."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Data validation failed"
    default_error_code = "data_validation_error"


class NotFound(BlogException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"
    default_error_code = "not_found"


class UserNotFound(NotFound):
    default_message = "User not found"
    default_error_code = "user_not_found"


class PostNotFound(NotFound):
    default_message = "Post not found"
    default_error_code = "post_not_found"


class CommentNotFound(NotFound):
    default_message = "Comment not found"
    default_error_code = "comment_not_found"


class LikeNotFound(NotFound):
    default_message = "Like not found"
    default_error_code = "like_not_found"


class Conflict(BlogException):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"
    default_error_code = "conflict"


class UserAlreadyExists(Conflict):
    """User is trying to register with an email that already exists."""
    default_message = "User with this email already exists"
    default_error_code = "user_exists"


class AlreadyLiked(Conflict):
    """A concurrent request created the same like first."""
    default_message = "Already liked"
    default_error_code = "already_liked"


def create_exception_handler(
    status_code: int,
    initial_detail: dict,
) -> Callable[[Request, BlogException], JSONResponse]:

    async def exception_handler(request: Request, exc: BlogException):
        return JSONResponse(
            status_code=status_code,
            content={
                "message": exc.message or initial_detail["message"],
                "error_code": exc.error_code or initial_detail["error_code"],
                "resolution": initial_detail.get("resolution") or "Please try again later",
            }
        )

    return exception_handler


def register_all_errors(app: FastAPI):
    """Registers all exception handlers in the FastAPI app."""

    app.add_exception_handler(
        BlogException,
        create_exception_handler(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            initial_detail={
                "message": "Oops! Something went wrong",
                "resolution": "Please try again later",
                "error_code": "server_error",
            },
        ),
    )

    app.add_exception_handler(
        DatabaseError,
        create_exception_handler(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            initial_detail={
                "message": "Database error occurred",
                "resolution": "Please try again later",
                "error_code": "database_error",
            },
        ),
    )

    app.add_exception_handler(
        UploadFailed,
        create_exception_handler(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            initial_detail={
                "message": "Image upload failed",
                "resolution": "Please try uploading the image again later",
                "error_code": "upload_failed",
            },
        ),
    )

    app.add_exception_handler(
        AuthenticationRequired,
        create_exception_handler(
            status_code=status.HTTP_401_UNAUTHORIZED,
            initial_detail={
                "message": "Authentication required",
                "resolution": "Please sign in and send the access token as a Bearer token",
                "error_code": "unauthenticated",
            },
        ),
    )

    app.add_exception_handler(
        InvalidCredentials,
        create_exception_handler(
            status_code=status.HTTP_401_UNAUTHORIZED,
            initial_detail={
                "message": "The password is not correct",
                "resolution": "Please check your credentials and try again",
                "error_code": "invalid_credentials",
            },
        ),
    )

    app.add_exception_handler(
        AuthorizationDenied,
        create_exception_handler(
            status_code=status.HTTP_403_FORBIDDEN,
            initial_detail={
                "message": "You do not have permission to perform this action",
                "resolution": "Only the owner of a post or comment can change it",
                "error_code": "forbidden",
            },
        ),
    )

    app.add_exception_handler(
        DataValidationError,
        create_exception_handler(
            status_code=status.HTTP_400_BAD_REQUEST,
            initial_detail={
                "message": "Data validation failed",
                "resolution": "Please check the data you provided",
                "error_code": "data_validation_error",
            },
        ),
    )

    app.add_exception_handler(
        NotFound,
        create_exception_handler(
            status_code=status.HTTP_404_NOT_FOUND,
            initial_detail={
                "message": "Resource not found",
                "resolution": "Please check the identifier and try again",
                "error_code": "not_found",
            },
        ),
    )

    app.add_exception_handler(
        Conflict,
        create_exception_handler(
            status_code=status.HTTP_409_CONFLICT,
            initial_detail={
                "message": "Resource already exists",
                "resolution": "Refresh and try again",
                "error_code": "conflict",
            },
        ),
    )
