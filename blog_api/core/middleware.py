from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from colorlog import ColoredFormatter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import time, json, logging

from blog_api.core.config import settings
from blog_api.db.errors import is_unique_violation


def configure_logging(level: str = settings.LOG_LEVEL, log_file: str | None = settings.LOG_FILE) -> None:
    """Attach a coloured console handler (and an optional plain file handler) to the root logger."""
    root = logging.getLogger()
    if getattr(root, "_blog_api_configured", False):
        return

    # Formatter for console
    console_formatter = ColoredFormatter(
        "%(log_color)s%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red',
        },
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(console_formatter)
    root.addHandler(console_handler)

    if log_file:
        # Formatter for file (no color)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s"))
        root.addHandler(file_handler)

    root.setLevel(level)
    root._blog_api_configured = True


logger = logging.getLogger("blog_api.middleware")


def _error_body(message, error_code: str, resolution: str = "Please try again later", **extra) -> dict:
    return {"message": message, "error_code": error_code, "resolution": resolution, **extra}


def register_middleware(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.error(f"HTTPException: {exc.detail} at {request.method} {request.url.path}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail, "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
        logger.warning(f"Validation error at {request.method} {request.url.path}: {fields}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(
                "Missing or invalid fields: " + ", ".join(f for f in fields if f),
                "data_validation_error",
                "Please check the data you provided",
                fields=fields,
            ),
        )

    @app.exception_handler(IntegrityError)
    async def db_integrity_error_handler(request: Request, exc: IntegrityError):
        if is_unique_violation(exc):
            logger.warning(f"Unique constraint violation at {request.method} {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content=_error_body("Resource already exists", "conflict", "Refresh and try again"),
            )
        logger.exception(f"Database integrity error at {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Database error occurred", "database_error"),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error at {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Database error occurred", "database_error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception at {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Oops! Something went wrong", "server_error"),
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        client = f"{request.client.host}:{request.client.port}" if request.client else "-"
        log_msg = (
            f"{client} - {request.method} {request.url.path} - "
            f"Status: {response.status_code} - Time: {process_time:.2f}s"
        )

        if response.status_code >= 400:
            body = b""
            async for chunk in response.body_iterator:
                body += chunk
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
            try:
                error_content = json.loads(body.decode())
                reason = error_content.get("message", error_content)
                log_msg += f" - Reason: {reason}"
            except (ValueError, AttributeError):
                log_msg += f" - Reason: {body.decode(errors='ignore')}"

        logger.info(log_msg)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)
