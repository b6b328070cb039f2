"""FastAPI application for the todo API"""

from datetime import datetime
from typing import Dict, Optional, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todoapp.app import TodoApp
from todoapp.utils.exceptions import (
    AuthError,
    ConflictError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
    TodoAppError,
    ValidationError,
)
from todoapp.utils.logger import get_logger

from .auth_routes import router as auth_router
from .todo_routes import router as todo_router

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Anything not listed (StorageError, ConfigError) is a 500
ERROR_STATUS: Dict[Type[TodoAppError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_400_BAD_REQUEST,
    MissingTokenError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def status_for(exc: TodoAppError) -> int:
    for exc_type, code in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def todo_app_error_handler(request: Request, exc: TodoAppError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(status_code=code, content={"error": INTERNAL_ERROR_MESSAGE})

    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content={"error": exc.message}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


def create_app(todo_app: Optional[TodoApp] = None) -> FastAPI:
    """
    Build the FastAPI app around an initialized TodoApp.

    Used directly by tests and as a uvicorn factory (web.main:create_app).
    """
    if todo_app is None:
        todo_app = TodoApp()
    if todo_app.auth_service is None:
        todo_app.initialize()
    settings = todo_app.settings

    app = FastAPI(
        title=settings.app.name,
        description="Personal task tracking API",
        version=settings.app.version,
    )
    app.state.todo_app = todo_app

    # Bearer tokens only, no cookies
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TodoAppError, todo_app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth_router)
    app.include_router(todo_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for deployment platforms"""
        return {
            "status": "ok",
            "service": settings.app.name,
            "timestamp": datetime.utcnow().isoformat(),
        }

    return app
