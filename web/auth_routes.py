"""
FastAPI routes for registration, login and identity lookup.

Request bodies are JSON; the issued token is returned in the body and the
client replays it as 'Authorization: Bearer <token>'.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from todoapp.app import TodoApp
from todoapp.auth.models import PublicUser, TokenClaims

from .auth_middleware import get_todo_app, require_claims
from .models import AuthResponse, LoginRequest, RegisterRequest


router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    todo_app: TodoApp = Depends(get_todo_app),
) -> AuthResponse:
    """
    Register a new user.

    Response:
        {
          "message": "...",
          "token": "<session_token>",
          "user": { "id": "...", "email": "...", "name": "..." }
        }
    """
    # bcrypt hashing blocks; run it in the threadpool
    result = await run_in_threadpool(
        todo_app.auth_service.register,
        payload.email,
        payload.password,
        payload.name,
    )
    return AuthResponse(message="Registration complete", token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    todo_app: TodoApp = Depends(get_todo_app),
) -> AuthResponse:
    """Log in an existing user. Same response shape as /register."""
    result = await run_in_threadpool(
        todo_app.auth_service.login,
        payload.email,
        payload.password,
    )
    return AuthResponse(message="Login successful", token=result.token, user=result.user)


@router.get("/me", response_model=PublicUser)
def me(
    claims: TokenClaims = Depends(require_claims),
    todo_app: TodoApp = Depends(get_todo_app),
) -> PublicUser:
    """Return the current authenticated user"""
    return todo_app.auth_service.get_current_user(claims.user_id)
