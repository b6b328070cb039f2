"""
Auth dependencies.

require_claims() reads the bearer token from the Authorization header and
validates it through AuthService. Failures raise MissingTokenError or
InvalidTokenError, which the app's exception handlers turn into 401/403.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from todoapp.app import TodoApp
from todoapp.auth.models import TokenClaims


def get_todo_app(request: Request) -> TodoApp:
    return request.app.state.todo_app


def _extract_token(request: Request) -> Optional[str]:
    """Return the credential part of 'Authorization: Bearer <token>'"""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) < 2:
        return None
    return parts[1]


async def require_claims(request: Request) -> TokenClaims:
    """Dependency for protected routes"""
    todo_app = get_todo_app(request)
    return todo_app.auth_service.authenticate(_extract_token(request))
