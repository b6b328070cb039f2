"""FastAPI routes for per-user todo CRUD"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends

from todoapp.app import TodoApp
from todoapp.auth.models import TokenClaims
from todoapp.todos.models import Todo, TodoPatch

from .auth_middleware import get_todo_app, require_claims
from .models import CreateTodoRequest, DeleteResponse


router = APIRouter(prefix="/todos", tags=["todos"])


@router.get("", response_model=List[Todo])
def list_todos(
    claims: TokenClaims = Depends(require_claims),
    todo_app: TodoApp = Depends(get_todo_app),
) -> List[Todo]:
    return todo_app.todo_service.list(claims.user_id)


@router.post("", response_model=Todo)
def create_todo(
    payload: CreateTodoRequest,
    claims: TokenClaims = Depends(require_claims),
    todo_app: TodoApp = Depends(get_todo_app),
) -> Todo:
    return todo_app.todo_service.create(claims.user_id, payload.text, payload.date)


@router.put("/{todo_id}", response_model=Todo)
def update_todo(
    todo_id: str,
    patch: Optional[TodoPatch] = None,
    claims: TokenClaims = Depends(require_claims),
    todo_app: TodoApp = Depends(get_todo_app),
) -> Todo:
    """Merge-patch: only fields present in the body change"""
    return todo_app.todo_service.update(claims.user_id, todo_id, patch or TodoPatch())


@router.delete("/{todo_id}", response_model=DeleteResponse)
def delete_todo(
    todo_id: str,
    claims: TokenClaims = Depends(require_claims),
    todo_app: TodoApp = Depends(get_todo_app),
) -> DeleteResponse:
    todo_app.todo_service.delete(claims.user_id, todo_id)
    return DeleteResponse(success=True)
