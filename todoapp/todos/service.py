"""
Todo service. Every operation is scoped to the authenticated owner: a todo
that exists but belongs to someone else is reported exactly like a missing one.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from todoapp.stores.base import Collection
from todoapp.utils.exceptions import NotFoundError, ValidationError
from todoapp.utils.logger import get_logger

from .models import Todo, TodoPatch

logger = get_logger(__name__)


class TodoService:
    """Per-user todo CRUD over an injected collection"""

    def __init__(self, todos: Collection[Todo]):
        self.todos = todos

    def _owned(self, user_id: str, todo_id: str) -> Todo:
        todo = self.todos.get(todo_id)
        if not todo or todo.user_id != user_id:
            raise NotFoundError("Todo not found")
        return todo

    def list(self, user_id: str) -> List[Todo]:
        return self.todos.list_by_owner(user_id)

    def create(self, user_id: str, text: Optional[str], date: Optional[Date] = None) -> Todo:
        if text is None or not text.strip():
            raise ValidationError("Todo text is required")
        todo = Todo(user_id=user_id, text=text, date=date)
        self.todos.put(todo)
        logger.info("Todo created", user_id=user_id, todo_id=todo.id)
        return todo

    def update(self, user_id: str, todo_id: str, patch: TodoPatch) -> Todo:
        """Merge the supplied fields into the owner's todo"""
        todo = self._owned(user_id, todo_id)
        changes = patch.changes()
        if "text" in changes and not changes["text"].strip():
            raise ValidationError("Todo text cannot be empty")
        if not changes:
            return todo

        updated = todo.model_copy(update=changes)
        self.todos.put(updated)
        logger.info("Todo updated", user_id=user_id, todo_id=todo_id, fields=sorted(changes))
        return updated

    def delete(self, user_id: str, todo_id: str) -> None:
        self._owned(user_id, todo_id)
        self.todos.delete(todo_id)
        logger.info("Todo deleted", user_id=user_id, todo_id=todo_id)
