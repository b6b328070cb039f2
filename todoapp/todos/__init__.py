"""Per-user todo items"""

from .models import Todo, TodoPatch
from .service import TodoService

__all__ = [
    "Todo",
    "TodoPatch",
    "TodoService",
]
