"""Todo record and merge-patch models"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """A single to-do item owned by one user"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str = Field(alias="userId")
    text: str
    completed: bool = False
    important: bool = False
    date: Optional[Date] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, alias="createdAt")


class TodoPatch(BaseModel):
    """
    Partial update. Only fields the caller actually supplied are applied.

    A supplied null keeps the prior value for text/completed/important and
    clears the date.
    """

    text: Optional[str] = None
    completed: Optional[bool] = None
    important: Optional[bool] = None
    date: Optional[Date] = None

    def changes(self) -> Dict[str, Any]:
        supplied = self.model_dump(include=self.model_fields_set)
        return {
            key: value
            for key, value in supplied.items()
            if value is not None or key == "date"
        }
