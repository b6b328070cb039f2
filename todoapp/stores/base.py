"""
Storage abstraction shared by the auth and todo services.

A Collection holds pydantic records keyed by their ``id`` attribute and keeps
insertion order. Services receive collections at construction so they never
touch a concrete backend.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


class Collection(ABC, Generic[RecordT]):
    """Abstract collection of records with an ``id`` and optional owner field"""

    owner_field: str = "user_id"

    @abstractmethod
    def get(self, record_id: str) -> Optional[RecordT]:
        """Return the record with this id, or None"""

    @abstractmethod
    def put(self, record: RecordT) -> RecordT:
        """Insert or replace a record (replacing keeps its position)"""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove a record; return False if it did not exist"""

    @abstractmethod
    def all(self) -> List[RecordT]:
        """Return every record in insertion order"""

    def list_by_owner(self, owner_id: str) -> List[RecordT]:
        return [r for r in self.all() if getattr(r, self.owner_field, None) == owner_id]

    def find_one(self, predicate: Callable[[RecordT], bool]) -> Optional[RecordT]:
        return next((r for r in self.all() if predicate(r)), None)
