"""In-process collection backed by an ordered dict"""

from typing import Dict, List, Optional

from .base import Collection, RecordT


class MemoryCollection(Collection[RecordT]):
    """Resident collection; contents are lost when the process exits"""

    def __init__(self, owner_field: str = "user_id"):
        self.owner_field = owner_field
        self._records: Dict[str, RecordT] = {}

    def get(self, record_id: str) -> Optional[RecordT]:
        return self._records.get(record_id)

    def put(self, record: RecordT) -> RecordT:
        self._records[record.id] = record
        return record

    def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    def all(self) -> List[RecordT]:
        return list(self._records.values())
