"""
JSON-file collection.

The whole collection lives in one document, e.g. data/todos.json:

    {"todos": [{...}, {...}]}

Every mutation reloads the file, applies the change and rewrites the whole
document atomically (temp file in the same directory, then move). Concurrent
writers are not coordinated; the last write wins.
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError as PydanticValidationError

from todoapp.utils.exceptions import StorageError
from todoapp.utils.logger import get_logger

from .base import Collection, RecordT

logger = get_logger(__name__)


class JsonFileCollection(Collection[RecordT]):
    """Collection persisted as a single JSON file"""

    def __init__(
        self,
        path: Path,
        model: Type[RecordT],
        key: str,
        owner_field: str = "user_id",
    ):
        self.path = Path(path)
        self.model = model
        self.key = key
        self.owner_field = owner_field

    def _load(self) -> List[RecordT]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return [self.model(**item) for item in raw.get(self.key, [])]
        except (json.JSONDecodeError, OSError, AttributeError, TypeError, PydanticValidationError) as e:
            logger.error("Failed to load collection", path=str(self.path), error=str(e))
            raise StorageError(f"Failed to load {self.key} from {self.path}: {e}")

    def _save(self, records: List[RecordT]) -> None:
        payload = {self.key: [r.model_dump(mode="json") for r in records]}
        self._atomic_write(payload)

    def _atomic_write(self, payload: Dict[str, Any]) -> None:
        """Write JSON file atomically"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=str(self.path.parent), delete=False, encoding="utf-8"
        ) as tf:
            json.dump(payload, tf, indent=2, ensure_ascii=False)
            temp_path = Path(tf.name)

        try:
            shutil.move(str(temp_path), str(self.path))
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to save {self.key} to {self.path}: {e}")

    def get(self, record_id: str) -> Optional[RecordT]:
        return next((r for r in self._load() if r.id == record_id), None)

    def put(self, record: RecordT) -> RecordT:
        records = self._load()
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                break
        else:
            records.append(record)
        self._save(records)
        return record

    def delete(self, record_id: str) -> bool:
        records = self._load()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        return True

    def all(self) -> List[RecordT]:
        return self._load()
