"""
Client-side token persistence.

FileTokenStore keeps the bearer token between runs, the way a browser
client keeps it in local storage. There is no server-side session to clear.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

DEFAULT_TOKEN_FILE = Path.home() / ".todoapp" / "token.json"


class TokenStore(ABC):
    @abstractmethod
    def get(self) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, token: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryTokenStore(TokenStore):
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore(TokenStore):
    """Token saved as {"token": "..."} in a user-only readable file"""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or os.getenv("TODOAPP_TOKEN_FILE") or DEFAULT_TOKEN_FILE)

    def get(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f).get("token") or None
        except (json.JSONDecodeError, OSError, AttributeError):
            return None

    def set(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Created user-only from the start; an existing file keeps its mode
        fd = os.open(str(self.path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump({"token": token}, f)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
