"""Python client for the todo API"""

from .api_client import ApiError, TodoApiClient
from .token_store import FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "ApiError",
    "TodoApiClient",
    "FileTokenStore",
    "MemoryTokenStore",
    "TokenStore",
]
