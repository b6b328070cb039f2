"""Storage backends for users and todos"""

from .base import Collection
from .memory import MemoryCollection
from .json_file import JsonFileCollection

__all__ = [
    "Collection",
    "MemoryCollection",
    "JsonFileCollection",
]
