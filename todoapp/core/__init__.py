"""Core configuration for the task tracker"""

from .config import Settings, load_settings

__all__ = [
    "Settings",
    "load_settings",
]
