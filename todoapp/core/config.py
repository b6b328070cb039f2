"""
Configuration management with schema validation.

Settings are resolved in three layers:
- defaults declared on the pydantic models below
- optional YAML file (TODOAPP_CONFIG, default config/settings.yaml) with
  ${VAR} / ${VAR:default} environment substitution
- plain environment variables (typically from .env)
"""

import os
import secrets
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from todoapp.utils.exceptions import ConfigError
from todoapp.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path("config") / "settings.yaml"


class AppSettings(BaseModel):
    name: str = "Todo API"
    version: str = "1.0.0"
    environment: str = "development"


class AuthSettings(BaseModel):
    secret_key: Optional[str] = None
    token_expiry_hours: int = 24
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    generic_login_errors: bool = False


class StorageSettings(BaseModel):
    backend: str = Field(default="json", pattern="^(memory|json)$")
    data_dir: str = "data"


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "console"
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def is_production(self) -> bool:
        return self.app.environment.strip().lower() == "production"


# (section, key, env var)
_ENV_OVERRIDES = [
    ("app", "environment", "ENVIRONMENT"),
    ("auth", "secret_key", "TODOAPP_SECRET_KEY"),
    ("auth", "token_expiry_hours", "TOKEN_EXPIRY_HOURS"),
    ("auth", "bcrypt_rounds", "BCRYPT_ROUNDS"),
    ("auth", "generic_login_errors", "AUTH_GENERIC_LOGIN_ERRORS"),
    ("storage", "backend", "TODOAPP_STORAGE"),
    ("storage", "data_dir", "TODOAPP_DATA_DIR"),
    ("server", "host", "HOST"),
    ("server", "port", "PORT"),
    ("logging", "level", "LOG_LEVEL"),
    ("logging", "format", "LOG_FORMAT"),
    ("logging", "file_path", "LOG_FILE"),
]


def _substitute_env_vars(value: Any, context: str = "") -> Any:
    """Recursively substitute ${VAR} and ${VAR:default} in config values"""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            var_expr = value[2:-1]
            if ":" in var_expr:
                var_name, default = var_expr.split(":", 1)
                return os.getenv(var_name.strip(), default.strip())
            env_value = os.getenv(var_expr)
            if env_value is None:
                error_msg = f"Environment variable {var_expr} not found"
                if context:
                    error_msg += f" (context: {context})"
                raise ConfigError(error_msg)
            return env_value
    elif isinstance(value, dict):
        return {
            k: _substitute_env_vars(v, context=f"{context}.{k}" if context else k)
            for k, v in value.items()
        }
    elif isinstance(value, list):
        return [
            _substitute_env_vars(item, context=f"{context}[{i}]" if context else f"[{i}]")
            for i, item in enumerate(value)
        ]
    return value


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"Failed to read settings from {path}: {e}")
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return _substitute_env_vars(raw)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    for section, key, env_var in _ENV_OVERRIDES:
        value = os.getenv(env_var)
        if value is None or value == "":
            continue
        data.setdefault(section, {})[key] = value

    cors = os.getenv("CORS_ORIGINS")
    if cors:
        data.setdefault("server", {})["cors_origins"] = [
            origin.strip() for origin in cors.split(",") if origin.strip()
        ]
    return data


def load_settings(config_file: Optional[str] = None, use_dotenv: bool = True) -> Settings:
    """
    Build Settings from YAML + environment.

    Raises ConfigError when the file is unreadable, a referenced variable is
    missing, or production runs without TODOAPP_SECRET_KEY.
    """
    if use_dotenv:
        load_dotenv()

    path = Path(config_file or os.getenv("TODOAPP_CONFIG") or DEFAULT_CONFIG_FILE)
    data = _apply_env_overrides(_load_yaml(path))
    try:
        settings = Settings(**data)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}")

    if not settings.auth.secret_key:
        if settings.is_production:
            raise ConfigError("TODOAPP_SECRET_KEY must be set in production")
        logger.warning("No TODOAPP_SECRET_KEY configured; using an ephemeral key")
        settings.auth.secret_key = secrets.token_urlsafe(32)

    return settings
