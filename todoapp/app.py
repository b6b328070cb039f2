"""Application wiring: settings -> logging, stores, auth and todo services"""

from pathlib import Path
from typing import Optional

from .auth.models import User
from .auth.security import BcryptHasher, Hasher, SerializerTokenSigner, TokenSigner
from .auth.service import AuthService
from .core.config import Settings, load_settings
from .stores.base import Collection
from .stores.json_file import JsonFileCollection
from .stores.memory import MemoryCollection
from .todos.models import Todo
from .todos.service import TodoService
from .utils.logger import get_logger, setup_logger

logger = get_logger(__name__)


class TodoApp:
    """Holds the configured services for one server process"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        users: Optional[Collection[User]] = None,
        todos: Optional[Collection[Todo]] = None,
        hasher: Optional[Hasher] = None,
        signer: Optional[TokenSigner] = None,
    ):
        self.settings = settings
        self.users = users
        self.todos = todos
        self.hasher = hasher
        self.signer = signer
        self.auth_service: Optional[AuthService] = None
        self.todo_service: Optional[TodoService] = None

    def _build_collections(self) -> None:
        storage = self.settings.storage
        if storage.backend == "json":
            data_dir = Path(storage.data_dir)
            if self.users is None:
                self.users = JsonFileCollection(data_dir / "users.json", User, key="users")
            if self.todos is None:
                self.todos = JsonFileCollection(data_dir / "todos.json", Todo, key="todos")
        else:
            if self.users is None:
                self.users = MemoryCollection()
            if self.todos is None:
                self.todos = MemoryCollection()

    def initialize(self) -> "TodoApp":
        """Load settings (if not given) and build every service"""
        if self.settings is None:
            self.settings = load_settings()

        config = self.settings
        setup_logger(
            log_level=config.logging.level,
            log_format=config.logging.format,
            file_path=config.logging.file_path,
            max_bytes=config.logging.max_bytes,
            backup_count=config.logging.backup_count,
        )

        self._build_collections()
        if self.hasher is None:
            self.hasher = BcryptHasher(rounds=config.auth.bcrypt_rounds)
        if self.signer is None:
            self.signer = SerializerTokenSigner(
                secret_key=config.auth.secret_key,
                max_age_seconds=config.auth.token_expiry_hours * 3600,
            )

        self.auth_service = AuthService(
            users=self.users,
            hasher=self.hasher,
            signer=self.signer,
            generic_login_errors=config.auth.generic_login_errors,
        )
        self.todo_service = TodoService(self.todos)

        logger.info(
            "Application initialized",
            app_name=config.app.name,
            version=config.app.version,
            environment=config.app.environment,
            storage=config.storage.backend,
        )
        return self
