"""
Authentication service.

- Email/password users with bcrypt hashes
- Stateless signed session tokens (24 hours by default)
- Users persisted through an injected Collection

Users are created only through register() and never updated or deleted here.
"""

from __future__ import annotations

import threading
from typing import Optional

from todoapp.stores.base import Collection
from todoapp.utils.exceptions import (
    AuthError,
    ConflictError,
    MissingTokenError,
    NotFoundError,
    ValidationError,
)
from todoapp.utils.logger import get_logger

from .models import AuthResult, PublicUser, TokenClaims, User
from .security import Hasher, TokenSigner

logger = get_logger(__name__)

GENERIC_LOGIN_ERROR = "Invalid email or password"


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class AuthService:
    """Registration, login and token checks over a users collection"""

    def __init__(
        self,
        users: Collection[User],
        hasher: Hasher,
        signer: TokenSigner,
        generic_login_errors: bool = False,
    ):
        self.users = users
        self.hasher = hasher
        self.signer = signer
        self.generic_login_errors = generic_login_errors
        self._register_lock = threading.Lock()

    def _find_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        return self.users.find_one(lambda u: u.email.lower() == wanted)

    def _issue(self, user: User) -> AuthResult:
        token = self.signer.issue(TokenClaims(user_id=user.id, email=user.email))
        return AuthResult(token=token, user=user.to_public())

    def register(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> AuthResult:
        """
        Create a user and log them in.

        Raises ValidationError if any field is missing and ConflictError if
        the email (case-insensitive) is already registered.
        """
        if _blank(email) or _blank(password) or _blank(name):
            raise ValidationError("Email, password and name are all required")

        email = email.strip()
        # Hash outside the lock; the uniqueness check and the write happen together
        user = User(
            email=email,
            password_hash=self.hasher.hash(password),
            name=name.strip(),
        )
        with self._register_lock:
            if self._find_by_email(email):
                raise ConflictError("Email is already registered")
            self.users.put(user)
        logger.info("User registered", user_id=user.id)
        return self._issue(user)

    def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Check credentials and issue a fresh token.

        Unknown email and wrong password raise AuthError with different
        messages unless generic_login_errors is set.
        """
        if _blank(email) or _blank(password):
            raise ValidationError("Email and password are required")

        user = self._find_by_email(email)
        if not user:
            logger.info("Login failed", reason="unknown_email")
            raise AuthError(GENERIC_LOGIN_ERROR if self.generic_login_errors else "Email not found")

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed", reason="wrong_password", user_id=user.id)
            raise AuthError(GENERIC_LOGIN_ERROR if self.generic_login_errors else "Incorrect password")

        logger.info("User logged in", user_id=user.id)
        return self._issue(user)

    def authenticate(self, token: Optional[str]) -> TokenClaims:
        """Validate a bearer token and return its claims"""
        if not token:
            raise MissingTokenError("Token is required")
        return self.signer.verify(token)

    def get_current_user(self, user_id: str) -> PublicUser:
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user.to_public()
