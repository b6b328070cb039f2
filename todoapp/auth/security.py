"""
Cryptographic capabilities handed to AuthService.

Hasher:      bcrypt password hashing (intentionally slow, CPU bound)
TokenSigner: itsdangerous timed serializer (HMAC signature + max age)

Both are small interfaces so tests can use cheap settings or a fake clock.
"""

from __future__ import annotations

import base64
import hashlib
import time
from abc import ABC, abstractmethod
from typing import Callable

import bcrypt
from itsdangerous import BadSignature, SignatureExpired, TimestampSigner, URLSafeTimedSerializer

from todoapp.utils.exceptions import InvalidTokenError

from .models import TokenClaims

TOKEN_SALT = "todoapp-session"


class Hasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...


class BcryptHasher(Hasher):
    """
    Salted bcrypt hashes.

    bcrypt only accepts 72 bytes, so the password is first reduced to a
    base64 SHA-256 digest (44 bytes) in both hash() and verify().
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @staticmethod
    def _prehash(password: str) -> bytes:
        return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._prehash(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(self._prehash(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False


class TokenSigner(ABC):
    @abstractmethod
    def issue(self, claims: TokenClaims) -> str:
        ...

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """Return the embedded claims or raise InvalidTokenError"""


class SerializerTokenSigner(TokenSigner):
    """
    Signed, time-boxed session tokens.

    The payload is {"userId": ..., "email": ...}; expiry is enforced on
    verification against the timestamp itsdangerous embeds at signing time.
    Nothing is stored server-side, so tokens cannot be revoked early.
    """

    def __init__(
        self,
        secret_key: str,
        max_age_seconds: int = 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ):
        if not secret_key:
            raise ValueError("secret_key is required for token signing")
        self.max_age_seconds = max_age_seconds

        class _ClockedSigner(TimestampSigner):
            def get_timestamp(self) -> int:
                return int(clock())

        self._serializer = URLSafeTimedSerializer(
            secret_key=secret_key,
            salt=TOKEN_SALT,
            signer=_ClockedSigner,
        )

    def issue(self, claims: TokenClaims) -> str:
        return self._serializer.dumps({"userId": claims.user_id, "email": claims.email})

    def verify(self, token: str) -> TokenClaims:
        try:
            data = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired:
            raise InvalidTokenError("Token has expired")
        except BadSignature:
            raise InvalidTokenError("Invalid token")
        if not isinstance(data, dict) or not data.get("userId"):
            raise InvalidTokenError("Invalid token payload")
        return TokenClaims(user_id=str(data["userId"]), email=str(data.get("email") or ""))
