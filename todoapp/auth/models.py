"""
Auth models.

User records are persisted through a Collection; the password is only ever
stored as a bcrypt hash and PublicUser is the only shape sent to clients.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class User(BaseModel):
    """Registered user record"""

    id: str = Field(default_factory=lambda: str(uuid4()))
    email: str
    password_hash: str
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def to_public(self) -> "PublicUser":
        return PublicUser(id=self.id, email=self.email, name=self.name)


class PublicUser(BaseModel):
    """User fields safe to return to any client"""

    id: str
    email: str
    name: str


class TokenClaims(BaseModel):
    """Identity embedded in a signed session token"""

    user_id: str
    email: str


class AuthResult(BaseModel):
    """Outcome of register/login: a fresh token plus the public user"""

    token: str
    user: PublicUser
