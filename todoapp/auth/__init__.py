"""Authentication: users, password hashing and session tokens"""

from .models import AuthResult, PublicUser, TokenClaims, User
from .security import BcryptHasher, Hasher, SerializerTokenSigner, TokenSigner
from .service import AuthService

__all__ = [
    "AuthResult",
    "PublicUser",
    "TokenClaims",
    "User",
    "BcryptHasher",
    "Hasher",
    "SerializerTokenSigner",
    "TokenSigner",
    "AuthService",
]
