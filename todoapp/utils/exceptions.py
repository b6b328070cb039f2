"""Custom exceptions for the task tracker"""


class TodoAppError(Exception):
    """Base exception for the task tracker"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(TodoAppError):
    """A required field is missing or malformed"""
    pass


class ConflictError(TodoAppError):
    """Record already exists (duplicate email)"""
    pass


class AuthError(TodoAppError):
    """Bad credentials"""
    pass


class MissingTokenError(TodoAppError):
    """No bearer token was presented"""
    pass


class InvalidTokenError(TodoAppError):
    """Token signature is invalid or the token has expired"""
    pass


class NotFoundError(TodoAppError):
    """Unknown user/todo, or todo owned by someone else"""
    pass


class StorageError(TodoAppError):
    """Backing store could not be read or written"""
    pass


class ConfigError(TodoAppError):
    """Configuration error"""
    pass
