"""API request/response models"""

from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, Field

from todoapp.auth.models import PublicUser


class RegisterRequest(BaseModel):
    """Request model for registration; presence is checked by AuthService"""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """Token plus public user fields"""
    message: str
    token: str
    user: PublicUser


class CreateTodoRequest(BaseModel):
    text: Optional[str] = None
    date: Optional[Date] = Field(default=None, description="ISO date (YYYY-MM-DD)")


class DeleteResponse(BaseModel):
    success: bool = True
