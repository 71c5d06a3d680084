"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    LoginResponse,
    MessageResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)

__all__ = [
    "LoginResponse",
    "MessageResponse",
    "RegisterResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
