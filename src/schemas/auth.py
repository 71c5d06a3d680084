"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """User registration request.

    Missing credentials are reported by the account store, so every field is
    optional here.
    """

    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(BaseModel):
    """Public user information."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class RegisterResponse(BaseModel):
    """Registration response."""

    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    """Login response with the bearer token."""

    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Error body returned for every failed request."""

    message: str
