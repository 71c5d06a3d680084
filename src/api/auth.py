"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_account_store, get_current_user, get_session_authority
from src.models.user import User
from src.schemas.auth import (
    LoginResponse,
    MessageResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.accounts import AccountStore
from src.services.auth import SessionAuthority

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={400: {"model": MessageResponse}, 409: {"model": MessageResponse}},
)
def register(
    user_data: UserRegister,
    store: Annotated[AccountStore, Depends(get_account_store)],
):
    """Register a new user."""
    user = store.register(user_data.name, user_data.email, user_data.password)
    return RegisterResponse(message="Registered", user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": MessageResponse}, 401: {"model": MessageResponse}},
)
def login(
    credentials: UserLogin,
    authority: Annotated[SessionAuthority, Depends(get_session_authority)],
):
    """Login with email and password."""
    token, user = authority.login(credentials.email, credentials.password)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse, responses={401: {"model": MessageResponse}})
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return UserResponse.model_validate(SessionAuthority.me(current_user))
