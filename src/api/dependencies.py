"""FastAPI dependencies for authentication, services and the database."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.models.user import User
from src.services.accounts import AccountStore
from src.services.auth import SessionAuthority
from src.services.catalog import CatalogService
from src.services.passwords import BcryptPasswordHasher, PasswordHasher

# Missing headers are reported by the session authority as 401
security = HTTPBearer(auto_error=False)


@lru_cache
def build_password_hasher(rounds: int) -> PasswordHasher:
    """Get a cached password hasher for a bcrypt work factor."""
    return BcryptPasswordHasher(rounds=rounds)


def get_password_hasher(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PasswordHasher:
    """Get the password hasher configured with the bcrypt work factor."""
    return build_password_hasher(settings.bcrypt_rounds)


def get_account_store(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AccountStore:
    """Get account store bound to the request's session."""
    return AccountStore(db, hasher)


def get_session_authority(
    store: Annotated[AccountStore, Depends(get_account_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionAuthority:
    """Get session authority with dependencies."""
    return SessionAuthority(store, hasher, settings)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    authority: Annotated[SessionAuthority, Depends(get_session_authority)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    token = credentials.credentials if credentials else None
    return authority.validate(token)


def get_catalog_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> CatalogService:
    """Get TMDB catalog service."""
    return CatalogService(settings)
