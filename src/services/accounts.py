"""Account store: user registration and lookup."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.exceptions import ConflictError, ValidationError
from src.models.user import User
from src.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = "Email and password required"
EMAIL_IN_USE_MESSAGE = "Email already in use"


def normalize_email(email: str) -> str:
    """Normalize an email for storage and lookup."""
    return email.strip().lower()


class AccountStore:
    """Persists users and enforces one account per email."""

    def __init__(self, db: Session, hasher: PasswordHasher) -> None:
        self.db = db
        self.hasher = hasher

    def register(self, name: str | None, email: str | None, password: str | None) -> User:
        """Create a new account.

        Raises:
            ValidationError: If email or password is missing
            ConflictError: If an account with the same email exists
        """
        if not email or not email.strip() or not password:
            raise ValidationError(MISSING_CREDENTIALS_MESSAGE)

        normalized = normalize_email(email)
        if self.find_by_email(normalized) is not None:
            raise ConflictError(EMAIL_IN_USE_MESSAGE)

        user = User(
            name=(name or "").strip(),
            email=normalized,
            password_hash=self.hasher.hash(password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent registration won the race on the unique index
            self.db.rollback()
            raise ConflictError(EMAIL_IN_USE_MESSAGE) from e
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.email})")
        return user

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email, ignoring case and surrounding whitespace."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: str) -> User | None:
        """Get a user by id."""
        return self.db.get(User, user_id)

    def delete(self, user: User) -> None:
        """Remove an account. Outstanding tokens for it stop validating."""
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user.id} ({user.email})")
