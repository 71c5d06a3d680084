"""Session authority: login and bearer token validation."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from src.config import Settings
from src.exceptions import AuthError, ValidationError
from src.models.user import User
from src.services.accounts import MISSING_CREDENTIALS_MESSAGE, AccountStore
from src.services.passwords import PasswordHasher
from src.services.tokens import InvalidTokenError, TokenClaims, issue_token, verify_token

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
MISSING_TOKEN_MESSAGE = "Missing token"
INVALID_TOKEN_MESSAGE = "Invalid token"


@dataclass(frozen=True)
class PublicUser:
    """The fields of a user that may leave the server."""

    id: str
    name: str
    email: str


class SessionAuthority:
    """Issues session tokens and resolves them back to users."""

    def __init__(self, store: AccountStore, hasher: PasswordHasher, settings: Settings) -> None:
        self.store = store
        self.hasher = hasher
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.token_lifetime = timedelta(minutes=settings.jwt_expiration_minutes)

    def login(
        self, email: str | None, password: str | None, now: datetime | None = None
    ) -> tuple[str, User]:
        """Check credentials and issue a token.

        Returns:
            The signed token and the authenticated user

        Raises:
            ValidationError: If email or password is missing
            AuthError: If the credentials do not match an account
        """
        if not email or not email.strip() or not password:
            raise ValidationError(MISSING_CREDENTIALS_MESSAGE)

        user = self.store.find_by_email(email)
        if user is None:
            # Unknown emails cost as much as wrong passwords
            self.hasher.dummy_verify()
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info(f"Failed login for {email.strip().lower()}")
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        claims = TokenClaims.for_user(
            user.id, user.email, issued_at=now, lifetime=self.token_lifetime
        )
        token = issue_token(claims, self.secret, self.algorithm)
        logger.info(f"User {user.id} logged in")
        return token, user

    def validate(self, token: str | None, now: datetime | None = None) -> User:
        """Resolve a bearer token to its user.

        Raises:
            AuthError: If the token is missing, invalid, expired, or its user is gone
        """
        if not token:
            raise AuthError(MISSING_TOKEN_MESSAGE)

        try:
            claims = verify_token(token, self.secret, self.algorithm, now=now)
        except InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise AuthError(INVALID_TOKEN_MESSAGE) from e

        user = self.store.find_by_id(claims.subject)
        if user is None:
            logger.debug(f"Rejected token for missing user {claims.subject}")
            raise AuthError(INVALID_TOKEN_MESSAGE)
        return user

    @staticmethod
    def me(user: User) -> PublicUser:
        return PublicUser(id=user.id, name=user.name or "", email=user.email)
