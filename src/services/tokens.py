"""Signed bearer tokens.

Tokens are stateless HS256 JWTs carrying the subject id, email, issue time
and expiry. They are tamper-evident but not encrypted, so nothing secret goes
into the claims.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

DEFAULT_TOKEN_LIFETIME = timedelta(days=7)


class InvalidTokenError(Exception):
    """The token is malformed, tampered with, or expired."""


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a session token."""

    subject: str
    email: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def for_user(
        cls,
        user_id: str,
        email: str,
        issued_at: datetime | None = None,
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
    ) -> "TokenClaims":
        issued_at = issued_at or datetime.now(UTC)
        # JWT timestamps have whole-second precision
        issued_at = issued_at.replace(microsecond=0)
        return cls(
            subject=str(user_id),
            email=email,
            issued_at=issued_at,
            expires_at=issued_at + lifetime,
        )

    def to_payload(self) -> dict:
        return {
            "sub": self.subject,
            "email": self.email,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }


def issue_token(claims: TokenClaims, secret: str, algorithm: str = "HS256") -> str:
    """Sign the claims into a compact JWT."""
    return jwt.encode(claims.to_payload(), secret, algorithm=algorithm)


def verify_token(
    token: str | None,
    secret: str,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> TokenClaims:
    """Check a token's signature and expiry and return its claims.

    Args:
        token: Compact JWT as sent in the Authorization header
        secret: Signing secret
        algorithm: The only algorithm accepted
        now: Reference time for the expiry check, defaults to the current time

    Raises:
        InvalidTokenError: If the token cannot be trusted
    """
    if not token:
        raise InvalidTokenError("Token is empty")

    # jose re-enables its own wall-clock expiry check whenever require_exp is
    # set, so presence and expiry of iat/exp are both checked below
    options = {
        "require_sub": True,
        "require_iat": False,
        "require_exp": False,
        "verify_exp": False,
    }

    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm], options=options)
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    try:
        issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
    except KeyError as e:
        raise InvalidTokenError(f"Token is missing the {e.args[0]} claim") from e
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidTokenError("Token timestamps are malformed") from e

    if now is None:
        now = datetime.now(UTC)
    if now >= expires_at:
        raise InvalidTokenError("Signature has expired.")

    return TokenClaims(
        subject=str(payload["sub"]),
        email=str(payload.get("email", "")),
        issued_at=issued_at,
        expires_at=expires_at,
    )
