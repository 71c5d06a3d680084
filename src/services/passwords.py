"""Password hashing."""

from typing import Protocol

from passlib.context import CryptContext

MIN_BCRYPT_ROUNDS = 10


class PasswordHasher(Protocol):
    """One-way, salted password hashing."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...

    def dummy_verify(self) -> None: ...


class BcryptPasswordHasher:
    """Password hasher backed by passlib's bcrypt scheme."""

    def __init__(self, rounds: int = MIN_BCRYPT_ROUNDS) -> None:
        if rounds < MIN_BCRYPT_ROUNDS:
            raise ValueError(f"bcrypt rounds must be at least {MIN_BCRYPT_ROUNDS}")
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        A stored hash that passlib cannot identify counts as a mismatch.
        """
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        """Spend the time of a verify when there is no stored hash to check."""
        self._context.dummy_verify()
