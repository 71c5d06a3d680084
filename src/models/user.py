"""User model."""

import uuid

from sqlalchemy import Column, String

from src.database import Base
from src.models.mixins import TimestampMixin


def generate_user_id() -> str:
    """Generate a random, non-reusable user id."""
    return str(uuid.uuid4())


class User(Base, TimestampMixin):
    """User account used for authentication."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_user_id)
    # Stored normalized (trimmed, lowercase); uniqueness is enforced here
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False, default="", server_default="")

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
