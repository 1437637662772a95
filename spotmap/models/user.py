"""User model - people who create, review and report spots."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from spotmap.models.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """A map contributor. Reputation weighs their reports during moderation."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation."""
        return f"<User(id={self.id}, username='{self.username}', reputation={self.reputation})>"
