"""Review model - a user's written and numeric opinion of a spot."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotmap.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from spotmap.models.user import User


class Review(Base, UUIDMixin, TimestampMixin):
    """A review exists independently of spots; spots reference it by id."""

    __tablename__ = "reviews"

    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)  # 1-5 inclusive

    # Relationships
    creator: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Review(id={self.id}, creator_id={self.creator_id}, rating={self.rating})>"
