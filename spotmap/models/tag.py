"""Tag model - the single category label attached to every spot."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from spotmap.models.base import Base, TimestampMixin, UUIDMixin


class Tag(Base, UUIDMixin, TimestampMixin):
    """Category label ("Study", "Food", ...). Seeded tags ship with the app."""

    __tablename__ = "tags"

    label: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    seeded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Tag(id={self.id}, label='{self.label}', seeded={self.seeded})>"
