"""SQLAlchemy models for spotmap."""

from spotmap.models.base import Base, TimestampMixin, UUIDMixin
from spotmap.models.review import Review
from spotmap.models.spot import Spot, SpotReport, SpotReview
from spotmap.models.tag import Tag
from spotmap.models.user import User

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Models
    "User",
    "Tag",
    "Review",
    "Spot",
    "SpotReview",
    "SpotReport",
]
