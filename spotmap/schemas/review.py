"""Pydantic schemas for Review, Tag and User references."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Public view of a user embedded in hydrated responses."""

    id: UUID
    username: str
    reputation: int

    model_config = ConfigDict(from_attributes=True)


class TagSummary(BaseModel):
    """Tag embedded in hydrated spot responses."""

    id: UUID
    label: str
    seeded: bool

    model_config = ConfigDict(from_attributes=True)


# Schema for reviewing an existing spot
class ReviewCreate(BaseModel):
    """Schema for adding a review to a spot."""

    description: str = Field(..., description="Written review of the spot")
    rating: float = Field(..., description="Rating from 1 to 5")


class ReviewResponse(BaseModel):
    """Schema for review responses."""

    id: UUID
    creator_id: UUID
    description: str
    rating: float
    timestamp: datetime
    creator: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)
