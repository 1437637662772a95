"""Pydantic schemas for Spot."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from spotmap.schemas.review import ReviewResponse, TagSummary


class Location(BaseModel):
    """GPS coordinates of a spot."""

    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")


# Schema for creating a spot (with its first review)
class SpotCreate(BaseModel):
    """Schema for creating a new spot.

    Title and floor format rules are enforced by the lifecycle service so the
    same messages are returned regardless of caller.
    """

    title: str = Field(..., description="Unique name, 3-20 letters, digits, spaces or apostrophes")
    location: Location
    floor: str | None = Field(None, description="1-3 uppercase letters/digits, defaults to '1'")
    tag: str = Field(..., description="Tag label; created if it does not exist")
    description: str = Field(..., description="Text of the first review")
    rating: float = Field(..., description="Rating of the first review, 1 to 5")


class SpotReportResponse(BaseModel):
    """A report recorded against a spot."""

    reporter_id: UUID
    reporter_score: int

    model_config = ConfigDict(from_attributes=True)


# Response schema (document only, references as ids)
class SpotResponse(BaseModel):
    """Schema for spot responses."""

    id: UUID
    title: str
    creator_id: UUID
    location: Location
    floor: str
    tag_id: UUID
    review_ids: list[UUID] = Field(default_factory=list, description="Reviews in chronological order")
    rating: float
    timestamp: datetime
    reports: list[SpotReportResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class SpotWithReviewsResponse(SpotResponse):
    """Spot with its reviews (and their authors) hydrated."""

    reviews: list[ReviewResponse] = Field(default_factory=list)


class SpotDetailResponse(SpotWithReviewsResponse):
    """Spot with its tag and reviews hydrated, as shown on the map."""

    tag: TagSummary


class SpotReviewResult(BaseModel):
    """Result of adding a review to a spot."""

    spot: SpotWithReviewsResponse
    review: ReviewResponse
