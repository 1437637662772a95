"""Pydantic schemas for the spotmap API."""

from spotmap.schemas.review import ReviewCreate, ReviewResponse, TagSummary, UserSummary
from spotmap.schemas.spot import (
    Location,
    SpotCreate,
    SpotDetailResponse,
    SpotReportResponse,
    SpotResponse,
    SpotReviewResult,
    SpotWithReviewsResponse,
)

__all__ = [
    # Spot
    "Location",
    "SpotCreate",
    "SpotResponse",
    "SpotWithReviewsResponse",
    "SpotDetailResponse",
    "SpotReportResponse",
    "SpotReviewResult",
    # Review
    "ReviewCreate",
    "ReviewResponse",
    # References
    "TagSummary",
    "UserSummary",
]
