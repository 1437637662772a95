"""Spot API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from spotmap.api.deps import get_current_user_id, get_spot_services
from spotmap.models import Spot
from spotmap.schemas.review import ReviewCreate
from spotmap.schemas.spot import (
    SpotCreate,
    SpotDetailResponse,
    SpotResponse,
    SpotReviewResult,
    SpotWithReviewsResponse,
)
from spotmap.services.container import SpotServices

router = APIRouter(tags=["spots"])

Services = Annotated[SpotServices, Depends(get_spot_services)]
CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]


@router.post(
    "/spots",
    response_model=SpotResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a spot",
)
async def create_spot(
    spot_data: SpotCreate,
    user_id: CurrentUserId,
    services: Services,
) -> Spot:
    """Create a spot together with its first review."""
    return await services.lifecycle.create_spot(
        title=spot_data.title,
        creator_id=user_id,
        location=spot_data.location.model_dump(),
        floor=spot_data.floor,
        tag_label=spot_data.tag,
        description=spot_data.description,
        rating=spot_data.rating,
    )


@router.get(
    "/spots",
    response_model=list[SpotDetailResponse],
    summary="List spots, optionally inside a bounding box",
)
async def list_spots(
    services: Services,
    min_lat: Annotated[float | None, Query(description="Exclusive lower latitude")] = None,
    max_lat: Annotated[float | None, Query(description="Exclusive upper latitude")] = None,
    min_lng: Annotated[float | None, Query(description="Exclusive lower longitude")] = None,
    max_lng: Annotated[float | None, Query(description="Exclusive upper longitude")] = None,
) -> list[Spot]:
    """List every spot, or only those strictly inside the given box."""
    bounds = (min_lat, max_lat, min_lng, max_lng)
    if all(bound is None for bound in bounds):
        return await services.queries.list_all()
    if any(bound is None for bound in bounds):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="min_lat, max_lat, min_lng and max_lng must be given together",
        )
    return await services.queries.get_by_bounding_box(min_lat, max_lat, min_lng, max_lng)


@router.get(
    "/spots/{spot_id}",
    response_model=SpotWithReviewsResponse,
    summary="Get spot by ID",
)
async def get_spot(spot_id: UUID, services: Services) -> Spot:
    """Get spot details with its reviews."""
    return await services.queries.get_by_id(spot_id)


@router.delete(
    "/spots/{spot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete spot",
)
async def delete_spot(spot_id: UUID, user_id: CurrentUserId, services: Services) -> None:
    """Delete a spot. Only its creator may, and only within a day of creating it."""
    await services.lifecycle.delete_spot(spot_id, user_id)


@router.post(
    "/spots/{spot_id}/reviews",
    response_model=SpotReviewResult,
    status_code=status.HTTP_201_CREATED,
    summary="Review a spot",
)
async def add_review(
    spot_id: UUID,
    review_data: ReviewCreate,
    user_id: CurrentUserId,
    services: Services,
) -> dict:
    """Add the current user's review to a spot."""
    spot, review = await services.lifecycle.add_review(
        spot_id, user_id, review_data.description, review_data.rating
    )
    return {"spot": spot, "review": review}


@router.post(
    "/spots/{spot_id}/reports",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Report a spot",
)
async def report_spot(spot_id: UUID, user_id: CurrentUserId, services: Services) -> None:
    """Report a spot. Enough weighted reports remove it."""
    await services.lifecycle.report_spot(spot_id, user_id)


@router.get(
    "/users/{user_id}/spots",
    response_model=list[SpotResponse],
    summary="List spots created by a user",
)
async def list_user_spots(user_id: UUID, services: Services) -> list[Spot]:
    """List the spots a user created."""
    return await services.queries.get_by_creator(user_id)


@router.get(
    "/tags/{label}/spots",
    response_model=list[SpotDetailResponse],
    summary="List spots with a tag",
)
async def list_tagged_spots(label: str, services: Services) -> list[Spot]:
    """List the spots carrying a tag."""
    return await services.queries.get_by_tag_label(label)


@router.get(
    "/reviews/{review_id}/spot",
    response_model=SpotDetailResponse | None,
    summary="Get the spot a review belongs to",
)
async def get_review_spot(review_id: UUID, services: Services) -> Spot | None:
    """Get the spot that holds a review, or null if none does."""
    return await services.queries.get_by_review_id(review_id)
