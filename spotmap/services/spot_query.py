"""Spot query service - read paths that hydrate related reviews, tags and users."""

from uuid import UUID

from spotmap.exceptions import NotFoundError
from spotmap.models import Spot, SpotReview
from spotmap.services.contracts import (
    ReviewServiceContract,
    SpotStoreContract,
    TagServiceContract,
    UserServiceContract,
)

SPOT_NOT_FOUND = "No such spot with that id!"

# Relation paths loaded for each read shape
REVIEW_PATHS = ("reviews.creator",)
MAP_PATHS = ("tag", "reviews.creator")
FULL_PATHS = ("creator", "tag", "reviews.creator")


class SpotQueryService:
    def __init__(
        self,
        store: SpotStoreContract,
        reviews: ReviewServiceContract,
        tags: TagServiceContract,
        users: UserServiceContract,
    ):
        self.store = store
        self.reviews = reviews
        self.tags = tags
        self.users = users

    async def get_by_id(self, spot_id: UUID) -> Spot:
        """Get a spot with its reviews and their authors, or raise ``NotFoundError``."""
        spot = await self.store.find_one(Spot.id == spot_id, populate=REVIEW_PATHS)
        if spot is None:
            raise NotFoundError(SPOT_NOT_FOUND)
        return spot

    async def get_by_creator(self, user_id: UUID) -> list[Spot]:
        """All spots created by an existing user (not hydrated)."""
        await self.users.get_by_id(user_id)
        return await self.store.find(Spot.creator_id == user_id)

    async def get_by_bounding_box(
        self,
        min_latitude: float,
        max_latitude: float,
        min_longitude: float,
        max_longitude: float,
    ) -> list[Spot]:
        """Spots strictly inside the box; points on an edge are excluded."""
        return await self.store.find(
            Spot.latitude > min_latitude,
            Spot.latitude < max_latitude,
            Spot.longitude > min_longitude,
            Spot.longitude < max_longitude,
            populate=MAP_PATHS,
        )

    async def get_by_tag_label(self, label: str) -> list[Spot]:
        """Spots carrying the tag with this label; ``NotFoundError`` if no such tag."""
        tag = await self.tags.get_by_label(label)
        return await self.store.find(Spot.tag_id == tag.id, populate=MAP_PATHS)

    async def get_by_review_id(self, review_id: UUID) -> Spot | None:
        """The spot that references this review, or None if no spot does."""
        await self.reviews.get_by_id(review_id)
        return await self.store.find_one(
            Spot.review_links.any(SpotReview.review_id == review_id),
            populate=FULL_PATHS,
        )

    async def list_all(self) -> list[Spot]:
        """Every spot, with tag and reviews hydrated."""
        return await self.store.find(populate=MAP_PATHS)
