"""Spot lifecycle - creation saga, reviews, the deletion window and moderation.

Spots, reviews, tags and users are separate documents written one at a time.
``create_spot`` and ``add_review`` therefore run as sagas: each write that
succeeds registers its undo action, and a failure later in the chain unwinds
them before the error reaches the caller.

Creation order:
1. Create the seed review (nothing to undo if this fails)
2. Resolve the tag by label, creating it if missing
3. Validate title and floor
4. Give the creator one reputation point
5. Insert the spot with the seed review as its only review

Undo order is always: delete the review, then delete the tag only if this call
created it. A pre-existing tag is never touched.
"""

import logging
from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from uuid import UUID

from spotmap.config import Settings, get_settings
from spotmap.exceptions import (
    ConflictError,
    DuplicateKeyError,
    ForbiddenError,
    NotFoundError,
    SpotmapError,
    UnknownError,
)
from spotmap.models import Review, Spot, Tag
from spotmap.models.base import as_utc, utcnow
from spotmap.services.contracts import (
    ReviewServiceContract,
    SpotStoreContract,
    TagServiceContract,
    UserServiceContract,
)
from spotmap.services.saga import Saga
from spotmap.services.spot_query import REVIEW_PATHS, SpotQueryService
from spotmap.services.validation import check_title_and_floor

logger = logging.getLogger(__name__)

DUPLICATE_TITLE = "A Spot already exists with this title."
ALREADY_REVIEWED = "You already submitted a review for this spot!"
NOT_OWNER = "You do not have access to delete this spot!"
ALREADY_REPORTED = "You have already reported this spot!"


@asynccontextmanager
async def _classified_errors(operation: str) -> AsyncIterator[None]:
    """Let classified errors through and wrap anything else as ``UnknownError``."""
    try:
        yield
    except SpotmapError:
        raise
    except Exception as e:
        logger.error(f"{operation} failed: {e}", exc_info=True)
        raise UnknownError(str(e)) from e


class SpotLifecycleManager:
    """Orchestrates every spot mutation across the spot, review, tag and user stores."""

    def __init__(
        self,
        store: SpotStoreContract,
        reviews: ReviewServiceContract,
        tags: TagServiceContract,
        users: UserServiceContract,
        queries: SpotQueryService,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.reviews = reviews
        self.tags = tags
        self.users = users
        self.queries = queries
        self.settings = settings or get_settings()
        self.clock = clock

    @property
    def deletion_window(self) -> timedelta:
        return timedelta(hours=self.settings.spot_deletion_window_hours)

    async def create_spot(
        self,
        title: str,
        creator_id: UUID,
        location: Mapping[str, float],
        floor: str | None,
        tag_label: str,
        description: str,
        rating: float,
    ) -> Spot:
        """Create a spot together with its seed review, undoing partial work on failure.

        Raises:
            ValidationError: bad title, floor, rating or tag label
            NotFoundError: the creator does not exist
            ConflictError: another spot already has this title
            UnknownError: any unclassified failure, message forwarded
        """
        async with _classified_errors("create_spot"):
            try:
                async with Saga("create_spot") as saga:
                    review = await self.reviews.create(creator_id, description, rating)
                    saga.add_compensation("delete_review", self.reviews.remove, review.id)

                    tag = await self._resolve_tag(tag_label, saga)

                    check_title_and_floor(title, floor)
                    await self.users.adjust_reputation(creator_id, increase=True)

                    spot = Spot(
                        title=title,
                        creator_id=creator_id,
                        latitude=location["latitude"],
                        longitude=location["longitude"],
                        floor=floor if floor is not None else self.settings.default_floor,
                        tag_id=tag.id,
                        rating=review.rating,
                    )
                    spot.append_review(review.id)
                    spot = await self.store.insert(spot)
            except DuplicateKeyError as e:
                raise ConflictError(DUPLICATE_TITLE) from e

        logger.info(f"Spot created: '{spot.title}' ({spot.id}) by {creator_id}, tag '{tag_label}'")
        return spot

    async def _resolve_tag(self, label: str, saga: Saga) -> Tag:
        """Existing tag for ``label``, or a new one that the saga will undo on failure."""
        try:
            return await self.tags.get_by_label(label)
        except NotFoundError:
            logger.debug(f"Tag '{label}' does not exist yet, creating it")

        tag = await self.tags.create(label, seeded=False)
        saga.add_compensation("delete_tag", self.tags.remove, tag.id)
        return tag

    async def add_review(
        self,
        spot_id: UUID,
        creator_id: UUID,
        description: str,
        rating: float,
    ) -> tuple[Spot, Review]:
        """Add a review and recompute the spot's mean rating.

        Each user may review a spot once, and never their own spot. If the spot
        write fails after the review was created, the review is deleted again.

        Returns:
            The updated spot (reviews and their authors hydrated) and the new review
        """
        async with _classified_errors("add_review"):
            spot = await self.queries.get_by_id(spot_id)

            authors = {existing.creator_id for existing in spot.reviews}
            if creator_id in authors or creator_id == spot.creator_id:
                raise ForbiddenError(ALREADY_REVIEWED)

            async with Saga("add_review") as saga:
                review = await self.reviews.create(creator_id, description, rating)
                saga.add_compensation("delete_review", self.reviews.remove, review.id)

                ratings = [existing.rating for existing in spot.reviews]
                ratings.append(review.rating)
                spot.append_review(review.id)
                await self.store.update_fields(spot, rating=sum(ratings) / len(ratings))

            spot = await self.store.populate(spot, REVIEW_PATHS)

        logger.info(f"Review {review.id} added to spot {spot_id}, rating now {spot.rating:.2f}")
        return spot, review

    async def delete_spot(self, spot_id: UUID, user_id: UUID) -> None:
        """Delete a spot on its creator's request within the deletion window.

        Reviews and the tag stay in place.
        """
        async with _classified_errors("delete_spot"):
            spot = await self.queries.get_by_id(spot_id)

            if spot.creator_id != user_id:
                raise ForbiddenError(NOT_OWNER)
            if self.clock() - as_utc(spot.timestamp) > self.deletion_window:
                raise ForbiddenError(
                    f"It has been more than {self.settings.spot_deletion_window_hours} hours "
                    f"since this spot was created!"
                )

            await self.store.remove(spot)

        logger.info(f"Spot {spot_id} deleted by its creator")

    async def report_spot(self, spot_id: UUID, user_id: UUID) -> None:
        """Report a spot, removing it once reports outweigh its reviews.

        Each report is worth the reporter's reputation. When the existing report
        score plus this reporter's reputation exceeds ``10 + number of reviews``,
        the spot is removed instead of recording the report.
        """
        async with _classified_errors("report_spot"):
            spot = await self.queries.get_by_id(spot_id)
            user = await self.users.get_by_id(user_id)

            if spot.has_reporter(user_id):
                raise ForbiddenError(ALREADY_REPORTED)

            score = spot.report_score + user.reputation
            threshold = self.settings.report_threshold_base + len(spot.review_ids)

            if score > threshold:
                await self.store.remove(spot)
                logger.info(
                    f"Spot {spot_id} removed by moderation (score {score} > threshold {threshold})"
                )
                return

            spot.append_report(user_id, user.reputation)
            try:
                await self.store.update_fields(spot)
            except DuplicateKeyError as e:
                raise ForbiddenError(ALREADY_REPORTED) from e

        logger.info(f"Spot {spot_id} reported by {user_id} (score {score}/{threshold})")
