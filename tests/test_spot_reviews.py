"""Tests for adding reviews to spots."""

import pytest
from unittest.mock import patch
from uuid import uuid4

from sqlalchemy import update

from spotmap.exceptions import ConcurrentUpdateError, ForbiddenError, NotFoundError, ValidationError
from spotmap.models import Review, Spot
from spotmap.services.spot_lifecycle import ALREADY_REVIEWED
from spotmap.services.spot_query import SPOT_NOT_FOUND
from tests.conftest import count_rows


pytestmark = pytest.mark.asyncio


class TestAddReview:
    """Appending reviews and recomputing the mean rating."""

    async def test_appends_review_and_updates_rating(self, services, spot, reviewer):
        updated, review = await services.lifecycle.add_review(
            spot.id, reviewer.id, "Too noisy at lunch", 2
        )

        assert updated.rating == 3.0
        assert updated.review_ids[-1] == review.id
        assert len(updated.review_ids) == 2
        assert updated.version == 2
        assert review.creator_id == reviewer.id

    async def test_returned_spot_has_review_authors(self, services, spot, creator, reviewer):
        updated, _ = await services.lifecycle.add_review(spot.id, reviewer.id, "Cozy", 5)

        assert [r.creator.username for r in updated.reviews] == [creator.username, reviewer.username]

    async def test_rating_is_mean_of_all_reviews(
        self, services, spot, reviewer, second_reviewer
    ):
        await services.lifecycle.add_review(spot.id, reviewer.id, "Meh", 1)
        updated, _ = await services.lifecycle.add_review(
            spot.id, second_reviewer.id, "Great light", 5
        )

        assert updated.rating == pytest.approx((4 + 1 + 5) / 3)

        stored = await services.queries.get_by_id(spot.id)
        assert stored.rating == pytest.approx(10 / 3)
        assert len(stored.reviews) == 3

    async def test_fractional_ratings(self, services, spot, reviewer):
        updated, _ = await services.lifecycle.add_review(spot.id, reviewer.id, "Decent", 2.5)

        assert updated.rating == pytest.approx(3.25)


class TestAddReviewRejections:
    async def test_creator_cannot_review_own_spot(self, db, services, spot, creator):
        review_ids = list(spot.review_ids)

        with pytest.raises(ForbiddenError) as exc_info:
            await services.lifecycle.add_review(spot.id, creator.id, "Best spot ever", 5)

        assert exc_info.value.message == ALREADY_REVIEWED
        assert exc_info.value.status_code == 403
        assert await count_rows(db, Review) == 1

        stored = await services.queries.get_by_id(spot.id)
        assert stored.rating == 4
        assert stored.review_ids == review_ids

    async def test_one_review_per_user(self, db, services, spot, reviewer):
        reviewed, _ = await services.lifecycle.add_review(spot.id, reviewer.id, "Nice", 2)
        review_ids = list(reviewed.review_ids)

        with pytest.raises(ForbiddenError) as exc_info:
            await services.lifecycle.add_review(spot.id, reviewer.id, "Still nice", 5)

        assert exc_info.value.message == ALREADY_REVIEWED
        assert await count_rows(db, Review) == 2

        stored = await services.queries.get_by_id(spot.id)
        assert stored.rating == 3.0
        assert stored.review_ids == review_ids

    async def test_missing_spot(self, services, reviewer):
        with pytest.raises(NotFoundError) as exc_info:
            await services.lifecycle.add_review(uuid4(), reviewer.id, "Where is it?", 3)

        assert exc_info.value.message == SPOT_NOT_FOUND

    async def test_invalid_rating_leaves_spot_unchanged(self, services, spot, reviewer):
        with pytest.raises(ValidationError):
            await services.lifecycle.add_review(spot.id, reviewer.id, "Off the scale", 0)

        stored = await services.queries.get_by_id(spot.id)
        assert stored.rating == 4
        assert len(stored.review_ids) == 1


class TestAddReviewConcurrency:
    async def test_concurrent_change_removes_new_review(self, db, services, spot, reviewer):
        """A spot changed between read and write rejects the review and deletes it again."""
        spot_id = spot.id
        reviewer_id = reviewer.id
        create_review = services.reviews.create

        async def create_then_race(author_id, text, rating):
            review = await create_review(author_id, text, rating)
            await db.execute(
                update(Spot)
                .where(Spot.id == spot_id)
                .values(version=Spot.version + 1)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
            return review

        with patch.object(services.reviews, "create", create_then_race):
            with pytest.raises(ConcurrentUpdateError):
                await services.lifecycle.add_review(spot_id, reviewer_id, "Lost update", 1)

        assert await count_rows(db, Review) == 1
        stored = await services.queries.get_by_id(spot_id)
        assert stored.rating == 4
        assert len(stored.review_ids) == 1
