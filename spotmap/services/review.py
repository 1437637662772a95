"""Review service - creation, lookup and best-effort removal of reviews."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from spotmap.database import commit_or_rollback
from spotmap.exceptions import NotFoundError, ValidationError
from spotmap.models import Review

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 5

REVIEW_NOT_FOUND = "No such review with that id!"
INVALID_RATING = "The rating must be a number between 1 and 5!"
EMPTY_DESCRIPTION = "The review must have a description!"


class ReviewService:
    """Reviews are standalone documents; spots only hold references to them."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, author_id: UUID, text: str, rating: float) -> Review:
        """Create and commit a review."""
        if isinstance(rating, bool) or not RATING_MIN <= rating <= RATING_MAX:
            raise ValidationError(INVALID_RATING)
        if not text or not text.strip():
            raise ValidationError(EMPTY_DESCRIPTION)

        review = Review(creator_id=author_id, description=text, rating=rating)
        self.db.add(review)
        await commit_or_rollback(self.db)
        return review

    async def get_by_id(self, review_id: UUID) -> Review:
        """Get review by ID or raise ``NotFoundError``."""
        result = await self.db.execute(
            select(Review)
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
        review = result.scalar_one_or_none()
        if review is None:
            raise NotFoundError(REVIEW_NOT_FOUND)
        return review

    async def remove(self, review_id: UUID) -> None:
        """Delete a review. Removing an already-missing review is not an error."""
        await self.db.execute(
            delete(Review)
            .where(Review.id == review_id)
            .execution_options(synchronize_session=False)
        )
        await commit_or_rollback(self.db)
        logger.debug(f"Removed review {review_id}")
