"""Tag service - resolving and creating the category labels attached to spots."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from spotmap.database import commit_or_rollback
from spotmap.exceptions import ConflictError, NotFoundError, ValidationError
from spotmap.models import Tag

logger = logging.getLogger(__name__)

LABEL_MAX_LENGTH = 30

TAG_NOT_FOUND = "No such tag with that label!"
INVALID_LABEL = "The tag must have a label of at most 30 characters!"
DUPLICATE_LABEL = "A Tag already exists with this label."


class TagService:
    """Tags are shared between spots and are never removed when a spot goes away."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_label(self, label: str) -> Tag:
        """Get tag by exact label or raise ``NotFoundError``."""
        result = await self.db.execute(
            select(Tag).where(Tag.label == label).execution_options(populate_existing=True)
        )
        tag = result.scalar_one_or_none()
        if tag is None:
            raise NotFoundError(TAG_NOT_FOUND)
        return tag

    async def create(self, label: str, seeded: bool = False) -> Tag:
        """Create a tag. ``seeded`` marks tags that ship with the app."""
        if not label or not label.strip() or len(label) > LABEL_MAX_LENGTH:
            raise ValidationError(INVALID_LABEL)

        tag = Tag(label=label, seeded=seeded)
        self.db.add(tag)
        try:
            await commit_or_rollback(self.db)
        except IntegrityError as e:
            raise ConflictError(DUPLICATE_LABEL) from e
        logger.info(f"Created tag '{label}' (seeded={seeded})")
        return tag

    async def remove(self, tag_id: UUID) -> None:
        """Delete a tag. Removing an already-missing tag is not an error."""
        await self.db.execute(
            delete(Tag).where(Tag.id == tag_id).execution_options(synchronize_session=False)
        )
        await commit_or_rollback(self.db)
        logger.debug(f"Removed tag {tag_id}")
