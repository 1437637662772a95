"""Spot store - document-style persistence for spots.

A spot document is the ``spots`` row together with its ordered review links
and its reports. Reads always return those; other references (``creator``,
``tag``, ``reviews`` and nested paths such as ``reviews.creator``) are only
loaded when named in ``populate``.

Writes are compare-and-swap on ``Spot.version``: the UPDATE or DELETE only
matches the version that was read, and a miss surfaces as
``ConcurrentUpdateError``.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from spotmap.database import commit_or_rollback
from spotmap.exceptions import ConcurrentUpdateError, DuplicateKeyError
from spotmap.models import Spot

logger = logging.getLogger(__name__)

CONCURRENT_UPDATE = "This spot was changed by someone else, please try again."

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _is_duplicate_key(error: IntegrityError) -> bool:
    """Tell unique-constraint violations apart from other integrity failures."""
    orig = error.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION:
        return True
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


def _loader_options(paths: Sequence[str]) -> list:
    """Turn dotted relation paths into chained ``selectinload`` options."""
    options = []
    for path in paths:
        entity: Any = Spot
        option = None
        for name in path.split("."):
            attribute = getattr(entity, name)
            option = selectinload(attribute) if option is None else option.selectinload(attribute)
            entity = attribute.property.mapper.class_
        options.append(option)
    return options


class SpotStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _write(self, spot: Spot) -> None:
        spot_id = spot.id
        try:
            await commit_or_rollback(self.db)
        except StaleDataError as e:
            logger.info(f"Stale write rejected for spot {spot_id}")
            raise ConcurrentUpdateError(CONCURRENT_UPDATE) from e
        except IntegrityError as e:
            if _is_duplicate_key(e):
                raise DuplicateKeyError(str(e.orig)) from e
            raise

    async def insert(self, spot: Spot) -> Spot:
        """Insert a new spot document; raises ``DuplicateKeyError`` on a taken title."""
        spot.version = 1
        self.db.add(spot)
        await self._write(spot)
        return await self.populate(spot, ())

    async def find_one(self, *criteria: Any, populate: Sequence[str] = ()) -> Spot | None:
        """First spot matching every criterion, or None."""
        spots = await self.find(*criteria, populate=populate)
        return spots[0] if spots else None

    async def find(self, *criteria: Any, populate: Sequence[str] = ()) -> list[Spot]:
        """All spots matching every criterion, oldest first."""
        result = await self.db.execute(
            select(Spot)
            .where(*criteria)
            .options(*_loader_options(populate))
            .order_by(Spot.timestamp, Spot.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def update_fields(self, spot: Spot, **fields: Any) -> Spot:
        """Persist ``fields`` plus any pending link/report changes as one write.

        Always bumps the version, so appending a review or a report conflicts
        with any other writer even when no column value changes.
        """
        for name, value in fields.items():
            setattr(spot, name, value)
        spot.version = spot.version + 1
        await self._write(spot)
        return spot

    async def remove(self, spot: Spot) -> None:
        """Delete the spot document (row, review links and reports)."""
        await self.db.delete(spot)
        await self._write(spot)

    async def populate(self, spot: Spot, paths: Sequence[str]) -> Spot:
        """Reload ``spot`` with the given relation paths hydrated."""
        result = await self.db.execute(
            select(Spot)
            .where(Spot.id == spot.id)
            .options(*_loader_options(paths))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
