"""Explicit wiring of the spot services around one database session."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from spotmap.config import Settings
from spotmap.models.base import utcnow
from spotmap.services.review import ReviewService
from spotmap.services.spot_lifecycle import SpotLifecycleManager
from spotmap.services.spot_query import SpotQueryService
from spotmap.services.store import SpotStore
from spotmap.services.tag import TagService
from spotmap.services.user import UserService


@dataclass
class SpotServices:
    """Everything a caller needs to read and mutate spots."""

    store: SpotStore
    reviews: ReviewService
    tags: TagService
    users: UserService
    queries: SpotQueryService
    lifecycle: SpotLifecycleManager


def build_spot_services(
    db: AsyncSession,
    settings: Settings | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> SpotServices:
    """Build the service graph for one session (one request)."""
    store = SpotStore(db)
    reviews = ReviewService(db)
    tags = TagService(db)
    users = UserService(db)
    queries = SpotQueryService(store, reviews, tags, users)
    lifecycle = SpotLifecycleManager(
        store, reviews, tags, users, queries, settings=settings, clock=clock
    )
    return SpotServices(
        store=store,
        reviews=reviews,
        tags=tags,
        users=users,
        queries=queries,
        lifecycle=lifecycle,
    )
