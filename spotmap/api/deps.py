"""Dependency injection for API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from spotmap.config import get_settings
from spotmap.database import get_db
from spotmap.services.container import SpotServices, build_spot_services

__all__ = [
    "get_db",
    "AsyncSession",
    "get_spot_services",
    "get_current_user_id",
]


# Service graph dependency - one per request, bound to the request's session
async def get_spot_services(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SpotServices:
    """Build the spot services for this request."""
    return build_spot_services(db, settings=get_settings())


# Acting user - authentication happens upstream, which forwards the user id
async def get_current_user_id(
    x_user_id: Annotated[UUID, Header(description="Authenticated user id set by the gateway")],
) -> UUID:
    """Get the id of the user performing the request."""
    return x_user_id
