"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from spotmap.api.v1 import spots

router = APIRouter()

# Include all sub-routers
router.include_router(spots.router)


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "message": "spotmap API is running"}
