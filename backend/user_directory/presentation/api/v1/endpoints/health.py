"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from user_directory.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the application status and the collection it serves."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "collection": settings.users_collection,
    }
