"""Health check endpoints."""

from fastapi import APIRouter

from app.core.config import get_settings
from app.core.security import utcnow

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check if the API is running."""
    return {
        "status": "Healthy",
        "timestamp": utcnow().isoformat(),
        "environment": get_settings().environment,
    }
