"""Health check endpoint"""
from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for the route constructor service.

    Returns:
        Status object with the service name
    """
    return {"status": "ok", "service": "tourroute"}
