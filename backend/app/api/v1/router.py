from datetime import datetime

from fastapi import APIRouter

from app.api.v1.endpoints import ai, filetree
from app.core.config import settings

api_router = APIRouter()


@api_router.get("/health", tags=["Health"])
async def health_check():
    """Simple health check endpoint"""
    return {
        "success": True,
        "status": "healthy",
        "service": "scaffoldai-backend",
        "ai_enabled": settings.AI_ENABLED,
        "timestamp": datetime.utcnow().isoformat()
    }


api_router.include_router(ai.router)
api_router.include_router(filetree.router)
