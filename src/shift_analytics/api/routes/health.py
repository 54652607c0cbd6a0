"""
Health check and system status routes
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from ...config import Settings
from ...utils.profiler import AnalyticsProfiler
from ..dependencies import get_profiler, get_settings

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/stats")
async def get_performance_stats(profiler: AnalyticsProfiler = Depends(get_profiler)):
    """Get performance statistics"""
    return {"performance": profiler.get_stats()}
