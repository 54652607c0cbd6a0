"""
API routes for the Shift Analytics Service

- Daily, range, weekly and monthly analytics
- Conflict analysis and coverage optimization
- Schedule generation and recurring shift expansion
- Health checks and performance statistics
"""

from .analytics import router as analytics_router
from .health import router as health_router
from .schedules import router as schedules_router
from .shifts import router as shifts_router

__all__ = [
    "analytics_router",
    "health_router",
    "schedules_router",
    "shifts_router",
]

ROUTERS = [
    analytics_router,
    schedules_router,
    shifts_router,
]
