"""
FastAPI main application for the Shift Analytics Service
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .api.routes import ROUTERS, health_router
from .config import ConfigValidator, settings
from .logging_config import request_logger, setup_logging
from .utils.exceptions import CLIENT_EXCEPTIONS, AnalyticsError, create_error_response

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events"""
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"Version: {settings.app_version}")
    logger.info(f"Environment: {'Development' if settings.debug else 'Production'}")

    for section, issues in ConfigValidator.validate_all(settings).items():
        for issue in issues:
            logger.warning(f"Configuration issue ({section}): {issue}")

    yield

    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="""
    Schedule coverage and conflict analytics for HR shift planning.

    Given shifts, employees and time-off requests, the service reports:
    - Role coverage per shift requirement (gaps, overlaps, utilization)
    - Double bookings, time-off, availability and role conflicts
    - Daily, range, weekly and monthly roll-ups with trends
    - Coverage optimization suggestions and conflict breakdowns
    - Per-employee workload and recurring shift expansion
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(request_logger.log_request)

for router in ROUTERS:
    app.include_router(router, prefix="/api")
app.include_router(health_router)


# Exception handlers
@app.exception_handler(AnalyticsError)
async def analytics_exception_handler(request, exc: AnalyticsError):
    """Client mistakes map to 400, anything else raised by the engine to 500"""
    status_code = 400 if isinstance(exc, CLIENT_EXCEPTIONS) else 500
    if status_code == 400:
        logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    else:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}", exc_info=exc)

    content = create_error_response(exc)
    content["status_code"] = status_code
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500, content={"error": "Internal server error", "status_code": 500}
    )


if __name__ == "__main__":
    uvicorn.run(
        "src.shift_analytics.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
