"""
Logging configuration for the Shift Analytics Service
"""
import logging
import logging.config
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from .config import settings


def build_logging_config(log_level: str, log_to_file: bool, log_dir: str) -> Dict:
    """dictConfig for console output, plus rotating files when enabled"""

    console_level = "DEBUG" if settings.debug else log_level
    app_handlers = ["console"]

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": console_level,
            "formatter": "standard",
            "stream": sys.stdout
        },
    }

    if log_to_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.update({
            "file_info": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "detailed",
                "filename": str(path / "shift_analytics.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf8"
            },
            "file_error": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "filename": str(path / "shift_analytics_errors.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf8"
            },
            "json_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "json",
                "filename": str(path / "shift_analytics_structured.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf8"
            },
        })
        app_handlers = ["console", "file_info", "file_error", "json_file"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "detailed": {
                "format": "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(funcName)s(): %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "json": {
                "()": jsonlogger.JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d %(funcName)s"
            }
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "level": log_level,
                "handlers": app_handlers,
                "propagate": False
            },
            "src.shift_analytics": {
                "level": console_level,
                "handlers": app_handlers,
                "propagate": False
            },
            "analytics": {
                "level": console_level,
                "handlers": app_handlers,
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            },
            "fastapi": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
        }
    }


def setup_logging(log_level: Optional[str] = None, log_to_file: Optional[bool] = None):
    """Setup structured logging configuration"""

    level = (log_level or settings.log_level).upper()
    to_file = settings.log_to_file if log_to_file is None else log_to_file

    logging.config.dictConfig(build_logging_config(level, to_file, settings.log_dir))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger("src.shift_analytics").info(
        f"Logging configured - level: {level}, files: {to_file}, debug: {settings.debug}"
    )


class AnalyticsLogger:
    """Structured events emitted by the analytics pipeline"""

    def __init__(self, logger_name: str = "analytics"):
        self.logger = logging.getLogger(logger_name)
        self.structured_logger = structlog.get_logger(logger_name)

    def log_day_analyzed(self, day: str, shift_count: int, coverage_entries: int, conflict_count: int):
        self.structured_logger.debug(
            "day_analyzed",
            day=day,
            shift_count=shift_count,
            coverage_entries=coverage_entries,
            conflict_count=conflict_count,
        )

    def log_range_analyzed(self, period: str, days: int, total_shifts: int, conflict_count: int):
        self.structured_logger.info(
            "range_analyzed",
            period=period,
            days=days,
            total_shifts=total_shifts,
            conflict_count=conflict_count,
            timestamp=datetime.now().isoformat()
        )

    def log_conflicts_detected(self, period: str, conflict_count: int, by_type: Dict[str, int]):
        """Conflicts are a warning-level event only when there are any"""
        log = self.structured_logger.warning if conflict_count else self.structured_logger.info
        log(
            "conflicts_detected",
            period=period,
            conflict_count=conflict_count,
            by_type=by_type,
            timestamp=datetime.now().isoformat()
        )

    def log_api_request(self, endpoint: str, method: str, status_code: int, duration: float):
        self.structured_logger.info(
            "api_request",
            endpoint=endpoint,
            method=method,
            status_code=status_code,
            duration_ms=duration * 1000,
            timestamp=datetime.now().isoformat()
        )


class RequestLogger:
    """Logger for API request/response tracking"""

    def __init__(self):
        self.logger = logging.getLogger("requests")
        self.analytics_logger = AnalyticsLogger("requests")

    async def log_request(self, request, call_next):
        """Middleware for logging requests"""
        start_time = datetime.now()

        response = await call_next(request)

        duration = (datetime.now() - start_time).total_seconds()
        self.analytics_logger.log_api_request(
            endpoint=request.url.path,
            method=request.method,
            status_code=response.status_code,
            duration=duration
        )

        if response.status_code >= 400:
            self.logger.warning(
                f"Request completed with error: {request.method} {request.url.path} "
                f"-> {response.status_code} in {duration:.3f}s"
            )
        else:
            self.logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"-> {response.status_code} in {duration:.3f}s"
            )

        return response


# Export logger instances
analytics_logger = AnalyticsLogger()
request_logger = RequestLogger()
