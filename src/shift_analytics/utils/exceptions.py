"""
Custom exceptions for the shift analytics service
"""
from datetime import date, datetime
from typing import Any


class AnalyticsError(Exception):
    """Base exception for analytics-related errors"""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses"""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(AnalyticsError):
    """A shift, employee or time-off record (or request option) is malformed"""

    def __init__(
        self,
        message: str,
        record_type: str | None = None,
        record_index: int | None = None,
        field: str | None = None,
        value: Any | None = None,
        allowed_values: list[str] | None = None,
    ):
        super().__init__(message, "INVALID_RECORD")
        self.record_type = record_type
        self.record_index = record_index
        self.field = field
        self.value = value
        self.allowed_values = allowed_values or []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["record"] = {
            "type": self.record_type,
            "index": self.record_index,
            "field": self.field,
            "value": self.value,
            "allowed_values": self.allowed_values,
        }
        return result


class ConfigurationError(AnalyticsError):
    """An analytics setting or per-call option is out of its valid range"""

    def __init__(self, message: str, setting: str, actual_value: Any, constraint: str):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.setting = setting
        self.actual_value = actual_value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["setting"] = {
            "name": self.setting,
            "value": self.actual_value,
            "constraint": self.constraint,
        }
        return result


class DataInconsistencyError(AnalyticsError):
    """A data source handed back shifts that do not belong to the requested day"""

    def __init__(self, message: str, day: date, shift_ids: list[str]):
        super().__init__(message, "DATA_INCONSISTENCY")
        self.day = day
        self.shift_ids = list(shift_ids)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["day"] = self.day.isoformat()
        result["shift_ids"] = self.shift_ids
        return result


class ResourceLimitError(AnalyticsError):
    """A requested date range is longer than the service will analyse in one call"""

    def __init__(self, message: str, start_date: date, end_date: date, requested_days: int, max_days: int):
        super().__init__(message, "DATE_RANGE_TOO_LONG")
        self.start_date = start_date
        self.end_date = end_date
        self.requested_days = requested_days
        self.max_days = max_days

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["range"] = {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "requested_days": self.requested_days,
            "max_days": self.max_days,
        }
        return result


# Exceptions that signal a bad request rather than a server fault
CLIENT_EXCEPTIONS = (
    ValidationError,
    DataInconsistencyError,
    ResourceLimitError,
)


def create_error_response(exception: AnalyticsError) -> dict[str, Any]:
    """Create standardized error response from exception"""
    response = exception.to_dict()
    response["timestamp"] = datetime.now().isoformat()
    return response
