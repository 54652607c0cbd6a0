"""
Configuration settings for the Shift Analytics Service
"""

from enum import Enum
from typing import Dict, List

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class SuggestionType(str, Enum):
    REASSIGN = "reassign"
    HIRE = "hire"
    TRAIN = "train"
    MAINTAIN = "maintain"


class Settings(BaseSettings):
    # API Settings
    app_name: str = "Shift Analytics Service"
    app_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False

    # Coverage
    target_coverage: float = Field(95.0, gt=0, le=100)
    coverage_decimal_places: int = Field(0, ge=0, le=4)

    # Period aggregation
    max_range_days: int = Field(366, ge=1)
    default_max_concurrency: int = Field(8, ge=1)

    # Which employees make up the pool when a schedule is generated
    employee_status_filter: str = "active"

    # Static optimization suggestion templates (impact in coverage points, cost in currency)
    suggestion_impacts: Dict[SuggestionType, float] = {
        SuggestionType.REASSIGN: 15.0,
        SuggestionType.HIRE: 25.0,
        SuggestionType.TRAIN: 10.0,
        SuggestionType.MAINTAIN: 0.0,
    }
    suggestion_costs: Dict[SuggestionType, float] = {
        SuggestionType.REASSIGN: 0.0,
        SuggestionType.HIRE: 5000.0,
        SuggestionType.TRAIN: 1000.0,
        SuggestionType.MAINTAIN: 0.0,
    }

    @validator("log_level")
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    class Config:
        env_file = ".env"
        env_prefix = "SHIFT_ANALYTICS_"
        case_sensitive = False
        extra = 'ignore'


# Global settings instance
settings = Settings()


# Resolution hints attached to each conflict type
CONFLICT_RESOLUTION = {
    "double_booking": "Reassign one of the shifts",
    "time_off_conflict": "Reassign shift to available employee",
    "availability_conflict": "Adjust shift time or reassign to available employee",
    "unavailable_day": "Reassign shift to available employee",
    "role_mismatch": "Reassign to employee with correct role or adjust requirements",
}

# Impact labels used by the conflict analysis view
CONFLICT_IMPACT = {
    "double_booking": "Employee cannot be in two places at once; one shift will be understaffed",
    "time_off_conflict": "Shift will be short-staffed while the employee is on approved leave",
    "availability_conflict": "Employee may not show up for the scheduled hours",
    "role_mismatch": "Shift may lack the expertise its requirements call for",
}


class ConfigValidator:
    """Validate configuration settings"""

    @staticmethod
    def validate_suggestion_templates(settings: Settings) -> List[str]:
        """Every suggestion type needs both an impact and a cost"""
        issues = []
        for suggestion_type in SuggestionType:
            if suggestion_type not in settings.suggestion_impacts:
                issues.append(f"Missing impact for suggestion type '{suggestion_type.value}'")
            if suggestion_type not in settings.suggestion_costs:
                issues.append(f"Missing cost for suggestion type '{suggestion_type.value}'")
        return issues

    @staticmethod
    def validate_aggregation(settings: Settings) -> List[str]:
        """Validate period aggregation limits"""
        issues = []
        if settings.max_range_days > 731:
            issues.append("max_range_days should not exceed 731 days")
        if settings.default_max_concurrency > 64:
            issues.append("default_max_concurrency should not exceed 64")
        return issues

    @staticmethod
    def validate_all(settings: Settings) -> Dict[str, List[str]]:
        """Validate all configuration settings"""
        return {
            "suggestions": ConfigValidator.validate_suggestion_templates(settings),
            "aggregation": ConfigValidator.validate_aggregation(settings),
        }
