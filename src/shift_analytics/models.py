"""
Pydantic models for the Shift Analytics Service
"""

from __future__ import annotations
from datetime import date, time
from typing import List, Optional, Dict, Any
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, validator
from pydantic.alias_generators import to_camel

from .config import SuggestionType
from .utils.helpers import format_time_range, parse_calendar_date, parse_time_of_day


class EmployeeRole(str, Enum):
    MANAGER = "manager"
    SUPERVISOR = "supervisor"
    STAFF = "staff"
    SPECIALIST = "specialist"
    TRAINEE = "trainee"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ShiftStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class TimeOffType(str, Enum):
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"
    PERSONAL_LEAVE = "personal_leave"
    MATERNITY_LEAVE = "maternity_leave"
    PATERNITY_LEAVE = "paternity_leave"
    BEREAVEMENT_LEAVE = "bereavement_leave"
    UNPAID_LEAVE = "unpaid_leave"
    OTHER = "other"


class TimeOffStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    IN_PROGRESS = "in_progress"


class TimeOffPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ConflictType(str, Enum):
    DOUBLE_BOOKING = "double_booking"
    TIME_OFF_CONFLICT = "time_off_conflict"
    AVAILABILITY_CONFLICT = "availability_conflict"
    ROLE_MISMATCH = "role_mismatch"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScheduleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    LOCKED = "locked"
    ARCHIVED = "archived"


class RecurrencePattern(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ApiModel(BaseModel):
    """Base for every record: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(ApiModel):
    """Read models handed to the engine are never mutated"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# Input records
class ShiftRequirement(RecordModel):
    role: str
    quantity: int = Field(..., ge=0)
    skills: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    is_critical: bool = False


class Shift(RecordModel):
    id: str
    title: Optional[str] = None
    date: date
    start_time: time
    end_time: time
    requirements: List[ShiftRequirement] = Field(default_factory=list)
    assigned_employees: List[str] = Field(default_factory=list)
    total_hours: float = Field(0.0, ge=0)
    location: str = ""
    team: str = ""
    department: str = ""
    status: ShiftStatus = ShiftStatus.SCHEDULED

    @validator("date", pre=True)
    def parse_shift_date(cls, v):
        """Strip any time-of-day component from the shift date"""
        return parse_calendar_date(v)

    @validator("start_time", "end_time", pre=True)
    def parse_shift_times(cls, v):
        return parse_time_of_day(v)

    @validator("location", pre=True)
    def parse_location(cls, v):
        """Locations may arrive as embedded documents with a name"""
        if isinstance(v, dict):
            return v.get("name", "")
        return v

    @validator("assigned_employees", pre=True)
    def stringify_employee_ids(cls, v):
        if v is None:
            return []
        return [str(employee_id) for employee_id in v]

    @property
    def time_range(self) -> str:
        return format_time_range(self.start_time, self.end_time)


class AvailabilityWindow(RecordModel):
    day_of_week: int = Field(..., ge=0, le=6)  # 0=Sunday, 6=Saturday
    start_time: time
    end_time: time
    timezone: str = "UTC"
    is_available: bool = True

    @validator("start_time", "end_time", pre=True)
    def parse_window_times(cls, v):
        return parse_time_of_day(v)


class Skill(RecordModel):
    name: str
    level: SkillLevel = SkillLevel.BEGINNER
    certified: bool = False


class Employee(RecordModel):
    id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    role: EmployeeRole
    availability_windows: List[AvailabilityWindow] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    team: str = ""
    location: str = ""
    department: str = ""
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    total_hours_worked: float = 0.0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TimeOffRequest(RecordModel):
    id: str
    employee_id: str
    type: TimeOffType = TimeOffType.OTHER
    status: TimeOffStatus = TimeOffStatus.PENDING
    start_date: date
    end_date: date
    priority: TimeOffPriority = TimeOffPriority.MEDIUM
    reason: Optional[str] = None

    @validator("start_date", "end_date", pre=True)
    def parse_request_dates(cls, v):
        return parse_calendar_date(v)

    @validator("employee_id", pre=True)
    def stringify_employee_id(cls, v):
        return str(v) if v is not None else v

    @property
    def is_approved(self) -> bool:
        return self.status == TimeOffStatus.APPROVED


# Coverage and conflict outputs
class CoverageEmployee(ApiModel):
    id: str
    name: str
    skills: List[str] = []
    total_hours: float = 0.0


class CoverageEntry(ApiModel):
    role: str
    required: int
    assigned: int
    coverage: float
    gaps: int
    overlaps: int
    utilization: float = 0.0
    employees: List[CoverageEmployee] = []
    shift_id: Optional[str] = None
    shift_date: Optional[date] = Field(None, alias="date")
    start_time: Optional[time] = None
    end_time: Optional[time] = None


class Conflict(ApiModel):
    type: ConflictType
    severity: Severity
    description: str
    affected_shifts: List[str] = []
    affected_employees: List[str] = []
    resolution: str = ""
    details: Dict[str, Any] = {}


class PeriodMetrics(ApiModel):
    total_shifts: int = 0
    total_hours: float = 0.0
    total_employees: int = 0
    average_utilization: float = 0.0
    conflict_count: int = 0
    critical_conflicts: int = 0


class DayAnalytics(ApiModel):
    date: date
    location: str = "all"
    team: str = "all"
    department: str = "all"
    role_coverage: List[CoverageEntry] = []
    total_shifts: int = 0
    total_hours: float = 0.0
    total_employees: int = 0
    average_utilization: float = 0.0
    conflicts: List[Conflict] = []
    metrics: PeriodMetrics = Field(default_factory=PeriodMetrics)


# Period outputs
class CoverageTrendPoint(ApiModel):
    date: date
    coverage: float


class ConflictTrendPoint(ApiModel):
    date: date
    conflict_count: int


class UtilizationTrendPoint(ApiModel):
    date: date
    utilization: float


class RangeTrends(ApiModel):
    coverage_trend: List[CoverageTrendPoint] = []
    conflict_trend: List[ConflictTrendPoint] = []
    utilization_trend: List[UtilizationTrendPoint] = []


class RangeAnalytics(ApiModel):
    period: str
    summary: PeriodMetrics = Field(default_factory=PeriodMetrics)
    trends: RangeTrends = Field(default_factory=RangeTrends)
    daily_breakdown: Optional[List[DayAnalytics]] = None


class RoleCoverageMetric(ApiModel):
    role: str
    coverage: float
    required: int
    assigned: int
    gaps: int
    overlaps: int


class CoverageGap(ApiModel):
    role: str
    shift_date: Optional[date] = Field(None, alias="date")
    shift_id: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    shortage: int
    available_employees: List[str] = []


class OptimizationSuggestion(ApiModel):
    type: SuggestionType
    description: str
    impact: float
    cost: float


class CoverageOptimization(ApiModel):
    period: str
    current_coverage: float = 0.0
    target_coverage: float = 95.0
    role_coverage_metrics: List[RoleCoverageMetric] = []
    gaps: List[CoverageGap] = []
    optimization_suggestions: List[OptimizationSuggestion] = []


class ConflictTypeCount(ApiModel):
    type: ConflictType
    severity: Severity
    count: int


class AffectedEntities(ApiModel):
    shifts: List[str] = []
    employees: List[str] = []


class ResolutionSuggestion(ApiModel):
    conflict_type: ConflictType
    description: str
    suggestion: str
    impact: str


class ConflictAnalysis(ApiModel):
    period: str
    total_conflicts: int = 0
    critical_conflicts: int = 0
    conflict_types: List[ConflictTypeCount] = []
    affected_entities: AffectedEntities = Field(default_factory=AffectedEntities)
    resolution_suggestions: List[ResolutionSuggestion] = []


class ScheduleSnapshot(ApiModel):
    schedule_id: str
    date: date
    location: str
    team: str
    department: str
    status: ScheduleStatus = ScheduleStatus.DRAFT
    shift_ids: List[str] = []
    employee_ids: List[str] = []
    time_off_ids: List[str] = []
    coverage: List[CoverageEntry] = []
    conflicts: List[Conflict] = []
    metrics: PeriodMetrics = Field(default_factory=PeriodMetrics)
    tags: List[str] = ["auto-generated", "daily"]
    notes: Optional[str] = None
    version: str = "1.0"


class EmployeeWorkload(ApiModel):
    employee_id: str
    employee_name: str
    total_hours: float = 0.0
    total_shifts: int = 0
    unique_days: int = 0
    time_off_days: int = 0
    average_hours_per_day: float = 0.0
    consecutive_days: int = 0
    skill_utilization: List[Skill] = []
    availability: List[AvailabilityWindow] = []


# Collaborator hand-off for one calendar day
class DayInput(ApiModel):
    date: date
    shifts: List[Shift] = []
    employees: List[Employee] = []
    time_off_requests: List[TimeOffRequest] = []


# Request models
class AnalyticsFilters(ApiModel):
    location: Optional[str] = None
    team: Optional[str] = None
    department: Optional[str] = None


class ScheduleRecords(AnalyticsFilters):
    shifts: List[Shift] = []
    employees: List[Employee] = []
    time_off_requests: List[TimeOffRequest] = []


class DailyAnalyticsRequest(ScheduleRecords):
    date: date


class RangeAnalyticsRequest(ScheduleRecords):
    start_date: date
    end_date: date
    include_daily_breakdown: bool = True
    max_concurrency: Optional[int] = Field(None, ge=1, le=64)


class WeeklyAnalyticsRequest(ScheduleRecords):
    start_date: date


class MonthlyAnalyticsRequest(ScheduleRecords):
    year: int = Field(..., ge=1970, le=9999)
    month: int = Field(..., ge=1, le=12)


class GenerateScheduleRequest(DailyAnalyticsRequest):
    pass


class WorkloadRequest(ApiModel):
    start_date: date
    end_date: date
    shifts: List[Shift] = []
    employees: List[Employee] = []
    time_off_requests: List[TimeOffRequest] = []


class RecurringShiftRequest(ApiModel):
    template: Shift
    start_date: date
    end_date: date
    pattern: RecurrencePattern

    @validator("pattern", pre=True)
    def normalize_pattern(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class RecurringShiftResponse(ApiModel):
    message: str
    template_id: str
    pattern: RecurrencePattern
    start_date: date
    end_date: date
    shifts: List[Shift] = []
