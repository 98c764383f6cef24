"""
Data Contracts for the Program Analytics Engine

Defines Pydantic models for the store records (input), the computed
metrics/report objects (output) and the immutable scoring configuration.
Input records accept MongoDB documents as stored: camelCase keys, `_id`,
ObjectId values, and missing or null nested fields.
"""

from datetime import date, datetime
from math import isclose, isfinite
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator
from pydantic.alias_generators import to_camel

from .constants import (
    DEFAULT_TIMEFRAME,
    EFFECTIVENESS_WEIGHTS,
    GPA_SCALE,
    MIN_ATTENDANCE_RATE,
    MIN_AVERAGE_GPA,
    MIN_COMPLETION_RATE,
    MIN_PROGRESS_RATE,
    Priority,
    ProgramStatus,
    RecommendationType,
    StudentStatus,
)


# =============================================================================
# LENIENT FIELD TYPES
# =============================================================================

def _to_number(value: Any) -> float:
    """Coerce to float; anything unparseable or non-finite counts as 0."""
    number = _to_optional_number(value)
    return 0.0 if number is None else number


def _to_optional_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if isfinite(number) else None


def _to_text(value: Any) -> Optional[str]:
    """Stringify scalars; objects and arrays are not text."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _to_str(value: Any) -> str:
    text = _to_text(value)
    return "" if text is None else text


def _to_id(value: Any) -> Optional[str]:
    """Stringify ObjectIds (and anything else used as a key)."""
    if value is None:
        return None
    return str(value)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored date; unknown formats become None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in ["%Y/%m/%d", "%d-%m-%Y", "%d/%m/%Y"]:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _compact(value: Any) -> List[Any]:
    """Missing list -> [], null entries dropped."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    return [value]


def _records(value: Any) -> List[Any]:
    """Like _compact, keeping only embedded documents."""
    return [item for item in _compact(value) if isinstance(item, (dict, BaseModel))]


Number = Annotated[float, BeforeValidator(_to_number)]
OptionalNumber = Annotated[Optional[float], BeforeValidator(_to_optional_number)]
Identifier = Annotated[Optional[str], BeforeValidator(_to_id)]
OptionalDate = Annotated[Optional[datetime], BeforeValidator(_parse_datetime)]
Text = Annotated[str, BeforeValidator(_to_str)]
OptionalText = Annotated[Optional[str], BeforeValidator(_to_text)]


class Contract(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True


class Document(Contract):
    """Base for records loaded from the document store."""

    class Config:
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null, or a scalar where an embedded document belongs, behaves
        # like a missing key so defaults apply
        if not isinstance(data, dict):
            return data
        embedded = set()
        for name, field in cls.model_fields.items():
            if isinstance(field.annotation, type) and issubclass(field.annotation, Document):
                embedded.update({name, field.alias or name})
        return {
            k: v
            for k, v in data.items()
            if v is not None and (k not in embedded or isinstance(v, (dict, BaseModel)))
        }


# =============================================================================
# INPUT CONTRACTS (store records)
# =============================================================================

class Assessment(Document):
    program_id: Identifier = None
    type: OptionalText = None  # exam/project/assignment/participation/other
    name: OptionalText = None
    score: Number = 0.0
    max_score: Number = 0.0
    date: OptionalDate = None
    feedback: OptionalText = None
    graded_by: OptionalText = None


class AttendanceRecord(Document):
    program_id: Identifier = None
    date: OptionalDate = None
    status: Text = ""  # present/absent/late/excused
    notes: OptionalText = None


class Goal(Document):
    description: OptionalText = None
    target_date: OptionalDate = None
    status: Text = ""  # not-started/in-progress/completed/delayed
    progress: Number = 0.0


class Milestone(Document):
    name: OptionalText = None
    achieved_date: OptionalDate = None
    description: OptionalText = None


class ProgressTracking(Document):
    goals: Annotated[List[Goal], BeforeValidator(_records)] = Field(default_factory=list)
    milestones: Annotated[List[Milestone], BeforeValidator(_records)] = Field(default_factory=list)


class PerformanceMetrics(Document):
    # None means "not recorded"; the aggregator reads it as 0
    overall_gpa: OptionalNumber = Field(default=None, alias="overallGPA")
    attendance_rate: OptionalNumber = None
    participation_score: OptionalNumber = None


class AcademicProfile(Document):
    enrollment_date: OptionalDate = None
    grade: OptionalText = None
    status: Text = StudentStatus.ACTIVE.value
    performance_metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)


class PersonalInfo(Document):
    first_name: Text = ""
    last_name: Text = ""
    email: OptionalText = None
    student_id: OptionalText = None


class StudentRecord(Document):
    """A student snapshot as stored in the `students` collection."""
    id: Identifier = Field(default=None, alias="_id")
    organization_id: Identifier = None
    program_ids: Annotated[List[Identifier], BeforeValidator(_compact)] = Field(default_factory=list)
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    academic_profile: AcademicProfile = Field(default_factory=AcademicProfile)
    assessments: Annotated[List[Assessment], BeforeValidator(_records)] = Field(default_factory=list)
    attendance: Annotated[List[AttendanceRecord], BeforeValidator(_records)] = Field(default_factory=list)
    progress_tracking: ProgressTracking = Field(default_factory=ProgressTracking)

    @property
    def full_name(self) -> str:
        return f"{self.personal_info.first_name} {self.personal_info.last_name}".strip()


class ProgramMetricsSnapshot(Document):
    """Metrics persisted on the program document."""
    effectiveness_score: OptionalNumber = None
    student_satisfaction: OptionalNumber = None
    average_performance: OptionalNumber = None
    completion_rate: OptionalNumber = None


class CustomMetric(Document):
    name: OptionalText = None
    value: Any = None
    calculation_method: OptionalText = None


class ProgramRecord(Document):
    """A program as stored in the `programs` collection."""
    id: Identifier = Field(default=None, alias="_id")
    organization_id: Identifier = None
    name: Text = ""
    description: OptionalText = None
    type: Text = ""
    status: Text = ProgramStatus.ACTIVE.value
    metrics: ProgramMetricsSnapshot = Field(default_factory=ProgramMetricsSnapshot)
    custom_metrics: Annotated[List[CustomMetric], BeforeValidator(_records)] = Field(default_factory=list)


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class ProgramMetrics(Contract):
    """Scalar aggregates feeding the effectiveness score."""
    student_count: int = 0
    average_gpa: float = Field(default=0.0, alias="averageGPA")
    attendance_rate: float = 0.0
    completion_rate: float = 0.0
    progress_rate: float = 0.0


class Recommendation(Contract):
    type: RecommendationType
    description: str
    priority: Priority


class ScoreComponent(Contract):
    """One weighted term of the effectiveness score."""
    metric: str
    value: float
    normalized: float
    weight: float
    weighted_score: float


class EffectivenessResult(ProgramMetrics):
    effectiveness_score: float = 0.0
    recommendations: List[Recommendation] = Field(default_factory=list)


class TimeSeriesData(Contract):
    current: Dict[str, Any] = Field(default_factory=dict)
    historical: List[Any] = Field(default_factory=list)
    trends: Dict[str, Any] = Field(default_factory=dict)


class Benchmarks(Contract):
    organization_average: Dict[str, Any] = Field(default_factory=dict)
    similar_programs_average: Dict[str, Any] = Field(default_factory=dict)
    top_performer_metrics: Dict[str, Any] = Field(default_factory=dict)


class PerformanceReport(Contract):
    """
    Program performance report.
    timeSeriesData and benchmarks are extension points and stay empty.
    """
    program: str
    time_series_data: TimeSeriesData = Field(default_factory=TimeSeriesData)
    benchmarks: Benchmarks = Field(default_factory=Benchmarks)
    recommendations: List[Recommendation] = Field(default_factory=list)


class StudentSummary(Contract):
    id: Optional[str] = None
    name: str = ""


class StudentPerformanceMetrics(Contract):
    # None when the student has no entries for the program
    average_score: Optional[float] = None
    attendance_rate: Optional[float] = None


class StudentPerformance(Contract):
    student: StudentSummary
    assessments: List[Assessment] = Field(default_factory=list)
    attendance: List[AttendanceRecord] = Field(default_factory=list)
    metrics: StudentPerformanceMetrics = Field(default_factory=StudentPerformanceMetrics)


class DashboardSummary(Contract):
    total_programs: int = 0
    total_students: int = 0
    active_programs: int = 0
    active_students: int = 0


class PerformanceDistribution(Contract):
    excellent: int = 0
    good: int = 0
    average: int = 0
    needs_improvement: int = 0


class OrganizationDashboard(Contract):
    summary: DashboardSummary = Field(default_factory=DashboardSummary)
    program_types: Dict[str, int] = Field(default_factory=dict)
    performance_distribution: PerformanceDistribution = Field(default_factory=PerformanceDistribution)


class ProgramOverview(Contract):
    program_id: Optional[str] = None
    name: str = ""
    type: str = ""
    metrics: EffectivenessResult = Field(default_factory=EffectivenessResult)


# =============================================================================
# SCORING CONFIGURATION
# =============================================================================

class EffectivenessWeights(Contract):
    """Immutable weight table for the effectiveness score."""
    completion_rate: float = Field(default=EFFECTIVENESS_WEIGHTS["completion_rate"], ge=0.0, le=1.0)
    average_gpa: float = Field(default=EFFECTIVENESS_WEIGHTS["average_gpa"], ge=0.0, le=1.0)
    attendance_rate: float = Field(default=EFFECTIVENESS_WEIGHTS["attendance_rate"], ge=0.0, le=1.0)
    progress_rate: float = Field(default=EFFECTIVENESS_WEIGHTS["progress_rate"], ge=0.0, le=1.0)
    gpa_scale: float = Field(default=GPA_SCALE, gt=0.0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_total(self) -> "EffectivenessWeights":
        total = self.completion_rate + self.average_gpa + self.attendance_rate + self.progress_rate
        if not isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"effectiveness weights must sum to 1.0, got {total:.4f}")
        return self


class RecommendationThresholds(Contract):
    """Immutable cut-offs for the program recommendation rules."""
    min_average_gpa: float = MIN_AVERAGE_GPA
    min_attendance_rate: float = MIN_ATTENDANCE_RATE
    min_progress_rate: float = MIN_PROGRESS_RATE
    min_completion_rate: float = MIN_COMPLETION_RATE

    class Config:
        frozen = True


class AnalyticsConfig(Contract):
    weights: EffectivenessWeights = Field(default_factory=EffectivenessWeights)
    thresholds: RecommendationThresholds = Field(default_factory=RecommendationThresholds)
    default_timeframe: str = DEFAULT_TIMEFRAME

    class Config:
        frozen = True
