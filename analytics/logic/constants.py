"""
Analytics Engine Constants

Defines default weights, thresholds, bands and enums used by the
program effectiveness pipeline.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict

# =============================================================================
# ENUMS
# =============================================================================

class RecommendationType(str, Enum):
    """Closed set of recommendation kinds."""
    IMPROVEMENT = "improvement"
    INTERVENTION = "intervention"
    RESOURCE = "resource"
    ADAPTATION = "adaptation"
    ENGAGEMENT = "engagement"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProgramStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"
    WITHDRAWN = "withdrawn"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class GoalStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    DELAYED = "delayed"


# =============================================================================
# EFFECTIVENESS WEIGHTS
# =============================================================================

# Weights for each metric (must sum to 1.0)
EFFECTIVENESS_WEIGHTS: Dict[str, float] = {
    "completion_rate": 0.30,
    "average_gpa": 0.25,     # GPA normalized to 0-100 first
    "attendance_rate": 0.20,
    "progress_rate": 0.25,
}

# GPA scale used to normalize averageGPA onto 0-100
GPA_SCALE = 4.0

# =============================================================================
# RECOMMENDATION THRESHOLDS
# =============================================================================

MIN_AVERAGE_GPA = 3.0
MIN_ATTENDANCE_RATE = 85.0
MIN_PROGRESS_RATE = 70.0
MIN_COMPLETION_RATE = 75.0

# =============================================================================
# PERFORMANCE DISTRIBUTION BANDS (GPA lower bounds)
# =============================================================================

PERFORMANCE_BANDS: Dict[str, float] = {
    "excellent": 3.5,
    "good": 3.0,
    "average": 2.0,
    "needsImprovement": 0.0,
}

# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULT_TIMEFRAME = "6months"
ENGINE_VERSION = "1.0.0"
