"""
Organization Dashboard

Organization-wide counts: program/student totals, program types and
the GPA distribution of students.
"""

from collections import Counter
from typing import Iterable, Optional

from .constants import PERFORMANCE_BANDS, ProgramStatus, StudentStatus
from .contracts import (
    DashboardSummary,
    OrganizationDashboard,
    PerformanceDistribution,
    ProgramRecord,
    StudentRecord,
)


def performance_band(gpa: Optional[float]) -> Optional[str]:
    """GPA band name, or None when no GPA is recorded."""
    if gpa is None:
        return None
    if gpa >= PERFORMANCE_BANDS["excellent"]:
        return "excellent"
    if gpa >= PERFORMANCE_BANDS["good"]:
        return "good"
    if gpa >= PERFORMANCE_BANDS["average"]:
        return "average"
    return "needsImprovement"


def build_dashboard(
    programs: Iterable[ProgramRecord],
    students: Iterable[StudentRecord]
) -> OrganizationDashboard:
    programs = list(programs)
    students = list(students)

    bands = Counter(
        performance_band(s.academic_profile.performance_metrics.overall_gpa)
        for s in students
    )

    return OrganizationDashboard(
        summary=DashboardSummary(
            total_programs=len(programs),
            total_students=len(students),
            active_programs=sum(1 for p in programs if p.status == ProgramStatus.ACTIVE),
            active_students=sum(1 for s in students if s.academic_profile.status == StudentStatus.ACTIVE),
        ),
        program_types=dict(Counter(p.type for p in programs)),
        performance_distribution=PerformanceDistribution(
            excellent=bands["excellent"],
            good=bands["good"],
            average=bands["average"],
            needs_improvement=bands["needsImprovement"],
        ),
    )
