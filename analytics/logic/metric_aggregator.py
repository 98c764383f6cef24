"""
Metric Aggregator

Reduces the students enrolled in a program into scalar summary metrics.
Every helper tolerates missing data: absent numbers count as 0 and
empty lists never cause a division.
"""

from typing import Iterable, List, Optional

from .constants import AttendanceStatus, GoalStatus, StudentStatus
from .contracts import (
    Assessment,
    AttendanceRecord,
    ProgramMetrics,
    StudentRecord,
)


def assessment_percentage(assessment: Assessment) -> float:
    """score / maxScore * 100, or 0 when maxScore is zero."""
    if not assessment.max_score:
        return 0.0
    return assessment.score / assessment.max_score * 100


def program_assessments(student: StudentRecord, program_id: str) -> List[Assessment]:
    return [a for a in student.assessments if a.program_id == str(program_id)]


def program_attendance(student: StudentRecord, program_id: str) -> List[AttendanceRecord]:
    return [a for a in student.attendance if a.program_id == str(program_id)]


def attendance_rate(records: List[AttendanceRecord]) -> Optional[float]:
    """Present share of the records (0-100), None for no records."""
    if not records:
        return None
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    return present / len(records) * 100


def average_score(assessments: List[Assessment]) -> Optional[float]:
    if not assessments:
        return None
    return sum(assessment_percentage(a) for a in assessments) / len(assessments)


def program_attendance_rate(student: StudentRecord, program_id: str) -> float:
    """Attendance rate of one student in one program; 0 when nothing recorded."""
    rate = attendance_rate(program_attendance(student, program_id))
    return rate if rate is not None else 0.0


def goal_progress_rate(student: StudentRecord) -> float:
    """
    Completed goals as a percentage of all goals.

    A student with no goals contributes 0.
    """
    goals = student.progress_tracking.goals
    completed = sum(1 for g in goals if g.status == GoalStatus.COMPLETED)
    return completed / max(1, len(goals)) * 100


def aggregate_metrics(
    program_id: str,
    students: Iterable[StudentRecord]
) -> ProgramMetrics:
    """
    Compute the program metrics over its enrolled students.

    Args:
        program_id: Program the attendance entries are scoped to
        students: Students whose programIds contain the program

    Returns:
        ProgramMetrics; all zero for an empty program
    """
    students = list(students)
    count = len(students)
    if count == 0:
        return ProgramMetrics()

    total_gpa = 0.0
    total_attendance = 0.0
    completed_count = 0
    total_progress = 0.0

    for student in students:
        total_gpa += student.academic_profile.performance_metrics.overall_gpa or 0.0
        total_attendance += program_attendance_rate(student, program_id)
        if student.academic_profile.status == StudentStatus.GRADUATED:
            completed_count += 1
        total_progress += goal_progress_rate(student)

    return ProgramMetrics(
        student_count=count,
        average_gpa=total_gpa / count,
        attendance_rate=total_attendance / count,
        completion_rate=completed_count / count * 100,
        progress_rate=total_progress / count,
    )


def average_performance(
    program_id: str,
    students: Iterable[StudentRecord]
) -> float:
    """Mean percentage over every program-scoped assessment (0 if none)."""
    assessments: List[Assessment] = []
    for student in students:
        assessments.extend(program_assessments(student, program_id))
    score = average_score(assessments)
    return score if score is not None else 0.0
