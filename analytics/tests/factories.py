"""
Document builders for the analytics tests.

Students are built from raw camelCase documents, the same shape the
adapter reads from MongoDB.
"""

from typing import Any, Dict, Iterable, Optional

from analytics.logic.contracts import ProgramRecord, StudentRecord

PROGRAM_ID = "64b000000000000000000001"
OTHER_PROGRAM_ID = "64b000000000000000000002"
ORG_ID = "64a000000000000000000001"
OTHER_ORG_ID = "64a000000000000000000002"


def student_doc(
    student_id: str = "64c000000000000000000001",
    gpa: Optional[float] = None,
    status: str = "active",
    present: int = 0,
    absent: int = 0,
    goals: Iterable[str] = (),
    scores: Iterable[tuple] = (),
    program_id: str = PROGRAM_ID,
    organization_id: str = ORG_ID,
    first_name: str = "Ada",
    last_name: str = "Lovelace",
) -> Dict[str, Any]:
    """Raw student document enrolled in `program_id`."""
    attendance = (
        [{"programId": program_id, "status": "present", "date": "2024-01-08"}] * present
        + [{"programId": program_id, "status": "absent", "date": "2024-01-09"}] * absent
    )
    performance_metrics = {"overallGPA": gpa} if gpa is not None else {}
    return {
        "_id": student_id,
        "organizationId": organization_id,
        "programIds": [program_id],
        "personalInfo": {
            "firstName": first_name,
            "lastName": last_name,
            "studentId": f"S-{student_id[-3:]}",
        },
        "academicProfile": {"status": status, "performanceMetrics": performance_metrics},
        "assessments": [
            {"programId": program_id, "type": "exam", "score": score, "maxScore": max_score}
            for score, max_score in scores
        ],
        "attendance": attendance,
        "progressTracking": {"goals": [{"status": s, "progress": 0} for s in goals]},
    }


def make_student(**kwargs) -> StudentRecord:
    return StudentRecord.model_validate(student_doc(**kwargs))


def program_doc(
    program_id: str = PROGRAM_ID,
    name: str = "Reading Recovery",
    type: str = "academic",
    status: str = "active",
    organization_id: str = ORG_ID,
) -> Dict[str, Any]:
    return {
        "_id": program_id,
        "organizationId": organization_id,
        "name": name,
        "type": type,
        "status": status,
        "metrics": {"studentSatisfaction": 4.2},
    }


def make_program(**kwargs) -> ProgramRecord:
    return ProgramRecord.model_validate(program_doc(**kwargs))
