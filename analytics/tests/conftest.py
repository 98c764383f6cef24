from typing import List

import pytest

from analytics.logic.contracts import ProgramRecord, StudentRecord
from factories import make_program, make_student


@pytest.fixture
def program() -> ProgramRecord:
    return make_program()


@pytest.fixture
def strong_student() -> StudentRecord:
    """GPA 3.8, full attendance, all goals met, graduated."""
    return make_student(gpa=3.8, status="graduated", present=10, goals=["completed", "completed"])


@pytest.fixture
def struggling_student() -> StudentRecord:
    """GPA 2.5, half attendance, no goals, still active."""
    return make_student(gpa=2.5, status="active", present=5, absent=5)


@pytest.fixture
def assessed_students() -> List[StudentRecord]:
    """Three students with one assessment each and no GPA/attendance data."""
    return [
        make_student(student_id="64c000000000000000000011", scores=[(90, 100)]),
        make_student(student_id="64c000000000000000000012", scores=[(70, 100)]),
        make_student(student_id="64c000000000000000000013", scores=[(50, 100)]),
    ]
