"""
Tests for the metric aggregator.
"""

import math

import pytest
from bson import ObjectId

from analytics.logic.contracts import Assessment, ProgramRecord, StudentRecord
from analytics.logic.effectiveness_scorer import score_effectiveness
from analytics.logic.metric_aggregator import (
    aggregate_metrics,
    assessment_percentage,
    average_performance,
    goal_progress_rate,
    program_attendance_rate,
)
from factories import OTHER_PROGRAM_ID, PROGRAM_ID, make_student, student_doc


def test_empty_program_returns_all_zero_metrics():
    metrics = aggregate_metrics(PROGRAM_ID, [])

    assert metrics.model_dump(by_alias=True) == {
        "studentCount": 0,
        "averageGPA": 0,
        "attendanceRate": 0,
        "completionRate": 0,
        "progressRate": 0,
    }


def test_strong_student_metrics(strong_student):
    metrics = aggregate_metrics(PROGRAM_ID, [strong_student])

    assert metrics.student_count == 1
    assert metrics.average_gpa == pytest.approx(3.8)
    assert metrics.attendance_rate == pytest.approx(100)
    assert metrics.completion_rate == pytest.approx(100)
    assert metrics.progress_rate == pytest.approx(100)


def test_struggling_student_metrics(struggling_student):
    metrics = aggregate_metrics(PROGRAM_ID, [struggling_student])

    assert metrics.average_gpa == pytest.approx(2.5)
    assert metrics.attendance_rate == pytest.approx(50)
    assert metrics.completion_rate == 0
    assert metrics.progress_rate == 0


def test_metrics_average_across_students(strong_student, struggling_student):
    metrics = aggregate_metrics(PROGRAM_ID, [strong_student, struggling_student])

    assert metrics.student_count == 2
    assert metrics.average_gpa == pytest.approx((3.8 + 2.5) / 2)
    assert metrics.attendance_rate == pytest.approx(75)
    assert metrics.completion_rate == pytest.approx(50)
    assert metrics.progress_rate == pytest.approx(50)


def test_aggregation_is_order_independent(strong_student, struggling_student, assessed_students):
    students = [strong_student, struggling_student, *assessed_students]

    forward = aggregate_metrics(PROGRAM_ID, students)
    backward = aggregate_metrics(PROGRAM_ID, list(reversed(students)))

    for field in ["student_count", "average_gpa", "attendance_rate", "completion_rate", "progress_rate"]:
        assert getattr(forward, field) == pytest.approx(getattr(backward, field))


def test_attendance_only_counts_the_program():
    doc = student_doc(present=2, absent=2)
    doc["attendance"] += [{"programId": OTHER_PROGRAM_ID, "status": "present"}] * 6
    student = StudentRecord.model_validate(doc)

    assert program_attendance_rate(student, PROGRAM_ID) == pytest.approx(50)
    assert program_attendance_rate(student, OTHER_PROGRAM_ID) == pytest.approx(100)


def test_late_and_excused_are_not_present():
    doc = student_doc(present=1)
    doc["attendance"] += [
        {"programId": PROGRAM_ID, "status": "late"},
        {"programId": PROGRAM_ID, "status": "excused"},
        {"programId": PROGRAM_ID, "status": "absent"},
    ]
    student = StudentRecord.model_validate(doc)

    assert program_attendance_rate(student, PROGRAM_ID) == pytest.approx(25)


def test_student_without_attendance_contributes_zero():
    student = make_student(gpa=3.0)

    assert program_attendance_rate(student, PROGRAM_ID) == 0
    assert aggregate_metrics(PROGRAM_ID, [student]).attendance_rate == 0


def test_student_without_goals_contributes_zero():
    student = make_student(goals=[])

    assert goal_progress_rate(student) == 0
    assert aggregate_metrics(PROGRAM_ID, [student]).progress_rate == 0


def test_partial_goal_completion():
    student = make_student(goals=["completed", "in-progress", "delayed", "not-started"])

    assert goal_progress_rate(student) == pytest.approx(25)


def test_missing_gpa_counts_as_zero(assessed_students):
    metrics = aggregate_metrics(PROGRAM_ID, assessed_students)

    assert metrics.student_count == 3
    assert metrics.average_gpa == 0
    assert average_performance(PROGRAM_ID, assessed_students) == pytest.approx(70)


def test_malformed_student_document_is_tolerated():
    student = StudentRecord.model_validate({
        "_id": "64c0000000000000000000ff",
        "programIds": [PROGRAM_ID, None],
        "academicProfile": None,
        "assessments": None,
        "attendance": [None, {"programId": PROGRAM_ID}],
        "progressTracking": {"goals": None},
    })

    metrics = aggregate_metrics(PROGRAM_ID, [student])

    assert student.program_ids == [PROGRAM_ID]
    assert metrics.student_count == 1
    assert metrics.average_gpa == 0
    assert metrics.attendance_rate == 0
    assert metrics.completion_rate == 0
    assert metrics.progress_rate == 0


def test_unparseable_gpa_is_treated_as_missing():
    doc = student_doc()
    doc["academicProfile"]["performanceMetrics"] = {"overallGPA": "n/a"}
    student = StudentRecord.model_validate(doc)

    assert student.academic_profile.performance_metrics.overall_gpa is None
    assert aggregate_metrics(PROGRAM_ID, [student]).average_gpa == 0


@pytest.mark.parametrize("gpa", ["NaN", float("nan"), "inf", float("-inf")])
def test_non_finite_gpa_is_treated_as_missing(gpa, strong_student):
    doc = student_doc(student_id="64c0000000000000000000aa")
    doc["academicProfile"]["performanceMetrics"] = {"overallGPA": gpa}
    student = StudentRecord.model_validate(doc)

    metrics = aggregate_metrics(PROGRAM_ID, [strong_student, student])

    assert student.academic_profile.performance_metrics.overall_gpa is None
    assert metrics.average_gpa == pytest.approx(1.9)
    assert not math.isnan(score_effectiveness(metrics))


def test_non_finite_assessment_scores_count_as_zero():
    doc = student_doc(scores=[(float("nan"), 10), ("inf", "NaN")])
    student = StudentRecord.model_validate(doc)

    assert [(a.score, a.max_score) for a in student.assessments] == [(0, 10), (0, 0)]
    assert average_performance(PROGRAM_ID, [student]) == 0


def test_scalar_values_of_the_wrong_type_are_tolerated():
    doc = student_doc(present=2)
    doc["attendance"].append({"programId": PROGRAM_ID, "status": 1})
    doc["attendance"].append("present")
    doc["personalInfo"]["firstName"] = 42
    doc["academicProfile"] = "x"
    doc["progressTracking"] = {"goals": [{"status": ["completed"]}, 7]}
    student = StudentRecord.model_validate(doc)

    assert student.personal_info.first_name == "42"
    assert student.academic_profile.status == "active"
    assert [r.status for r in student.attendance] == ["present", "present", "1"]
    assert [g.status for g in student.progress_tracking.goals] == [""]
    assert program_attendance_rate(student, PROGRAM_ID) == pytest.approx(200 / 3)
    assert aggregate_metrics(PROGRAM_ID, [student]).student_count == 1


def test_program_document_with_wrong_types_is_tolerated():
    program = ProgramRecord.model_validate({
        "_id": PROGRAM_ID,
        "name": 7,
        "type": ["academic"],
        "status": None,
        "metrics": "stale",
    })

    assert program.name == "7"
    assert program.type == ""
    assert program.status == "active"
    assert program.metrics.student_satisfaction is None


def test_numeric_grade_is_stringified():
    doc = student_doc()
    doc["academicProfile"]["grade"] = 10

    assert StudentRecord.model_validate(doc).academic_profile.grade == "10"


def test_object_ids_match_string_program_ids():
    program_oid = ObjectId(PROGRAM_ID)
    student = StudentRecord.model_validate({
        "_id": ObjectId(),
        "programIds": [program_oid],
        "academicProfile": {"status": "graduated", "performanceMetrics": {"overallGPA": 4.0}},
        "attendance": [{"programId": program_oid, "status": "present"}],
    })

    metrics = aggregate_metrics(PROGRAM_ID, [student])

    assert isinstance(student.id, str)
    assert metrics.attendance_rate == pytest.approx(100)
    assert metrics.completion_rate == pytest.approx(100)


def test_assessment_percentage_guards_zero_max_score():
    assert assessment_percentage(Assessment(score=8, max_score=10)) == pytest.approx(80)
    assert assessment_percentage(Assessment(score=8, max_score=0)) == 0
    assert assessment_percentage(Assessment.model_validate({"score": 5})) == 0


def test_average_performance_counts_zero_max_score_as_zero():
    student = make_student(scores=[(90, 100), (10, 0)])

    assert average_performance(PROGRAM_ID, [student]) == pytest.approx(45)


def test_average_performance_without_assessments():
    assert average_performance(PROGRAM_ID, [make_student()]) == 0
    assert average_performance(PROGRAM_ID, []) == 0
