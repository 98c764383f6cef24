"""
Report Assembler

Runs aggregation, scoring and recommendations for one program and
packages the results into the output contracts.
Nothing here touches the store; callers persist results if they want to.
"""

import logging
from typing import Iterable, Optional

from .constants import DEFAULT_TIMEFRAME
from .contracts import (
    Benchmarks,
    EffectivenessResult,
    PerformanceReport,
    ProgramMetricsSnapshot,
    ProgramRecord,
    StudentPerformance,
    StudentPerformanceMetrics,
    StudentRecord,
    StudentSummary,
    TimeSeriesData,
)
from .effectiveness_scorer import EffectivenessScorer
from .metric_aggregator import (
    aggregate_metrics,
    attendance_rate,
    average_performance,
    average_score,
    program_assessments,
    program_attendance,
)
from .recommendation_generator import RecommendationGenerator

logger = logging.getLogger(__name__)


def build_effectiveness(
    program: ProgramRecord,
    students: Iterable[StudentRecord],
    scorer: Optional[EffectivenessScorer] = None,
    generator: Optional[RecommendationGenerator] = None
) -> EffectivenessResult:
    """
    Metrics, effectiveness score and recommendations for a program.

    Args:
        program: Program snapshot
        students: Students enrolled in the program
        scorer: Scorer to use (default weights if omitted)
        generator: Recommendation generator (default thresholds if omitted)

    Returns:
        EffectivenessResult
    """
    scorer = scorer or EffectivenessScorer()
    generator = generator or RecommendationGenerator()

    metrics = aggregate_metrics(program.id, students)
    score = scorer.score(metrics)
    result = EffectivenessResult(
        **metrics.model_dump(),
        effectiveness_score=score,
    )
    result.recommendations = generator.recommend(result, program)

    logger.info(
        f"📊 Program {program.id}: {metrics.student_count} students, "
        f"effectiveness {score:.2f}, {len(result.recommendations)} recommendations"
    )
    return result


def build_report(
    program: ProgramRecord,
    students: Iterable[StudentRecord],
    timeframe: str = DEFAULT_TIMEFRAME,
    scorer: Optional[EffectivenessScorer] = None,
    generator: Optional[RecommendationGenerator] = None
) -> PerformanceReport:
    """
    Assemble the program performance report.

    timeSeriesData and benchmarks are returned empty; they are
    placeholders for historical and comparative analytics.
    """
    logger.info(f"📝 Building {timeframe} report for program {program.id}")
    effectiveness = build_effectiveness(program, students, scorer, generator)

    return PerformanceReport(
        program=program.name,
        time_series_data=TimeSeriesData(),
        benchmarks=Benchmarks(),
        recommendations=effectiveness.recommendations,
    )


def build_metrics_snapshot(
    program: ProgramRecord,
    students: Iterable[StudentRecord],
    scorer: Optional[EffectivenessScorer] = None
) -> ProgramMetricsSnapshot:
    """
    Metrics block to persist on the program document.

    studentSatisfaction has no computed source, so the stored value is kept.
    """
    scorer = scorer or EffectivenessScorer()
    students = list(students)
    metrics = aggregate_metrics(program.id, students)

    return ProgramMetricsSnapshot(
        effectiveness_score=scorer.score(metrics),
        student_satisfaction=program.metrics.student_satisfaction,
        average_performance=average_performance(program.id, students),
        completion_rate=metrics.completion_rate,
    )


def build_student_performance(
    student: StudentRecord,
    program_id: str
) -> StudentPerformance:
    """A student's assessments and attendance within one program."""
    assessments = program_assessments(student, program_id)
    attendance = program_attendance(student, program_id)

    return StudentPerformance(
        student=StudentSummary(id=student.id, name=student.full_name),
        assessments=assessments,
        attendance=attendance,
        metrics=StudentPerformanceMetrics(
            average_score=average_score(assessments),
            attendance_rate=attendance_rate(attendance),
        ),
    )
