"""
Analytics Engine

Main orchestrator that combines all analytics components.
This is the primary entry point used by the API layer.
"""

from typing import Any, Dict, Iterable, List, Optional

from .constants import ENGINE_VERSION
from .contracts import (
    AnalyticsConfig,
    EffectivenessResult,
    OrganizationDashboard,
    PerformanceReport,
    ProgramMetrics,
    ProgramMetricsSnapshot,
    ProgramOverview,
    ProgramRecord,
    Recommendation,
    ScoreComponent,
    StudentPerformance,
    StudentRecord,
)
from .dashboard import build_dashboard
from .effectiveness_scorer import EffectivenessScorer
from .metric_aggregator import aggregate_metrics
from .recommendation_generator import RecommendationGenerator
from .report_assembler import (
    build_effectiveness,
    build_metrics_snapshot,
    build_report,
    build_student_performance,
)


class AnalyticsEngine:
    """
    Program analytics engine.

    Pipeline flow:
    1. Aggregation - Reduce enrolled students into program metrics
    2. Scoring - Weighted effectiveness score
    3. Recommendations - Threshold rules over the metrics
    4. Assembly - Effectiveness result / performance report

    Holds only immutable configuration, so one instance can serve
    every request.
    """

    def __init__(self, config: Optional[AnalyticsConfig] = None):
        self.config = config or AnalyticsConfig()
        self.scorer = EffectivenessScorer(self.config.weights)
        self.generator = RecommendationGenerator(self.config.thresholds)
        self.version = ENGINE_VERSION

    def aggregate(
        self,
        program_id: str,
        students: Iterable[StudentRecord]
    ) -> ProgramMetrics:
        return aggregate_metrics(program_id, students)

    def score(self, metrics: ProgramMetrics) -> float:
        return self.scorer.score(metrics)

    def score_breakdown(self, metrics: ProgramMetrics) -> List[ScoreComponent]:
        return self.scorer.breakdown(metrics)

    def recommend(
        self,
        metrics: ProgramMetrics,
        program: Optional[ProgramRecord] = None
    ) -> List[Recommendation]:
        return self.generator.recommend(metrics, program)

    def effectiveness(
        self,
        program: ProgramRecord,
        students: Iterable[StudentRecord]
    ) -> EffectivenessResult:
        return build_effectiveness(program, students, self.scorer, self.generator)

    def build_report(
        self,
        program: ProgramRecord,
        students: Iterable[StudentRecord],
        timeframe: Optional[str] = None
    ) -> PerformanceReport:
        return build_report(
            program,
            students,
            timeframe or self.config.default_timeframe,
            self.scorer,
            self.generator,
        )

    def metrics_snapshot(
        self,
        program: ProgramRecord,
        students: Iterable[StudentRecord]
    ) -> ProgramMetricsSnapshot:
        return build_metrics_snapshot(program, students, self.scorer)

    def student_performance(
        self,
        student: StudentRecord,
        program_id: str
    ) -> StudentPerformance:
        return build_student_performance(student, program_id)

    def program_overview(
        self,
        program: ProgramRecord,
        students: Iterable[StudentRecord]
    ) -> ProgramOverview:
        return ProgramOverview(
            program_id=program.id,
            name=program.name,
            type=program.type,
            metrics=self.effectiveness(program, students),
        )

    def organization_dashboard(
        self,
        programs: Iterable[ProgramRecord],
        students: Iterable[StudentRecord]
    ) -> OrganizationDashboard:
        return build_dashboard(programs, students)

    def effectiveness_from_dict(
        self,
        program_data: Dict[str, Any],
        students_data: Iterable[Dict[str, Any]]
    ) -> EffectivenessResult:
        """
        Effectiveness from raw store documents.

        Convenience method for API integration.
        """
        program = ProgramRecord.model_validate(program_data)
        students = [StudentRecord.model_validate(s) for s in students_data]
        return self.effectiveness(program, students)


# Convenience function for simple usage
def get_effectiveness(
    program: ProgramRecord,
    students: Iterable[StudentRecord],
    config: Optional[AnalyticsConfig] = None
) -> EffectivenessResult:
    engine = AnalyticsEngine(config)
    return engine.effectiveness(program, students)
