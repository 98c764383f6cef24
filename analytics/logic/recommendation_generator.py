"""
Recommendation Generator

Evaluates program metrics against threshold rules.
Rules are independent: every matching rule emits one recommendation,
in rule order (not priority order).
"""

import logging
from typing import Callable, List, NamedTuple, Optional

from .constants import Priority, RecommendationType
from .contracts import (
    ProgramMetrics,
    ProgramRecord,
    Recommendation,
    RecommendationThresholds,
)

logger = logging.getLogger(__name__)


class Rule(NamedTuple):
    name: str
    applies: Callable[[ProgramMetrics, RecommendationThresholds], bool]
    recommendation: Recommendation


# Order matters: output follows this list
PROGRAM_RULES: List[Rule] = [
    Rule(
        name="low_gpa",
        applies=lambda m, t: m.average_gpa < t.min_average_gpa,
        recommendation=Recommendation(
            type=RecommendationType.IMPROVEMENT,
            description="Consider implementing additional academic support sessions to improve overall GPA",
            priority=Priority.HIGH,
        ),
    ),
    Rule(
        name="low_attendance",
        applies=lambda m, t: m.attendance_rate < t.min_attendance_rate,
        recommendation=Recommendation(
            type=RecommendationType.INTERVENTION,
            description="Attendance rates are below target. Consider implementing engagement strategies and attendance monitoring",
            priority=Priority.MEDIUM,
        ),
    ),
    Rule(
        name="low_progress",
        applies=lambda m, t: m.progress_rate < t.min_progress_rate,
        recommendation=Recommendation(
            type=RecommendationType.IMPROVEMENT,
            description="Student progress rate indicates potential barriers. Review curriculum pacing and student support systems",
            priority=Priority.HIGH,
        ),
    ),
    # Only this rule is guarded by enrollment; rules above fire on empty programs too.
    Rule(
        name="low_completion",
        applies=lambda m, t: m.student_count > 0 and m.completion_rate < t.min_completion_rate,
        recommendation=Recommendation(
            type=RecommendationType.RESOURCE,
            description="Low completion rates detected. Consider reviewing program structure and providing additional resources",
            priority=Priority.HIGH,
        ),
    ),
]


class RecommendationGenerator:

    def __init__(
        self,
        thresholds: Optional[RecommendationThresholds] = None,
        rules: Optional[List[Rule]] = None
    ):
        self.thresholds = thresholds or RecommendationThresholds()
        self.rules = list(rules) if rules is not None else PROGRAM_RULES

    def recommend(
        self,
        metrics: ProgramMetrics,
        program: Optional[ProgramRecord] = None
    ) -> List[Recommendation]:
        """
        Produce recommendations for a program's metrics.

        Args:
            metrics: Aggregated metrics (score fields are ignored)
            program: Program being evaluated, used for logging only

        Returns:
            Fresh Recommendation copies for every rule that matched
        """
        fired = [
            rule for rule in self.rules
            if rule.applies(metrics, self.thresholds)
        ]
        if program is not None:
            logger.debug(
                f"Program {program.id or program.name}: rules fired {[r.name for r in fired]}"
            )
        return [rule.recommendation.model_copy() for rule in fired]
