"""
Effectiveness Scorer

Combines the four program metrics into one weighted effectiveness score.
The result is not clamped: out-of-range inputs produce out-of-range scores.
"""

from typing import List, Optional

from .contracts import EffectivenessWeights, ProgramMetrics, ScoreComponent


class EffectivenessScorer:
    """Weighted sum over completion, GPA, attendance and progress."""

    def __init__(self, weights: Optional[EffectivenessWeights] = None):
        self.weights = weights or EffectivenessWeights()

    def breakdown(self, metrics: ProgramMetrics) -> List[ScoreComponent]:
        """Each metric normalized to 0-100 with its weighted contribution."""
        w = self.weights
        terms = [
            ("completionRate", metrics.completion_rate, metrics.completion_rate, w.completion_rate),
            ("averageGPA", metrics.average_gpa, metrics.average_gpa / w.gpa_scale * 100, w.average_gpa),
            ("attendanceRate", metrics.attendance_rate, metrics.attendance_rate, w.attendance_rate),
            ("progressRate", metrics.progress_rate, metrics.progress_rate, w.progress_rate),
        ]
        return [
            ScoreComponent(
                metric=name,
                value=value,
                normalized=normalized,
                weight=weight,
                weighted_score=normalized * weight,
            )
            for name, value, normalized, weight in terms
        ]

    def score(self, metrics: ProgramMetrics) -> float:
        return sum(c.weighted_score for c in self.breakdown(metrics))


def score_effectiveness(
    metrics: ProgramMetrics,
    weights: Optional[EffectivenessWeights] = None
) -> float:
    """Convenience wrapper using the default weights."""
    return EffectivenessScorer(weights).score(metrics)
