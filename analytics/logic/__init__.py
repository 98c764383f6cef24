"""
Analytics Logic Module

Provides the deterministic program effectiveness engine:
metric aggregation, weighted scoring, recommendations and reports.
"""

from .contracts import (
    AnalyticsConfig,
    EffectivenessWeights,
    RecommendationThresholds,
    ProgramRecord,
    StudentRecord,
    ProgramMetrics,
    EffectivenessResult,
    Recommendation,
    PerformanceReport,
    ProgramMetricsSnapshot,
    StudentPerformance,
    OrganizationDashboard,
    ProgramOverview,
)
from .engine import AnalyticsEngine, get_effectiveness
from .effectiveness_scorer import EffectivenessScorer, score_effectiveness
from .recommendation_generator import RecommendationGenerator
from .metric_aggregator import aggregate_metrics
from .report_assembler import build_report
from .constants import RecommendationType, Priority

__all__ = [
    # Main engine
    "AnalyticsEngine",
    "get_effectiveness",

    # Pipeline stages
    "aggregate_metrics",
    "EffectivenessScorer",
    "score_effectiveness",
    "RecommendationGenerator",
    "build_report",

    # Configuration
    "AnalyticsConfig",
    "EffectivenessWeights",
    "RecommendationThresholds",

    # Contracts
    "ProgramRecord",
    "StudentRecord",
    "ProgramMetrics",
    "EffectivenessResult",
    "Recommendation",
    "PerformanceReport",
    "ProgramMetricsSnapshot",
    "StudentPerformance",
    "OrganizationDashboard",
    "ProgramOverview",

    # Enums
    "RecommendationType",
    "Priority",
]
