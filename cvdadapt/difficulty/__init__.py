"""Task difficulty aggregation."""

from cvdadapt.difficulty.summary import (
    DEFAULT_DIFFICULTY,
    ConditionMetrics,
    DifficultySummary,
    OddMetric,
    SearchMetric,
    SliderMetric,
    condition_accuracy,
    summarize_difficulty,
)

__all__ = [
    "DEFAULT_DIFFICULTY",
    "ConditionMetrics",
    "DifficultySummary",
    "OddMetric",
    "SearchMetric",
    "SliderMetric",
    "condition_accuracy",
    "summarize_difficulty",
]
