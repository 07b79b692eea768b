"""
Aggregation of mini-task performance into a difficulty summary.

Each interface condition contributes up to three task records (odd-colour
tile picking, slider matching, visual search). Every metric is averaged
independently over the conditions that produced it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from cvdadapt.core.config import DifficultyNormalization

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OddMetric:
    """Odd-colour-out tile picking. A record without ``accuracy`` is not summarised."""

    reaction_time: float = 0.0  # seconds
    accuracy: Optional[float] = None  # 0/1 or continuous ratio
    delta_level: float = 0.0  # HSV difference level of the odd tile


@dataclass(frozen=True)
class SliderMetric:
    """Colour matching slider. Missing ``error`` or ``swipes`` are skipped individually."""

    time: float = 0.0  # seconds
    swipes: Optional[int] = None
    error: Optional[float] = None  # normalized matching error in [0, 1]


@dataclass(frozen=True)
class SearchMetric:
    """Visual search among distractors. A missing measurement counts as 0."""

    time: float = 0.0  # seconds
    errors: int = 0  # false taps


@dataclass(frozen=True)
class ConditionMetrics:
    """Task records collected under one interface condition."""

    odd: Optional[OddMetric] = None
    slider: Optional[SliderMetric] = None
    search: Optional[SearchMetric] = None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "ConditionMetrics":
        """Build from a JSON-shaped record with optional task keys."""

        def build(kind, payload):
            if payload is None:
                return None
            names = {f.name for f in fields(kind)}
            if "reactionTime" in payload:
                payload = {**payload, "reaction_time": payload["reactionTime"]}
            if "deltaLevel" in payload:
                payload = {**payload, "delta_level": payload["deltaLevel"]}
            return kind(**{k: v for k, v in payload.items() if k in names and v is not None})

        return cls(
            odd=build(OddMetric, record.get("odd")),
            slider=build(SliderMetric, record.get("slider")),
            search=build(SearchMetric, record.get("search")),
        )

    def is_empty(self) -> bool:
        return self.odd is None and self.slider is None and self.search is None


@dataclass(frozen=True)
class DifficultySummary:
    """Normalized task difficulty signals, each in [0, 1]."""

    accuracy: float
    slider_error: float
    slider_swipes: float
    search_difficulty: float


DEFAULT_DIFFICULTY = DifficultySummary(
    accuracy=0.65,
    slider_error=0.35,
    slider_swipes=0.4,
    search_difficulty=0.5,
)


def search_difficulty(metric: SearchMetric, normalization: Optional[DifficultyNormalization] = None) -> float:
    """Composite of normalized search time and false taps, clamped to [0, 1]."""

    normalization = normalization or DifficultyNormalization()
    normalized_time = metric.time / normalization.search_time_scale
    normalized_errors = metric.errors / normalization.search_error_scale
    return float(np.clip((normalized_time + normalized_errors) / 2.0, 0.0, 1.0))


def _as_metrics(record) -> ConditionMetrics:
    if isinstance(record, ConditionMetrics):
        return record
    return ConditionMetrics.from_dict(record)


def summarize_difficulty(
    metrics_by_condition: Mapping[Any, Any],
    normalization: Optional[DifficultyNormalization] = None,
) -> DifficultySummary:
    """
    Condense per-condition task metrics into a :class:`DifficultySummary`.

    Parameters
    ----------
    metrics_by_condition : Mapping
        Condition id -> :class:`ConditionMetrics` (or an equivalent dict).
    normalization : DifficultyNormalization, optional
        Scales for swipe counts and search measurements.

    Returns
    -------
    DifficultySummary
        :data:`DEFAULT_DIFFICULTY` when no task data exists at all;
        otherwise per-metric means, with metrics lacking samples falling
        back to their default individually.
    """

    normalization = normalization or DifficultyNormalization()
    normalization.validate()

    accuracy: List[float] = []
    slider_errors: List[float] = []
    slider_swipes: List[float] = []
    search: List[float] = []

    for condition, record in metrics_by_condition.items():
        metrics = _as_metrics(record)
        if metrics.odd is not None and metrics.odd.accuracy is not None:
            accuracy.append(metrics.odd.accuracy)
        if metrics.slider is not None:
            if metrics.slider.error is not None:
                slider_errors.append(metrics.slider.error)
            if metrics.slider.swipes is not None:
                slider_swipes.append(metrics.slider.swipes / normalization.swipe_scale)
        if metrics.search is not None:
            search.append(search_difficulty(metrics.search, normalization))
        logger.debug("Collected task metrics for condition %s", getattr(condition, "value", condition))

    if not accuracy and not slider_errors and not search:
        return DEFAULT_DIFFICULTY

    def mean_or(values: List[float], fallback: float) -> float:
        return float(np.mean(values)) if values else fallback

    return DifficultySummary(
        accuracy=mean_or(accuracy, DEFAULT_DIFFICULTY.accuracy),
        slider_error=mean_or(slider_errors, DEFAULT_DIFFICULTY.slider_error),
        slider_swipes=mean_or(slider_swipes, DEFAULT_DIFFICULTY.slider_swipes),
        search_difficulty=mean_or(search, DEFAULT_DIFFICULTY.search_difficulty),
    )


def condition_accuracy(
    metrics_by_condition: Mapping[Any, Any],
    normalization: Optional[DifficultyNormalization] = None,
) -> Dict[Any, float]:
    """
    Mean task accuracy per condition for the comparison dashboard.

    Slider and search tasks are scored as ``1 - error`` and
    ``1 - search difficulty``. A condition without tasks scores 0.
    """

    totals: Dict[Any, float] = {}
    for condition, record in metrics_by_condition.items():
        metrics = _as_metrics(record)
        scores: List[float] = []
        if metrics.odd is not None and metrics.odd.accuracy is not None:
            scores.append(metrics.odd.accuracy)
        if metrics.slider is not None and metrics.slider.error is not None:
            scores.append(1.0 - metrics.slider.error)
        if metrics.search is not None:
            scores.append(1.0 - search_difficulty(metrics.search, normalization))
        totals[condition] = float(np.mean(scores)) if scores else 0.0
    return totals
