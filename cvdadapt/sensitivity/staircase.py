"""
Cone-contrast staircase scoring.

Numeric rules of the adaptive cone contrast test: a multiplicative 1-up /
1-down staircase per cone class, threshold estimation from the tail of the
staircase, and classification of the deficiency type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

import numpy as np

from cvdadapt.core.config import ConeType, CVDType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaircaseConfig:
    """Staircase schedule (contrasts in percent)."""

    trials_per_cone: int = 20
    initial_contrast: float = 50.0
    min_contrast: float = 0.01
    max_contrast: float = 100.0
    correct_step_down: float = 0.7
    incorrect_step_up: float = 1.5
    tail_trials: int = 10  # trials averaged for the threshold

    def validate(self) -> None:
        """Validate staircase parameters."""

        if self.trials_per_cone < 1:
            raise ValueError(f"trials_per_cone must be positive, got {self.trials_per_cone}")

        if not (0 < self.min_contrast <= self.initial_contrast <= self.max_contrast <= 100):
            raise ValueError(
                "Contrasts must satisfy 0 < min <= initial <= max <= 100, got "
                f"{self.min_contrast}, {self.initial_contrast}, {self.max_contrast}"
            )

        if not (0 < self.correct_step_down < 1):
            raise ValueError(f"correct_step_down {self.correct_step_down} out of range (0, 1)")

        if self.incorrect_step_up <= 1:
            raise ValueError(f"incorrect_step_up must exceed 1, got {self.incorrect_step_up}")

        if self.tail_trials < 1:
            raise ValueError(f"tail_trials must be positive, got {self.tail_trials}")


@dataclass(frozen=True)
class ConeTrial:
    """One staircase presentation."""

    cone: ConeType
    contrast_percent: float
    response_time_ms: float
    correct: bool


@dataclass(frozen=True)
class ConeMetrics:
    """Threshold estimate for a single cone class."""

    threshold: float  # percent contrast
    std_error: float
    trials: int
    avg_time: float  # seconds
    log_cs: float
    score: int
    category: str  # Normal | Possible | Deficient


def next_contrast(contrast: float, correct: bool, config: Optional[StaircaseConfig] = None) -> float:
    """Contrast for the following trial: harder after a hit, easier after a miss."""

    config = config or StaircaseConfig()
    if correct:
        return max(config.min_contrast, contrast * config.correct_step_down)
    return min(config.max_contrast, contrast * config.incorrect_step_up)


def compute_cone_metrics(
    trials: Sequence[ConeTrial],
    config: Optional[StaircaseConfig] = None,
) -> ConeMetrics:
    """
    Estimate the contrast threshold from the tail of a staircase run.

    Raises
    ------
    ValueError
        If ``trials`` is empty.
    """

    config = config or StaircaseConfig()
    if not trials:
        raise ValueError("Cannot compute cone metrics without trials")

    tail = np.array([t.contrast_percent for t in trials[-config.tail_trials :]], dtype=float)
    n = tail.size
    threshold = float(np.mean(tail))
    std_error = float(np.std(tail, ddof=1) / np.sqrt(n)) if n > 1 else 0.0

    avg_time = float(np.mean([t.response_time_ms for t in trials])) / 1000.0
    log_cs = float(np.log10(1.0 / max(0.0001, threshold / 100.0)))
    score = int(np.floor(np.clip(log_cs * 75.0, 0.0, 200.0) + 0.5))

    category = "Normal"
    if threshold > 10 or score < 80:
        category = "Possible"
    if threshold > 25 or score < 50:
        category = "Deficient"

    logger.debug(
        "Cone metrics: threshold=%0.2f%% logCS=%0.2f score=%d (%s)",
        threshold,
        log_cs,
        score,
        category,
    )

    return ConeMetrics(
        threshold=round(threshold, 2),
        std_error=round(std_error, 2),
        trials=len(trials),
        avg_time=round(avg_time, 1),
        log_cs=round(log_cs, 2),
        score=score,
        category=category,
    )


def metrics_by_cone(
    trials: Sequence[ConeTrial],
    config: Optional[StaircaseConfig] = None,
) -> Dict[ConeType, ConeMetrics]:
    """Split a full test run by cone class and score each class."""

    return {
        cone: compute_cone_metrics([t for t in trials if t.cone == cone], config)
        for cone in ConeType
    }


def classify_cvd_type(metrics: Mapping[ConeType, ConeMetrics]) -> CVDType:
    """
    Infer the deficiency type from per-cone thresholds.

    A cone is blamed only when it is flagged (not ``Normal``) and its
    threshold is strictly the highest of the three.
    """

    labels = {ConeType.L: CVDType.PROTAN, ConeType.M: CVDType.DEUTAN, ConeType.S: CVDType.TRITAN}

    for cone, label in labels.items():
        current = metrics[cone]
        others = [metrics[other].threshold for other in ConeType if other != cone]
        if current.category != "Normal" and all(current.threshold > other for other in others):
            return label

    return CVDType.NORMAL
