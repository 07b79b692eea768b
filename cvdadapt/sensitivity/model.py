"""
Cone sensitivity estimate and its calibration update rule.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional

import numpy as np

from cvdadapt.core.config import CalibrationConfig, ConeType

_CONE_INDEX: Dict[ConeType, int] = {ConeType.L: 0, ConeType.M: 1, ConeType.S: 2}

_PROFILE_TEXT: Dict[ConeType, str] = {
    ConeType.L: "Protan-like deficits detected. Reds require additional contrast cues.",
    ConeType.M: "Deutan-like profile. Greens are expanded to avoid overlap with yellows.",
    ConeType.S: "Tritan-like sensitivity dip. Blues receive boosted saturation.",
}


@dataclass(frozen=True)
class ConeSensitivity:
    """
    Relative L/M/S cone sensitivity on the 0-1 scale.

    Lower values indicate a weaker cone class.
    """

    l: float
    m: float
    s: float

    def as_array(self) -> np.ndarray:
        return np.array([self.l, self.m, self.s], dtype=float)

    def as_percent(self) -> Dict[str, int]:
        """Rounded percentages as shown on the profile screen."""

        return {"l": round(self.l * 100), "m": round(self.m * 100), "s": round(self.s * 100)}

    def get(self, cone: ConeType) -> float:
        return float(getattr(self, cone.value))


def initial_sensitivity(config: Optional[CalibrationConfig] = None) -> ConeSensitivity:
    """Neutral starting estimate for a new session."""

    config = config or CalibrationConfig()
    config.validate()
    return ConeSensitivity(*config.neutral)


def update_sensitivity(
    current: ConeSensitivity,
    success: bool,
    cone: Optional[ConeType] = None,
    config: Optional[CalibrationConfig] = None,
) -> ConeSensitivity:
    """
    Nudge the sensitivity estimate after one calibration trial.

    Parameters
    ----------
    current : ConeSensitivity
        Running estimate before the trial.
    success : bool
        Whether the participant answered the trial correctly.
    cone : ConeType, optional
        Cone class targeted by the trial. When omitted every channel moves.
    config : CalibrationConfig, optional
        Step sizes and bounds.
    """

    config = config or CalibrationConfig()
    config.validate()
    steps = config.success_step if success else tuple(-step for step in config.failure_step)

    updated = {}
    for target, index in _CONE_INDEX.items():
        value = current.get(target)
        if cone is None or cone == target:
            value += steps[index]
        # Clamp every channel, including untouched ones that arrived out of range.
        updated[target.value] = float(np.clip(value, config.lower_bound[index], config.upper_bound))

    return replace(current, **updated)


def weakest_cone(sensitivity: ConeSensitivity) -> ConeType:
    """Cone class with the lowest sensitivity (L wins ties, then M)."""

    return min(_CONE_INDEX, key=lambda cone: (sensitivity.get(cone), _CONE_INDEX[cone]))


def sensitivity_profile(sensitivity: ConeSensitivity) -> str:
    """Participant-facing explanation of the weakest cone."""

    return _PROFILE_TEXT[weakest_cone(sensitivity)]
