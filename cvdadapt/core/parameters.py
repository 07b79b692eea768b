"""
Value types produced by the adaptive filter model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class ConeGains:
    """Multiplicative compensation applied to each LMS channel."""

    l: float = 1.0
    m: float = 1.0
    s: float = 1.0

    def as_array(self) -> np.ndarray:
        return np.array([self.l, self.m, self.s], dtype=float)


@dataclass(frozen=True)
class AdaptiveFilterParameters:
    """
    Complete parameter set consumed by :meth:`AdaptiveFilterEngine.apply`.

    Derived purely from cone sensitivities and task difficulty; safe to
    recompute and discard.
    """

    gains: ConeGains = ConeGains()
    saturation_multiplier: float = 1.0
    value_lift: float = 0.0
    hue_shift_deg: float = 0.0
    problematic_hue_range: Tuple[float, float] = (330.0, 30.0)
    center_hue: float = 0.0

    @classmethod
    def neutral(cls) -> "AdaptiveFilterParameters":
        """Parameters under which the filter reproduces its input."""

        return cls()
