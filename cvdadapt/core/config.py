"""
Configuration primitives for the adaptive CVD filter.

Defines enums for cone classes, deficiency types, study conditions and
preset filters, plus dataclasses collecting the model's tunable constants.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ConeType(Enum):
    """Cone photoreceptor classes."""

    L = "l"  # Long wavelength (red)
    M = "m"  # Medium wavelength (green)
    S = "s"  # Short wavelength (blue)


class CVDType(Enum):
    """Deficiency type inferred from the cone-contrast test."""

    PROTAN = "protan"
    DEUTAN = "deutan"
    TRITAN = "tritan"
    NORMAL = "normal"


class Condition(Enum):
    """Interface condition a task block is run under."""

    IOS = "ios"  # Static OS colour filter
    AUI = "aui"  # Adaptive user interface


class OSPresetFilter(Enum):
    """Fixed system-wide colour filters."""

    PROTANOPIA = "protanopia"
    DEUTERANOPIA = "deuteranopia"
    TRITANOPIA = "tritanopia"
    GRAYSCALE = "grayscale"


@dataclass(frozen=True)
class FilterHyperparameters:
    """
    Tunable constants of the adaptive filter model.

    The defaults are the empirically tuned values used in the study.
    """

    # Per-cone gain slopes
    alpha_l: float = 0.85
    alpha_m: float = 0.8
    alpha_s: float = 0.75

    # Difficulty -> HSV adjustment slopes
    beta_saturation: float = 0.45
    beta_value: float = 0.35
    delta_hue: float = 12.0  # degrees

    # Difficulty mixing weights
    lambda_swipes: float = 0.35
    mu_search: float = 0.25

    # Hue band that receives the separating shift (wraps through 0)
    problematic_hue_range: Tuple[float, float] = (330.0, 30.0)
    center_hue: float = 0.0

    def validate(self) -> None:
        """Validate hyperparameters."""

        for name in ("alpha_l", "alpha_m", "alpha_s", "beta_saturation", "lambda_swipes", "mu_search"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        if not (0 <= self.beta_value <= 1):
            raise ValueError(f"beta_value {self.beta_value} out of range [0, 1]")

        if not (0 <= self.delta_hue <= 180):
            raise ValueError(f"delta_hue {self.delta_hue} out of range [0, 180]")

        if len(self.problematic_hue_range) != 2:
            raise ValueError("problematic_hue_range must be a (start, end) pair")

        for hue in (*self.problematic_hue_range, self.center_hue):
            if not (0 <= hue < 360):
                raise ValueError(f"Hue {hue} out of range [0, 360)")


@dataclass(frozen=True)
class CalibrationConfig:
    """
    Trial-by-trial cone sensitivity update rule.

    Tuples are ordered (L, M, S) and live on the 0-1 sensitivity scale.
    """

    neutral: Tuple[float, float, float] = (0.78, 0.74, 0.58)
    success_step: Tuple[float, float, float] = (0.03, 0.028, 0.025)
    failure_step: Tuple[float, float, float] = (0.02, 0.018, 0.02)
    lower_bound: Tuple[float, float, float] = (0.35, 0.35, 0.3)
    upper_bound: float = 1.0

    def validate(self) -> None:
        """Validate calibration parameters."""

        if not (0 < self.upper_bound <= 1):
            raise ValueError(f"Upper bound {self.upper_bound} out of range (0, 1]")

        for cone, low, start in zip("LMS", self.lower_bound, self.neutral):
            if not (0 <= low < self.upper_bound):
                raise ValueError(f"{cone}-cone lower bound {low} out of range [0, {self.upper_bound})")
            if not (low <= start <= self.upper_bound):
                raise ValueError(
                    f"{cone}-cone neutral value {start} outside [{low}, {self.upper_bound}]"
                )

        for step in (*self.success_step, *self.failure_step):
            if step < 0:
                raise ValueError(f"Step sizes must be non-negative, got {step}")


@dataclass(frozen=True)
class DifficultyNormalization:
    """Scales mapping raw task measurements onto [0, 1]."""

    swipe_scale: float = 18.0  # swipes
    search_time_scale: float = 14.0  # seconds
    search_error_scale: float = 6.0  # false taps

    def validate(self) -> None:
        """Validate normalization scales."""

        for name in ("swipe_scale", "search_time_scale", "search_error_scale"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
