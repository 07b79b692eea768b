"""Cone sensitivity estimation."""

from cvdadapt.sensitivity.model import (
    ConeSensitivity,
    initial_sensitivity,
    sensitivity_profile,
    update_sensitivity,
    weakest_cone,
)
from cvdadapt.sensitivity.staircase import (
    ConeMetrics,
    ConeTrial,
    StaircaseConfig,
    classify_cvd_type,
    compute_cone_metrics,
    metrics_by_cone,
    next_contrast,
)

__all__ = [
    "ConeSensitivity",
    "initial_sensitivity",
    "update_sensitivity",
    "weakest_cone",
    "sensitivity_profile",
    "ConeMetrics",
    "ConeTrial",
    "StaircaseConfig",
    "classify_cvd_type",
    "compute_cone_metrics",
    "metrics_by_cone",
    "next_contrast",
]
