"""Adaptive colour filter for colour vision deficiency (cvdadapt).

Personalized colour remapping driven by measured cone sensitivities and
task-derived difficulty signals.
"""

from cvdadapt.core.config import (
    CalibrationConfig,
    Condition,
    ConeType,
    CVDType,
    DifficultyNormalization,
    FilterHyperparameters,
    OSPresetFilter,
)
from cvdadapt.core.engine import AdaptiveFilterEngine, apply_filter, compute_parameters
from cvdadapt.core.parameters import AdaptiveFilterParameters, ConeGains
from cvdadapt.difficulty.summary import (
    DEFAULT_DIFFICULTY,
    ConditionMetrics,
    DifficultySummary,
    summarize_difficulty,
)
from cvdadapt.sensitivity.model import ConeSensitivity, initial_sensitivity, update_sensitivity

__all__ = [
    "AdaptiveFilterEngine",
    "AdaptiveFilterParameters",
    "CalibrationConfig",
    "Condition",
    "ConditionMetrics",
    "ConeGains",
    "ConeSensitivity",
    "ConeType",
    "CVDType",
    "DEFAULT_DIFFICULTY",
    "DifficultyNormalization",
    "DifficultySummary",
    "FilterHyperparameters",
    "OSPresetFilter",
    "apply_filter",
    "compute_parameters",
    "initial_sensitivity",
    "summarize_difficulty",
    "update_sensitivity",
]

try:  # Optional PyTorch acceleration
    from cvdadapt.torch import TorchAdaptiveFilter  # type: ignore

    __all__.append("TorchAdaptiveFilter")
except ImportError:  # pragma: no cover - torch not installed
    TorchAdaptiveFilter = None  # type: ignore

__version__ = "1.0.0"
