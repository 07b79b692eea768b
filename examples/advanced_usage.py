"""
Advanced cvdadapt usage scenarios.
"""

from __future__ import annotations

import numpy as np

from cvdadapt import (
    AdaptiveFilterEngine,
    ConeSensitivity,
    ConeType,
    FilterHyperparameters,
    TorchAdaptiveFilter,
)
from cvdadapt.presets import apply_custom_adaptive_filter, apply_os_preset_filter, recommended_os_preset
from cvdadapt.sensitivity import ConeTrial, StaircaseConfig, classify_cvd_type, metrics_by_cone, next_contrast


def example_staircase_scoring() -> None:
    """Score a simulated cone-contrast run and pick the matching OS preset."""

    rng = np.random.default_rng(3)
    config = StaircaseConfig()
    # Simulated observer: weak L cones need roughly 30% contrast.
    true_thresholds = {ConeType.L: 30.0, ConeType.M: 6.0, ConeType.S: 8.0}

    trials = []
    for cone, threshold in true_thresholds.items():
        contrast = config.initial_contrast
        for _ in range(config.trials_per_cone):
            correct = bool(contrast >= threshold or rng.random() < 0.25)
            trials.append(ConeTrial(cone, contrast, float(rng.uniform(600, 1800)), correct))
            contrast = next_contrast(contrast, correct, config)

    metrics = metrics_by_cone(trials, config)
    cvd_type = classify_cvd_type(metrics)
    for cone, cone_metrics in metrics.items():
        print(f"{cone.name}-cone: threshold={cone_metrics.threshold}% ({cone_metrics.category})")
    preset = recommended_os_preset(cvd_type)
    print(f"Detected {cvd_type.value}; OS preset {preset.value}: #f28f8f -> "
          f"{apply_os_preset_filter('#f28f8f', preset)}")


def example_custom_hyperparameters() -> str:
    """Stronger L compensation and a wider red band."""

    hp = FilterHyperparameters(alpha_l=1.2, delta_hue=18.0, problematic_hue_range=(320.0, 40.0))
    engine = AdaptiveFilterEngine(hp)
    params = engine.compute_parameters(ConeSensitivity(l=0.45, m=0.85, s=0.8))
    adapted = engine.apply("#f08080", params)
    print(f"Custom model: #f08080 -> {adapted}")
    print(f"Hue rotation variant: #f08080 -> {apply_custom_adaptive_filter('#f08080', 12.0, 114.0, 258.0)}")
    return adapted


def example_torch_backend() -> None:
    """Recolour a random swatch grid on the GPU when torch is available."""

    if TorchAdaptiveFilter is None:
        print("torch not installed; skipping")
        return

    engine = AdaptiveFilterEngine()
    params = engine.compute_parameters(ConeSensitivity(l=0.5, m=0.9, s=0.9))
    grid = np.random.rand(64, 64, 3)
    adapted = TorchAdaptiveFilter().apply(grid, params)
    print(f"Torch output range: [{float(adapted.min()):0.3f}, {float(adapted.max()):0.3f}]")


if __name__ == "__main__":
    print("Running cvdadapt advanced examples...")
    example_staircase_scoring()
    example_custom_hyperparameters()
    example_torch_backend()
