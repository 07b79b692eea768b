"""
Basic usage examples for cvdadapt.
"""

from __future__ import annotations

from typing import List

from cvdadapt import (
    AdaptiveFilterEngine,
    Condition,
    ConditionMetrics,
    ConeType,
    apply_filter,
    compute_parameters,
    initial_sensitivity,
    summarize_difficulty,
    update_sensitivity,
)
from cvdadapt.core.palette import build_color_wheel
from cvdadapt.difficulty import OddMetric, SearchMetric, SliderMetric


def example_calibration() -> None:
    """Walk a sensitivity estimate through a short calibration run."""

    sensitivity = initial_sensitivity()
    outcomes = [(ConeType.L, False), (ConeType.L, False), (ConeType.M, True), (ConeType.S, True)]
    for cone, success in outcomes:
        sensitivity = update_sensitivity(sensitivity, success, cone=cone)
    print(f"Calibrated sensitivity: {sensitivity.as_percent()}")


def example_single_color() -> str:
    """Adapt one swatch with default task difficulty."""

    params = compute_parameters(initial_sensitivity())
    adapted = apply_filter("#f28f8f", params)
    print(f"#f28f8f -> {adapted}")
    return adapted


def example_with_task_metrics() -> List[str]:
    """Fold mini-task results into the filter and recolour a palette."""

    metrics = {
        Condition.IOS: ConditionMetrics(
            odd=OddMetric(reaction_time=2.4, accuracy=0.0, delta_level=2),
            slider=SliderMetric(time=11.0, swipes=14, error=0.3),
            search=SearchMetric(time=12.0, errors=2),
        ),
    }
    difficulty = summarize_difficulty(metrics)

    engine = AdaptiveFilterEngine()
    params = engine.compute_parameters(initial_sensitivity(), difficulty)
    palette = engine.apply_palette(["#f28f8f", "#b5e48c", "#99d1f2", "#fee440"], params)
    print(f"Adapted palette: {palette}")

    for swatch in build_color_wheel(params):
        print(f"  {swatch['original']} -> {swatch['adapted']}")
    return palette


if __name__ == "__main__":
    print("Running cvdadapt basic examples...")
    example_calibration()
    example_single_color()
    example_with_task_metrics()
