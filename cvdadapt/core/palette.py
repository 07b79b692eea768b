"""
Palette helpers used by the study screens.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from cvdadapt.core.config import Condition
from cvdadapt.core.engine import AdaptiveFilterEngine
from cvdadapt.core.parameters import AdaptiveFilterParameters
from cvdadapt.utils.color import hsl_to_hex


def build_color_wheel(
    parameters: AdaptiveFilterParameters,
    step: int = 45,
    engine: Optional[AdaptiveFilterEngine] = None,
) -> List[Dict[str, str]]:
    """
    Sample the hue circle and pair each swatch with its adapted colour.

    Swatches are HSL(h, 60%, 60%) every ``step`` degrees starting at 0.
    """

    if not (0 < step <= 360):
        raise ValueError(f"Hue step {step} out of range (0, 360]")

    engine = engine or AdaptiveFilterEngine()
    originals = [hsl_to_hex(hue, 60, 60) for hue in range(0, 360, step)]
    adapted = engine.apply_palette(originals, parameters)
    return [{"original": o, "adapted": a} for o, a in zip(originals, adapted)]


def apply_for_condition(
    color: str,
    condition: Union[Condition, str],
    parameters: AdaptiveFilterParameters,
    engine: Optional[AdaptiveFilterEngine] = None,
) -> str:
    """Adapt ``color`` under the adaptive condition, leave it as-is otherwise."""

    if Condition(condition) is Condition.AUI:
        engine = engine or AdaptiveFilterEngine()
        return engine.apply(color, parameters)
    return color
