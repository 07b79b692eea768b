"""
Fixed preset filters the adaptive filter is compared against.

Includes the OS-style colour blindness matrices and the simple global
hue-rotation "custom" filter. Neither depends on cone sensitivities.
"""

from __future__ import annotations

import logging
from typing import Dict, Union

import numpy as np

from cvdadapt.core.config import CVDType, OSPresetFilter
from cvdadapt.utils.color import hsl_to_rgb, parse_hex, rgb_to_hsl, to_hex

logger = logging.getLogger(__name__)

# Row-major RGB mixing matrices applied to 0-255 channels
PRESET_MATRICES: Dict[OSPresetFilter, np.ndarray] = {
    OSPresetFilter.PROTANOPIA: np.array(
        [
            [0.567, 0.433, 0.0],
            [0.558, 0.442, 0.0],
            [0.0, 0.242, 0.758],
        ]
    ),
    OSPresetFilter.DEUTERANOPIA: np.array(
        [
            [0.625, 0.375, 0.0],
            [0.7, 0.3, 0.0],
            [0.0, 0.3, 0.7],
        ]
    ),
    OSPresetFilter.TRITANOPIA: np.array(
        [
            [0.95, 0.05, 0.0],
            [0.0, 0.433, 0.567],
            [0.0, 0.475, 0.525],
        ]
    ),
    # Rec.601 luma replicated on every channel
    OSPresetFilter.GRAYSCALE: np.array(
        [
            [0.299, 0.587, 0.114],
            [0.299, 0.587, 0.114],
            [0.299, 0.587, 0.114],
        ]
    ),
}

_DISPLAY_NAMES: Dict[str, str] = {
    "custom": "Custom Adaptive",
    OSPresetFilter.PROTANOPIA.value: "Protanopia Preset",
    OSPresetFilter.DEUTERANOPIA.value: "Deuteranopia Preset",
    OSPresetFilter.TRITANOPIA.value: "Tritanopia Preset",
    OSPresetFilter.GRAYSCALE.value: "Grayscale Preset",
}

_RECOMMENDED: Dict[CVDType, OSPresetFilter] = {
    CVDType.PROTAN: OSPresetFilter.PROTANOPIA,
    CVDType.DEUTAN: OSPresetFilter.DEUTERANOPIA,
    CVDType.TRITAN: OSPresetFilter.TRITANOPIA,
}


def _as_preset(preset: Union[OSPresetFilter, str]) -> OSPresetFilter:
    try:
        return OSPresetFilter(preset)
    except ValueError as exc:
        raise ValueError(f"Unknown preset filter: {preset}") from exc


def apply_os_preset_filter(color_hex: str, preset: Union[OSPresetFilter, str]) -> str:
    """Mix RGB channels with the preset's fixed matrix."""

    matrix = PRESET_MATRICES[_as_preset(preset)]
    rgb = parse_hex(color_hex)
    if rgb is None:
        return color_hex

    mixed = np.floor(np.dot(matrix, rgb) + 0.5)
    return to_hex(mixed / 255.0)


def apply_custom_adaptive_filter(
    color_hex: str,
    red_hue: float,
    green_hue: float,
    blue_hue: float,
) -> str:
    """
    Rotate every hue by the participant's mean primary offset.

    The offset is the average distance of the chosen primaries from
    0/120/240 degrees, applied in HSL. Near-grays pass through.
    """

    rgb = parse_hex(color_hex)
    if rgb is None:
        return color_hex

    hsl = rgb_to_hsl(rgb / 255.0)
    if hsl[1] < 0.01:
        return color_hex

    offset = ((red_hue - 0.0) + (green_hue - 120.0) + (blue_hue - 240.0)) / 3.0
    hsl[0] = np.mod(hsl[0] + offset + 360.0, 360.0)
    logger.debug("Custom filter hue offset %0.2f deg", offset)
    return to_hex(hsl_to_rgb(hsl))


def recommended_os_preset(cvd_type: Union[CVDType, str]) -> OSPresetFilter:
    """Preset matching a detected deficiency; grayscale when none applies."""

    try:
        cvd_type = CVDType(str(getattr(cvd_type, "value", cvd_type)).lower())
    except ValueError:
        return OSPresetFilter.GRAYSCALE
    return _RECOMMENDED.get(cvd_type, OSPresetFilter.GRAYSCALE)


def filter_display_name(name: Union[OSPresetFilter, str]) -> str:
    key = getattr(name, "value", name)
    return _DISPLAY_NAMES.get(key, key)
