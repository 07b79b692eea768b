"""
Tests for the preset comparison filters.
"""

from __future__ import annotations

import numpy as np
import pytest

from cvdadapt import CVDType, OSPresetFilter
from cvdadapt.presets import (
    apply_custom_adaptive_filter,
    apply_os_preset_filter,
    filter_display_name,
    recommended_os_preset,
)
from cvdadapt.utils.color import parse_hex


def test_grayscale_preset() -> None:
    assert apply_os_preset_filter("#ff0000", OSPresetFilter.GRAYSCALE) == "#4c4c4c"


def test_presets_preserve_white() -> None:
    for preset in OSPresetFilter:
        assert apply_os_preset_filter("#ffffff", preset) == "#ffffff"


def test_protanopia_preset_on_red() -> None:
    assert apply_os_preset_filter("#ff0000", "protanopia") == "#918e00"


def test_unknown_preset_raises() -> None:
    with pytest.raises(ValueError):
        apply_os_preset_filter("#ff0000", "achromatopsia")


def test_presets_pass_through_malformed() -> None:
    assert apply_os_preset_filter("oops", OSPresetFilter.TRITANOPIA) == "oops"
    assert apply_custom_adaptive_filter("oops", 0, 120, 240) == "oops"


def test_custom_filter_rotates_hue() -> None:
    assert apply_custom_adaptive_filter("#ff0000", 30.0, 150.0, 270.0) == "#ff8000"


def test_custom_filter_zero_offset_is_identity() -> None:
    for color in ("#3366cc", "#f28f8f", "#84a59d"):
        result = apply_custom_adaptive_filter(color, 0.0, 120.0, 240.0)
        assert np.abs(parse_hex(result) - parse_hex(color)).max() <= 1


def test_custom_filter_skips_grays() -> None:
    assert apply_custom_adaptive_filter("#808080", 40.0, 160.0, 280.0) == "#808080"


def test_recommended_presets() -> None:
    assert recommended_os_preset(CVDType.PROTAN) is OSPresetFilter.PROTANOPIA
    assert recommended_os_preset("Deutan") is OSPresetFilter.DEUTERANOPIA
    assert recommended_os_preset("tritan") is OSPresetFilter.TRITANOPIA
    assert recommended_os_preset(CVDType.NORMAL) is OSPresetFilter.GRAYSCALE
    assert recommended_os_preset("unknown") is OSPresetFilter.GRAYSCALE


def test_filter_display_names() -> None:
    assert filter_display_name("custom") == "Custom Adaptive"
    assert filter_display_name(OSPresetFilter.TRITANOPIA) == "Tritanopia Preset"
    assert filter_display_name("other") == "other"
