"""
Tests for the adaptive filter engine.
"""

from __future__ import annotations

import logging
import re

import numpy as np
import pytest

from cvdadapt import (
    DEFAULT_DIFFICULTY,
    AdaptiveFilterEngine,
    AdaptiveFilterParameters,
    ConeGains,
    ConeSensitivity,
    FilterHyperparameters,
    apply_filter,
    compute_parameters,
)
from cvdadapt.utils.color import hsv_to_rgb, parse_hex, rgb_to_hsv, to_hex

HEX_PATTERN = re.compile(r"^#[0-9a-f]{6}$")


def _channels(color: str) -> np.ndarray:
    rgb = parse_hex(color)
    assert rgb is not None
    return rgb


def test_gains_for_protan_profile() -> None:
    params = compute_parameters(ConeSensitivity(l=0.5, m=0.9, s=0.9), DEFAULT_DIFFICULTY)
    assert np.isclose(params.gains.l, 1.425)
    assert np.isclose(params.gains.m, 1.08)
    assert np.isclose(params.gains.s, 1.075)


def test_default_difficulty_parameters() -> None:
    params = compute_parameters(ConeSensitivity(l=0.8, m=0.8, s=0.8))
    assert np.isclose(params.saturation_multiplier, 1.0 + 0.45 * (0.35 + 0.35 * 0.4))
    assert np.isclose(params.value_lift, 0.35 * (0.5 + 0.25 * 0.5 * 0.5))
    assert np.isclose(params.hue_shift_deg, 12.0 * 0.35)
    assert params.problematic_hue_range == (330.0, 30.0)
    assert params.center_hue == 0.0


def test_gain_strictly_decreasing_in_sensitivity() -> None:
    engine = AdaptiveFilterEngine()
    levels = [1.0, 0.8, 0.6, 0.4, 0.2, 0.0]
    for cone in ("l", "m", "s"):
        gains = []
        for level in levels:
            values = {"l": 0.9, "m": 0.9, "s": 0.9, cone: level}
            params = engine.compute_parameters(ConeSensitivity(**values))
            gains.append(getattr(params.gains, cone))
        assert all(b > a for a, b in zip(gains, gains[1:]))


def test_out_of_range_sensitivity_is_clamped() -> None:
    params = compute_parameters(ConeSensitivity(l=1.4, m=-0.2, s=0.5))
    assert np.isclose(params.gains.l, 1.0)
    assert np.isclose(params.gains.m, 1.8)
    assert np.isclose(params.gains.s, 1.375)


def test_difficulty_terms_are_clamped() -> None:
    from cvdadapt.difficulty.summary import DifficultySummary

    hard = DifficultySummary(accuracy=-1.0, slider_error=2.0, slider_swipes=3.0, search_difficulty=4.0)
    params = compute_parameters(ConeSensitivity(l=1.0, m=1.0, s=1.0), hard)
    assert np.isclose(params.saturation_multiplier, 1.45)
    assert np.isclose(params.value_lift, 0.35)
    assert np.isclose(params.hue_shift_deg, 12.0)


def test_custom_hyperparameters_are_used() -> None:
    hp = FilterHyperparameters(alpha_l=0.5, delta_hue=0.0, beta_value=0.0)
    params = compute_parameters(ConeSensitivity(l=0.0, m=1.0, s=1.0), DEFAULT_DIFFICULTY, hp)
    assert np.isclose(params.gains.l, 1.5)
    assert params.hue_shift_deg == 0.0
    assert params.value_lift == 0.0


def test_neutral_parameters_reproduce_input() -> None:
    engine = AdaptiveFilterEngine()
    neutral = AdaptiveFilterParameters.neutral()
    rng = np.random.default_rng(0)
    colors = [to_hex(rgb) for rgb in rng.random((48, 3))] + ["#000000", "#ffffff", "#3366cc"]

    for color in colors:
        adapted = engine.apply(color, neutral)
        assert np.abs(_channels(adapted) - _channels(color)).max() <= 1


def test_uniform_gains_keep_grays_achromatic() -> None:
    engine = AdaptiveFilterEngine()
    params = AdaptiveFilterParameters(
        gains=ConeGains(1.2, 1.2, 1.2),
        saturation_multiplier=1.4,
        value_lift=0.2,
        hue_shift_deg=12.0,
    )
    for level in (0, 32, 128, 200, 255):
        gray = to_hex(np.full(3, level / 255.0))
        rgb = _channels(engine.apply(gray, params))
        assert rgb.max() - rgb.min() <= 1

        hsv = rgb_to_hsv(engine.apply_rgb(np.full(3, level / 255.0), params))
        assert hsv[1] < 1e-3


def test_value_lift_brightens_grays() -> None:
    engine = AdaptiveFilterEngine()
    params = AdaptiveFilterParameters(value_lift=0.5)
    rgb = _channels(engine.apply("#404040", params))
    assert rgb.min() > 0x40
    assert engine.apply("#ffffff", params) == "#ffffff"


def test_output_always_valid_hex() -> None:
    engine = AdaptiveFilterEngine()
    rng = np.random.default_rng(7)
    colors = [to_hex(rgb) for rgb in rng.random((200, 3))]
    profiles = [
        ConeSensitivity(0.3, 0.9, 0.9),
        ConeSensitivity(0.9, 0.35, 0.8),
        ConeSensitivity(0.9, 0.9, 0.3),
        ConeSensitivity(0.0, 0.0, 0.0),
    ]
    for profile in profiles:
        params = engine.compute_parameters(profile)
        for color in colors:
            assert HEX_PATTERN.match(engine.apply(color, params))


def test_l_compensation_changes_pure_red() -> None:
    engine = AdaptiveFilterEngine()
    params = engine.compute_parameters(ConeSensitivity(l=0.5, m=0.9, s=0.9), DEFAULT_DIFFICULTY)
    identity = AdaptiveFilterParameters(
        gains=ConeGains(),
        saturation_multiplier=params.saturation_multiplier,
        value_lift=params.value_lift,
        hue_shift_deg=params.hue_shift_deg,
    )

    compensated = _channels(engine.apply("#ff0000", params))
    reference = _channels(engine.apply("#ff0000", identity))

    assert engine.apply("#ff0000", params) != "#ff0000"
    assert np.abs(compensated - reference).max() > 5


def test_hue_shift_applies_only_inside_band() -> None:
    engine = AdaptiveFilterEngine()
    shifted = AdaptiveFilterParameters(hue_shift_deg=12.0)
    unshifted = AdaptiveFilterParameters(hue_shift_deg=0.0)

    magenta_red = to_hex(hsv_to_rgb(np.array([350.0, 1.0, 1.0])))
    hue_before = rgb_to_hsv(_channels(engine.apply(magenta_red, unshifted)) / 255.0)[0]
    hue_after = rgb_to_hsv(_channels(engine.apply(magenta_red, shifted)) / 255.0)[0]
    assert 345.0 < hue_before < 355.0
    assert 333.0 < hue_after < 343.0

    cyan = "#00ffff"
    assert np.abs(_channels(engine.apply(cyan, shifted)) - _channels(cyan)).max() <= 1


def test_hue_shift_direction_follows_center() -> None:
    engine = AdaptiveFilterEngine()
    params = AdaptiveFilterParameters(hue_shift_deg=12.0)

    orange_red = to_hex(hsv_to_rgb(np.array([10.0, 1.0, 1.0])))
    hue_after = rgb_to_hsv(_channels(engine.apply(orange_red, params)) / 255.0)[0]
    assert 19.0 < hue_after < 25.0


def test_malformed_input_passes_through() -> None:
    engine = AdaptiveFilterEngine()
    params = engine.compute_parameters(ConeSensitivity(0.5, 0.5, 0.5))
    for text in ("not-a-color", "#12345", "#12345g", "", "rgb(255, 0, 0)"):
        assert engine.apply(text, params) == text
        assert apply_filter(text, params) == text


def test_uppercase_input_returns_lowercase_hex() -> None:
    result = apply_filter("#3366CC", AdaptiveFilterParameters.neutral())
    assert HEX_PATTERN.match(result)


def test_apply_palette_matches_single_apply() -> None:
    engine = AdaptiveFilterEngine()
    params = engine.compute_parameters(ConeSensitivity(0.55, 0.8, 0.7))
    colors = ["#f28f8f", "bogus", "#99d1f2", "#fee440"]

    adapted = engine.apply_palette(colors, params)

    assert adapted[1] == "bogus"
    for color, result in zip(colors, adapted):
        assert result == engine.apply(color, params)


def test_apply_palette_without_valid_colors() -> None:
    engine = AdaptiveFilterEngine()
    assert engine.apply_palette(["x", "y"], AdaptiveFilterParameters.neutral()) == ["x", "y"]


def test_apply_rgb_preserves_shape() -> None:
    engine = AdaptiveFilterEngine()
    params = engine.compute_parameters(ConeSensitivity(0.5, 0.9, 0.9))
    img = np.random.rand(4, 5, 3)
    result = engine.apply_rgb(img, params)
    assert result.shape == img.shape
    assert np.isfinite(result).all()
    assert result.min() >= 0.0 and result.max() <= 1.0


def test_apply_rgb_rejects_bad_shape() -> None:
    engine = AdaptiveFilterEngine()
    with pytest.raises(ValueError):
        engine.apply_rgb(np.zeros((4, 2)), AdaptiveFilterParameters.neutral())


def test_parameters_are_deterministic() -> None:
    sensitivity = ConeSensitivity(0.62, 0.71, 0.44)
    assert compute_parameters(sensitivity) == compute_parameters(sensitivity)


def test_engine_validates_hyperparameters() -> None:
    with pytest.raises(ValueError):
        AdaptiveFilterEngine(FilterHyperparameters(alpha_m=-0.1))


def test_module_wrappers_reuse_one_engine(caplog) -> None:
    params = compute_parameters(ConeSensitivity(l=0.5, m=0.9, s=0.9))
    apply_filter("#336699", params)

    caplog.set_level(logging.INFO, logger="cvdadapt.core.engine")
    caplog.clear()
    for color in ("#ff0000", "#00ff00", "#0000ff"):
        apply_filter(color, params)
    compute_parameters(ConeSensitivity(l=0.5, m=0.9, s=0.9))

    assert not [r for r in caplog.records if r.levelno == logging.INFO]


def test_out_of_range_difficulty_logs_warning(caplog) -> None:
    from cvdadapt.difficulty.summary import DifficultySummary

    caplog.set_level(logging.WARNING, logger="cvdadapt.core.engine")
    hard = DifficultySummary(accuracy=-1.0, slider_error=2.0, slider_swipes=0.5, search_difficulty=0.5)
    compute_parameters(ConeSensitivity(l=1.0, m=1.0, s=1.0), hard)

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("difficulty.accuracy" in message for message in messages)
    assert any("difficulty.slider_error" in message for message in messages)
    assert not any("search_difficulty" in message for message in messages)


def test_in_range_difficulty_does_not_warn(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="cvdadapt.core.engine")
    compute_parameters(ConeSensitivity(l=0.8, m=0.8, s=0.8), DEFAULT_DIFFICULTY)
    assert not caplog.records
