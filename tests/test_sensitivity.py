"""
Tests for the cone sensitivity model.
"""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from cvdadapt import CalibrationConfig, ConeSensitivity, ConeType, initial_sensitivity, update_sensitivity
from cvdadapt.sensitivity import sensitivity_profile, weakest_cone


def test_initial_sensitivity_is_neutral_default() -> None:
    sensitivity = initial_sensitivity()
    assert sensitivity == ConeSensitivity(l=0.78, m=0.74, s=0.58)
    assert sensitivity.as_percent() == {"l": 78, "m": 74, "s": 58}


def test_success_steps_are_cone_specific() -> None:
    updated = update_sensitivity(initial_sensitivity(), success=True)
    np.testing.assert_allclose(updated.as_array(), [0.81, 0.768, 0.605])


def test_failure_steps_are_cone_specific() -> None:
    updated = update_sensitivity(initial_sensitivity(), success=False)
    np.testing.assert_allclose(updated.as_array(), [0.76, 0.722, 0.56])


def test_update_returns_new_value() -> None:
    current = initial_sensitivity()
    updated = update_sensitivity(current, success=True)
    assert updated is not current
    assert current == initial_sensitivity()


def test_repeated_success_saturates_at_upper_bound() -> None:
    sensitivity = initial_sensitivity()
    for _ in range(50):
        sensitivity = update_sensitivity(sensitivity, success=True)
    np.testing.assert_allclose(sensitivity.as_array(), [1.0, 1.0, 1.0])


def test_repeated_failure_saturates_at_lower_bounds() -> None:
    sensitivity = initial_sensitivity()
    for _ in range(80):
        sensitivity = update_sensitivity(sensitivity, success=False)
    np.testing.assert_allclose(sensitivity.as_array(), [0.35, 0.35, 0.3])


def test_targeted_update_moves_single_channel() -> None:
    current = initial_sensitivity()
    updated = update_sensitivity(current, success=False, cone=ConeType.S)
    assert updated.l == current.l
    assert updated.m == current.m
    assert np.isclose(updated.s, 0.56)


def test_update_clamps_untouched_channels() -> None:
    current = ConeSensitivity(l=0.9, m=0.1, s=1.7)
    updated = update_sensitivity(current, success=True, cone=ConeType.L)
    assert np.isclose(updated.l, 0.93)
    assert updated.m == 0.35
    assert updated.s == 1.0


def test_custom_calibration_config() -> None:
    config = CalibrationConfig(neutral=(0.5, 0.5, 0.5), success_step=(0.1, 0.1, 0.1))
    updated = update_sensitivity(initial_sensitivity(config), success=True, config=config)
    np.testing.assert_allclose(updated.as_array(), [0.6, 0.6, 0.6])


def test_sensitivity_is_immutable() -> None:
    sensitivity = initial_sensitivity()
    with pytest.raises(dataclasses.FrozenInstanceError):
        sensitivity.l = 0.1  # type: ignore[misc]


def test_weakest_cone_and_profile() -> None:
    assert weakest_cone(ConeSensitivity(0.4, 0.8, 0.7)) is ConeType.L
    assert weakest_cone(ConeSensitivity(0.8, 0.4, 0.7)) is ConeType.M
    assert weakest_cone(initial_sensitivity()) is ConeType.S
    assert sensitivity_profile(ConeSensitivity(0.4, 0.8, 0.7)).startswith("Protan-like")
    assert sensitivity_profile(ConeSensitivity(0.8, 0.4, 0.7)).startswith("Deutan-like")
    assert sensitivity_profile(initial_sensitivity()).startswith("Tritan-like")


def test_valid_calibration_config() -> None:
    CalibrationConfig().validate()


def test_invalid_neutral_outside_bounds() -> None:
    config = CalibrationConfig(neutral=(0.2, 0.74, 0.58))
    with pytest.raises(ValueError):
        config.validate()


def test_invalid_upper_bound() -> None:
    config = CalibrationConfig(upper_bound=1.5)
    with pytest.raises(ValueError):
        config.validate()


def test_initial_sensitivity_rejects_invalid_config() -> None:
    config = CalibrationConfig(lower_bound=(0.9, 0.35, 0.3))
    with pytest.raises(ValueError):
        initial_sensitivity(config)


def test_update_rejects_invalid_config() -> None:
    config = CalibrationConfig(upper_bound=1.5)
    with pytest.raises(ValueError):
        update_sensitivity(ConeSensitivity(0.8, 0.8, 0.8), success=True, config=config)
