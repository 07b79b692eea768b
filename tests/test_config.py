"""
Tests for configuration validation.
"""

from __future__ import annotations

import pytest

from cvdadapt import DifficultyNormalization, FilterHyperparameters


def test_valid_hyperparameters() -> None:
    FilterHyperparameters().validate()
    FilterHyperparameters(problematic_hue_range=(90.0, 150.0), center_hue=120.0).validate()


def test_invalid_beta_value() -> None:
    with pytest.raises(ValueError):
        FilterHyperparameters(beta_value=1.5).validate()


def test_invalid_hue_range() -> None:
    with pytest.raises(ValueError):
        FilterHyperparameters(problematic_hue_range=(330.0, 400.0)).validate()


def test_invalid_delta_hue() -> None:
    with pytest.raises(ValueError):
        FilterHyperparameters(delta_hue=-5.0).validate()


def test_invalid_normalization_scale() -> None:
    DifficultyNormalization().validate()
    with pytest.raises(ValueError):
        DifficultyNormalization(swipe_scale=-1.0).validate()
