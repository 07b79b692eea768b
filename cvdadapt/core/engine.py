"""
Adaptive colour filter engine.
"""

from __future__ import annotations

import functools
import logging
from typing import List, Optional, Sequence

import numpy as np

from cvdadapt.core.config import FilterHyperparameters
from cvdadapt.core.parameters import AdaptiveFilterParameters, ConeGains
from cvdadapt.difficulty.summary import DEFAULT_DIFFICULTY, DifficultySummary
from cvdadapt.sensitivity.model import ConeSensitivity
from cvdadapt.utils.color import (
    ColorTransform,
    clamp01,
    hsv_to_rgb,
    hue_in_range,
    parse_hex,
    rgb_to_hsv,
    to_hex,
    wrap_hue,
)

logger = logging.getLogger(__name__)


def _clamp_input(name: str, value: float) -> float:
    clamped = float(np.clip(value, 0.0, 1.0))
    if clamped != value:
        logger.warning("%s=%0.3f outside [0, 1], clamping to %0.3f", name, value, clamped)
    return clamped


def _check_difficulty(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        logger.warning("difficulty.%s=%0.3f outside [0, 1], its term will be clamped", name, value)
    return value


class AdaptiveFilterEngine:
    """
    Personalized colour remapping for colour vision deficiency.

    Pipeline stages (per colour):
        1. Hex decoding
        2. sRGB -> linear light
        3. Linear RGB -> LMS
        4. Per-cone gain compensation
        5. LMS -> linear RGB
        6. Linear -> sRGB (clamped)
        7. RGB -> HSV
        8. Saturation boost
        9. Value lift
        10. Hue separation inside the problematic band
        11. HSV -> RGB -> hex

    The engine holds only immutable configuration; every call is pure.
    """

    def __init__(self, hyperparameters: Optional[FilterHyperparameters] = None) -> None:
        self.hyperparameters = hyperparameters or FilterHyperparameters()
        self.hyperparameters.validate()
        self.color_transform = ColorTransform()

        logger.info("Initializing adaptive filter engine")
        logger.info(
            "  alpha: L=%0.3f M=%0.3f S=%0.3f",
            self.hyperparameters.alpha_l,
            self.hyperparameters.alpha_m,
            self.hyperparameters.alpha_s,
        )
        logger.info(
            "  beta_s=%0.3f beta_v=%0.3f delta_h=%0.1f",
            self.hyperparameters.beta_saturation,
            self.hyperparameters.beta_value,
            self.hyperparameters.delta_hue,
        )

    # ------------------------------------------------------------------
    # Parameter derivation
    # ------------------------------------------------------------------

    def compute_parameters(
        self,
        sensitivity: ConeSensitivity,
        difficulty: DifficultySummary = DEFAULT_DIFFICULTY,
    ) -> AdaptiveFilterParameters:
        """
        Derive the filter parameter set from sensitivities and difficulty.
        """

        hp = self.hyperparameters

        gains = ConeGains(
            l=1.0 + hp.alpha_l * (1.0 - _clamp_input("sensitivity.l", sensitivity.l)),
            m=1.0 + hp.alpha_m * (1.0 - _clamp_input("sensitivity.m", sensitivity.m)),
            s=1.0 + hp.alpha_s * (1.0 - _clamp_input("sensitivity.s", sensitivity.s)),
        )

        # Raw swipe ratios may exceed 1; only the combined match term is clamped.
        accuracy = _check_difficulty("accuracy", difficulty.accuracy)
        slider_error = _check_difficulty("slider_error", difficulty.slider_error)
        search = _check_difficulty("search_difficulty", difficulty.search_difficulty)

        difficulty_accuracy = float(clamp01(1.0 - accuracy))
        difficulty_match = float(clamp01(slider_error + hp.lambda_swipes * difficulty.slider_swipes))
        difficulty_search = float(clamp01(search + hp.mu_search * search * 0.5))

        parameters = AdaptiveFilterParameters(
            gains=gains,
            saturation_multiplier=1.0 + hp.beta_saturation * difficulty_match,
            value_lift=hp.beta_value * difficulty_search,
            hue_shift_deg=hp.delta_hue * difficulty_accuracy,
            problematic_hue_range=tuple(hp.problematic_hue_range),
            center_hue=hp.center_hue,
        )

        logger.debug(
            "Filter parameters: gains=(%0.3f, %0.3f, %0.3f) sat=%0.3f lift=%0.3f hue=%0.2f",
            gains.l,
            gains.m,
            gains.s,
            parameters.saturation_multiplier,
            parameters.value_lift,
            parameters.hue_shift_deg,
        )
        return parameters

    # ------------------------------------------------------------------
    # Colour application
    # ------------------------------------------------------------------

    def apply(self, color_hex: str, parameters: AdaptiveFilterParameters) -> str:
        """
        Apply the filter to a single ``#rrggbb`` colour.

        Malformed input is returned unchanged.
        """

        rgb = parse_hex(color_hex)
        if rgb is None:
            logger.debug("Passing through unparseable colour %r", color_hex)
            return color_hex

        adapted = self.apply_rgb(rgb / 255.0, parameters)
        return to_hex(adapted)

    def apply_palette(
        self,
        colors: Sequence[str],
        parameters: AdaptiveFilterParameters,
    ) -> List[str]:
        """Apply the filter to a list of hex colours in one vectorised pass."""

        parsed = [parse_hex(color) for color in colors]
        valid = [i for i, rgb in enumerate(parsed) if rgb is not None]

        result = list(colors)
        if not valid:
            return result

        batch = np.stack([parsed[i] for i in valid]) / 255.0
        adapted = self.apply_rgb(batch, parameters)
        for row, index in enumerate(valid):
            result[index] = to_hex(adapted[row])
        return result

    def apply_rgb(self, rgb: np.ndarray, parameters: AdaptiveFilterParameters) -> np.ndarray:
        """
        Run the pipeline on encoded sRGB values.

        Parameters
        ----------
        rgb : np.ndarray
            sRGB in [0, 1], shape (..., 3)

        Returns
        -------
        np.ndarray
            Adapted sRGB in [0, 1], same shape.
        """

        rgb = np.asarray(rgb, dtype=float)
        if rgb.shape[-1] != 3:
            raise ValueError(f"Expected trailing RGB axis of size 3, got shape {rgb.shape}")

        compensated = self._stage_cone_compensation(rgb, parameters)
        hsv = self._stage_hsv_adjust(compensated, parameters)
        hsv = self._stage_hue_separation(hsv, parameters)
        return clamp01(hsv_to_rgb(hsv))

    # ------------------------------------------------------------------
    # Individual pipeline stages
    # ------------------------------------------------------------------

    def _stage_cone_compensation(
        self,
        rgb: np.ndarray,
        parameters: AdaptiveFilterParameters,
    ) -> np.ndarray:
        logger.debug("Stage 2-6: LMS gain compensation")

        linear = self.color_transform.srgb_to_linear(rgb)
        lms = self.color_transform.rgb_to_lms(linear)
        lms = lms * parameters.gains.as_array()
        compensated = self.color_transform.lms_to_rgb(lms)
        return self.color_transform.linear_to_srgb(compensated)

    def _stage_hsv_adjust(
        self,
        rgb: np.ndarray,
        parameters: AdaptiveFilterParameters,
    ) -> np.ndarray:
        logger.debug("Stage 7-9: saturation boost and value lift")

        hsv = rgb_to_hsv(rgb)
        saturation = clamp01(hsv[..., 1] * parameters.saturation_multiplier)
        value = hsv[..., 2]
        # Headroom-scaled lift keeps v <= 1.
        value = clamp01(value + parameters.value_lift * (1.0 - value))
        return np.stack([hsv[..., 0], saturation, value], axis=-1)

    def _stage_hue_separation(
        self,
        hsv: np.ndarray,
        parameters: AdaptiveFilterParameters,
    ) -> np.ndarray:
        logger.debug("Stage 10: hue separation")

        hue = hsv[..., 0]
        in_band = hue_in_range(hue, parameters.problematic_hue_range)
        center = parameters.center_hue
        direction = np.where((hue >= center) & (hue <= center + 180.0), 1.0, -1.0)
        shifted = wrap_hue(hue + direction * parameters.hue_shift_deg)

        hue = np.where(in_band, shifted, hue)
        return np.stack([hue, hsv[..., 1], hsv[..., 2]], axis=-1)


@functools.lru_cache(maxsize=1)
def _default_engine() -> AdaptiveFilterEngine:
    """Shared engine for the module-level wrappers; it holds no mutable state."""

    return AdaptiveFilterEngine()


def compute_parameters(
    sensitivity: ConeSensitivity,
    difficulty: DifficultySummary = DEFAULT_DIFFICULTY,
    hyperparameters: Optional[FilterHyperparameters] = None,
) -> AdaptiveFilterParameters:
    """
    Convenience wrapper for one-off parameter derivation.
    """

    engine = _default_engine() if hyperparameters is None else AdaptiveFilterEngine(hyperparameters)
    return engine.compute_parameters(sensitivity, difficulty)


def apply_filter(color_hex: str, parameters: AdaptiveFilterParameters) -> str:
    """
    Convenience wrapper applying parameters to a single hex colour.
    """

    return _default_engine().apply(color_hex, parameters)
