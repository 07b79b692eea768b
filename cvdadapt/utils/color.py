"""
Color space transformations for display colours.

All array helpers operate on a trailing axis of three channels, so a single
colour is a ``(3,)`` array and a palette is ``(N, 3)``. Channel values are in
[0, 1] unless stated otherwise; hues are in degrees.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

import numpy as np

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


class ColorTransform:
    """sRGB / linear / LMS transformation utilities."""

    def __init__(self) -> None:
        """Initialize cone-space matrices."""

        # Linear sRGB to LMS
        self.rgb_to_lms_matrix = np.array(
            [
                [0.31399, 0.639513, 0.046497],
                [0.155372, 0.757894, 0.086701],
                [0.017752, 0.109442, 0.872569],
            ]
        )

        # LMS to linear sRGB (tabulated inverse of the above)
        self.lms_to_rgb_matrix = np.array(
            [
                [5.47221206, -4.6419601, 0.16963708],
                [-1.1252419, 2.29317094, -0.1678952],
                [0.02980165, -0.19318073, 1.16364789],
            ]
        )

    @staticmethod
    def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
        """
        Decode gamma-encoded sRGB to linear light.

        Parameters
        ----------
        rgb : np.ndarray
            Encoded sRGB in [0, 1], shape (..., 3)
        """

        rgb = np.asarray(rgb, dtype=float)
        return np.where(rgb <= 0.04045, rgb / 12.92, np.power((rgb + 0.055) / 1.055, 2.4))

    @staticmethod
    def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
        """Encode linear light to sRGB, clamped to [0, 1]."""

        linear = np.asarray(linear, dtype=float)
        # Negative light has no gamma encoding; clip before the power law.
        positive = np.maximum(linear, 0.0)
        encoded = np.where(
            linear <= 0.0031308,
            linear * 12.92,
            1.055 * np.power(positive, 1.0 / 2.4) - 0.055,
        )
        return clamp01(encoded)

    def rgb_to_lms(self, linear: np.ndarray) -> np.ndarray:
        """Convert linear sRGB to LMS (cone space)."""

        return np.dot(linear, self.rgb_to_lms_matrix.T)

    def lms_to_rgb(self, lms: np.ndarray) -> np.ndarray:
        """Convert LMS to linear sRGB."""

        return np.dot(lms, self.lms_to_rgb_matrix.T)


def clamp01(value):
    return np.clip(value, 0.0, 1.0)


def wrap_hue(hue):
    """Wrap hue angles into [0, 360)."""

    return np.mod(hue, 360.0)


def hue_in_range(hue, hue_range: Tuple[float, float]):
    """
    Test hue membership in a band that may wrap through 0 degrees.

    A band with ``start > end`` (e.g. ``(330, 30)``) covers ``h >= start``
    or ``h <= end``.
    """

    start, end = hue_range
    hue = np.asarray(hue, dtype=float)
    if start <= end:
        return (hue >= start) & (hue <= end)
    return (hue >= start) | (hue <= end)


def parse_hex(text: str) -> Optional[np.ndarray]:
    """
    Parse ``#rrggbb`` (or bare ``rrggbb``) into 0-255 integer channels.

    Returns ``None`` when the string is not a six digit hex colour.
    """

    if not isinstance(text, str):
        return None
    match = _HEX_PATTERN.match(text.strip())
    if match is None:
        return None
    digits = match.group(1)
    return np.array([int(digits[i : i + 2], 16) for i in (0, 2, 4)], dtype=int)


def to_hex(rgb: np.ndarray) -> str:
    """Format a [0, 1] RGB triple as a lowercase ``#rrggbb`` string."""

    channels = to_bytes(rgb)
    return "#" + "".join(f"{int(c):02x}" for c in channels)


def to_bytes(rgb: np.ndarray) -> np.ndarray:
    """Round [0, 1] channels half-up onto 0-255 integers."""

    return np.floor(clamp01(np.asarray(rgb, dtype=float)) * 255.0 + 0.5).astype(int)


def rgb_to_hsv(rgb: np.ndarray) -> np.ndarray:
    """
    Convert RGB to HSV.

    Returns hue in degrees [0, 360) and saturation/value in [0, 1], stacked
    on the last axis.
    """

    rgb = np.asarray(rgb, dtype=float)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    maxc = np.max(rgb, axis=-1)
    minc = np.min(rgb, axis=-1)
    delta = maxc - minc

    chromatic = delta > 0
    safe_delta = np.where(chromatic, delta, 1.0)

    hue = np.select(
        [maxc == r, maxc == g],
        [np.mod((g - b) / safe_delta, 6.0), (b - r) / safe_delta + 2.0],
        default=(r - g) / safe_delta + 4.0,
    )
    hue = np.where(chromatic, hue * 60.0, 0.0)

    saturation = np.where(maxc > 0, delta / np.where(maxc > 0, maxc, 1.0), 0.0)
    return np.stack([hue, saturation, maxc], axis=-1)


def _sector_to_rgb(hue, chroma, x):
    """Place chroma and the secondary component by 60-degree hue sector."""

    zero = np.zeros_like(chroma)
    sectors = [hue < 60, hue < 120, hue < 180, hue < 240, hue < 300]
    r = np.select(sectors, [chroma, x, zero, zero, x], default=chroma)
    g = np.select(sectors, [x, chroma, chroma, x, zero], default=zero)
    b = np.select(sectors, [zero, zero, x, chroma, chroma], default=x)
    return r, g, b


def hsv_to_rgb(hsv: np.ndarray) -> np.ndarray:
    """Convert HSV (hue in degrees) back to RGB in [0, 1]."""

    hsv = np.asarray(hsv, dtype=float)
    hue, saturation, value = hsv[..., 0], hsv[..., 1], hsv[..., 2]

    chroma = value * saturation
    x = chroma * (1.0 - np.abs(np.mod(hue / 60.0, 2.0) - 1.0))
    m = value - chroma

    r, g, b = _sector_to_rgb(hue, chroma, x)
    return np.stack([r + m, g + m, b + m], axis=-1)


def rgb_to_hsl(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB to HSL (hue in degrees, saturation/lightness in [0, 1])."""

    rgb = np.asarray(rgb, dtype=float)
    maxc = np.max(rgb, axis=-1)
    minc = np.min(rgb, axis=-1)
    delta = maxc - minc
    lightness = (maxc + minc) / 2.0

    hue = rgb_to_hsv(rgb)[..., 0]
    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    saturation = np.where(
        (delta > 0) & (denom > 0),
        delta / np.where(denom > 0, denom, 1.0),
        0.0,
    )
    return np.stack([hue, saturation, lightness], axis=-1)


def hsl_to_rgb(hsl: np.ndarray) -> np.ndarray:
    """Convert HSL (hue in degrees) back to RGB in [0, 1]."""

    hsl = np.asarray(hsl, dtype=float)
    hue, saturation, lightness = hsl[..., 0], hsl[..., 1], hsl[..., 2]

    chroma = (1.0 - np.abs(2.0 * lightness - 1.0)) * saturation
    x = chroma * (1.0 - np.abs(np.mod(hue / 60.0, 2.0) - 1.0))
    m = lightness - chroma / 2.0

    r, g, b = _sector_to_rgb(hue, chroma, x)
    return np.stack([r + m, g + m, b + m], axis=-1)


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Build a hex swatch from HSL given as degrees and percentages."""

    rgb = hsl_to_rgb(np.array([wrap_hue(hue), saturation / 100.0, lightness / 100.0]))
    return to_hex(rgb)
