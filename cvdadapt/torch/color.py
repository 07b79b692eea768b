"""
Color space transforms implemented with torch tensors.
"""

from __future__ import annotations

import torch

from cvdadapt.utils.color import ColorTransform


class TorchColorTransform:
    """Torch equivalent of the ColorTransform utilities (row layout, N x 3)."""

    def __init__(self, device: torch.device = torch.device("cpu"), dtype: torch.dtype = torch.float32) -> None:
        self.device = device
        self.dtype = dtype

        reference = ColorTransform()
        self.rgb_to_lms_matrix = torch.as_tensor(reference.rgb_to_lms_matrix, dtype=dtype, device=device)
        self.lms_to_rgb_matrix = torch.as_tensor(reference.lms_to_rgb_matrix, dtype=dtype, device=device)

    def srgb_to_linear(self, rgb: torch.Tensor) -> torch.Tensor:
        return torch.where(rgb <= 0.04045, rgb / 12.92, torch.pow((rgb + 0.055) / 1.055, 2.4))

    def linear_to_srgb(self, linear: torch.Tensor) -> torch.Tensor:
        positive = torch.clamp(linear, min=0.0)
        encoded = torch.where(
            linear <= 0.0031308,
            linear * 12.92,
            1.055 * torch.pow(positive, 1.0 / 2.4) - 0.055,
        )
        return torch.clamp(encoded, 0.0, 1.0)

    def rgb_to_lms(self, linear: torch.Tensor) -> torch.Tensor:
        return linear @ self.rgb_to_lms_matrix.T

    def lms_to_rgb(self, lms: torch.Tensor) -> torch.Tensor:
        return lms @ self.lms_to_rgb_matrix.T

    @staticmethod
    def rgb_to_hsv(rgb: torch.Tensor) -> torch.Tensor:
        """
        RGB to HSV with hue in degrees, expects (N, 3).
        """

        r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
        maxc, _ = rgb.max(dim=1)
        minc, _ = rgb.min(dim=1)
        delta = maxc - minc

        chromatic = delta > 0
        safe_delta = torch.where(chromatic, delta, torch.ones_like(delta))

        hue_r = torch.remainder((g - b) / safe_delta, 6.0)
        hue_g = (b - r) / safe_delta + 2.0
        hue_b = (r - g) / safe_delta + 4.0
        hue = torch.where(maxc == r, hue_r, torch.where(maxc == g, hue_g, hue_b))
        hue = torch.where(chromatic, hue * 60.0, torch.zeros_like(hue))

        safe_max = torch.where(maxc > 0, maxc, torch.ones_like(maxc))
        saturation = torch.where(maxc > 0, delta / safe_max, torch.zeros_like(maxc))
        return torch.stack([hue, saturation, maxc], dim=1)

    @staticmethod
    def hsv_to_rgb(hsv: torch.Tensor) -> torch.Tensor:
        hue, saturation, value = hsv[:, 0], hsv[:, 1], hsv[:, 2]

        chroma = value * saturation
        x = chroma * (1.0 - torch.abs(torch.remainder(hue / 60.0, 2.0) - 1.0))
        m = value - chroma
        zero = torch.zeros_like(chroma)

        # Sector order matches the numpy implementation; hue >= 300 falls through.
        r, g, b = chroma, zero, x
        for bound, (sr, sg, sb) in reversed(
            [
                (60.0, (chroma, x, zero)),
                (120.0, (x, chroma, zero)),
                (180.0, (zero, chroma, x)),
                (240.0, (zero, x, chroma)),
                (300.0, (x, zero, chroma)),
            ]
        ):
            mask = hue < bound
            r = torch.where(mask, sr, r)
            g = torch.where(mask, sg, g)
            b = torch.where(mask, sb, b)

        return torch.stack([r + m, g + m, b + m], dim=1)
