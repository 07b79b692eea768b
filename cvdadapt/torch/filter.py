"""
Batched adaptive filter backed by PyTorch.
"""

from __future__ import annotations

import logging
from typing import Optional

import torch

from cvdadapt.core.parameters import AdaptiveFilterParameters
from cvdadapt.torch.color import TorchColorTransform
from cvdadapt.torch.common import ensure_tensor, from_rows, to_rows

logger = logging.getLogger(__name__)


class TorchAdaptiveFilter:
    """
    Tensor implementation of :meth:`AdaptiveFilterEngine.apply_rgb`.

    Useful for recolouring large swatch grids or full images on the GPU.
    """

    def __init__(
        self,
        device: Optional[torch.device] = None,
        dtype: torch.dtype = torch.float32,
    ) -> None:
        if device is None:
            device = torch.device("cuda" if torch.cuda.is_available() else "cpu")

        self.device = device
        self.dtype = dtype
        self.color = TorchColorTransform(device=device, dtype=dtype)

        logger.info("Initializing TorchAdaptiveFilter (%s)", self.device)

    def apply(self, rgb, parameters: AdaptiveFilterParameters) -> torch.Tensor:
        """
        Adapt encoded sRGB values in [0, 1] with a trailing axis of 3.
        """

        colors = ensure_tensor(rgb, device=self.device, dtype=self.dtype)
        rows, shape = to_rows(colors)

        gains = torch.tensor(
            [parameters.gains.l, parameters.gains.m, parameters.gains.s],
            dtype=self.dtype,
            device=self.device,
        )

        linear = self.color.srgb_to_linear(rows)
        lms = self.color.rgb_to_lms(linear) * gains
        compensated = self.color.linear_to_srgb(self.color.lms_to_rgb(lms))

        hsv = self.color.rgb_to_hsv(compensated)
        hue = hsv[:, 0]
        saturation = torch.clamp(hsv[:, 1] * parameters.saturation_multiplier, 0.0, 1.0)
        value = hsv[:, 2]
        value = torch.clamp(value + parameters.value_lift * (1.0 - value), 0.0, 1.0)

        start, end = parameters.problematic_hue_range
        if start <= end:
            in_band = (hue >= start) & (hue <= end)
        else:
            in_band = (hue >= start) | (hue <= end)

        center = parameters.center_hue
        direction = torch.where(
            (hue >= center) & (hue <= center + 180.0),
            torch.ones_like(hue),
            -torch.ones_like(hue),
        )
        shifted = torch.remainder(hue + direction * parameters.hue_shift_deg, 360.0)
        hue = torch.where(in_band, shifted, hue)

        out = self.color.hsv_to_rgb(torch.stack([hue, saturation, value], dim=1))
        return from_rows(torch.clamp(out, 0.0, 1.0), shape)
