"""
Shared helpers for the torch-based filter implementation.
"""

from __future__ import annotations

from typing import Optional, Tuple

import torch


def ensure_tensor(
    data,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.float32,
) -> torch.Tensor:
    """
    Convert input data to a torch tensor on the requested device.
    """

    if isinstance(data, torch.Tensor):
        tensor = data.to(dtype=dtype)
        if device is not None:
            tensor = tensor.to(device)
        return tensor

    tensor = torch.as_tensor(data, dtype=dtype, device=device)
    return tensor


def to_rows(colors: torch.Tensor) -> Tuple[torch.Tensor, Tuple[int, ...]]:
    """
    Flatten a colour tensor with a trailing RGB axis to shape (N, 3).
    """

    if colors.dim() == 0 or colors.shape[-1] != 3:
        raise ValueError(f"Expected trailing RGB axis of size 3, got shape {tuple(colors.shape)}")

    return colors.reshape(-1, 3), tuple(colors.shape)


def from_rows(rows: torch.Tensor, original_shape: Tuple[int, ...]) -> torch.Tensor:
    """
    Restore the layout flattened by :func:`to_rows`.
    """

    return rows.reshape(original_shape)
