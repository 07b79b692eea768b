"""
GPU-accelerated adaptive filter backed by PyTorch.
"""

from cvdadapt.torch.filter import TorchAdaptiveFilter

__all__ = ["TorchAdaptiveFilter"]
