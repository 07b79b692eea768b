"""Preset comparison filters."""

from cvdadapt.presets.filters import (
    apply_custom_adaptive_filter,
    apply_os_preset_filter,
    filter_display_name,
    recommended_os_preset,
)

__all__ = [
    "apply_os_preset_filter",
    "apply_custom_adaptive_filter",
    "recommended_os_preset",
    "filter_display_name",
]
