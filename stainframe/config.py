# stainframe/config.py
"""Tunable settings for overlay and crop planning."""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

from .alignment.frames import DEFAULT_PIXEL_SIZE_UM

logger = logging.getLogger(__name__)


@dataclass
class AlignmentConfig:
    """Settings shared by the overlay planner and the CLI.

    Attributes:
        default_pixel_size_um: Pixel size used when image metadata has none
        pixel_warning_threshold: Crop size (pixels) above which a warning is
            issued; 1e8 pixels is roughly 400 MB at 4 bytes per pixel
        bytes_per_pixel: Used to estimate crop storage size
        plot_dpi: Resolution of rendered overlay plots
    """

    default_pixel_size_um: float = DEFAULT_PIXEL_SIZE_UM
    pixel_warning_threshold: float = 1e8
    bytes_per_pixel: float = 4.0
    plot_dpi: int = 150

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlignmentConfig":
        """Create from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})
