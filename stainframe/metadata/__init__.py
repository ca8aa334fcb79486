# stainframe/metadata/__init__.py
"""Metadata boundary: turns image metadata and session files into frames.

All pixel sizes leave this package in micrometers.
"""

from .frame_loader import frame_from_metadata, load_frame, transform_from_dict
from .report import (
    estimate_output_pixels,
    format_storage_size,
    image_properties_report,
)
from .session import read_session_pixel_spacing, session_path_for
from .units import to_micrometers

__all__ = [
    "frame_from_metadata",
    "load_frame",
    "transform_from_dict",
    "read_session_pixel_spacing",
    "session_path_for",
    "to_micrometers",
    "estimate_output_pixels",
    "format_storage_size",
    "image_properties_report",
]
