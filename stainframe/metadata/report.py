# stainframe/metadata/report.py
"""Plain-text reports on frames and crop size estimates."""

from ..alignment.frames import ImageFrame
from ..alignment.geometry import Rect

_STORAGE_UNITS = ["bytes", "kB", "MB", "GB", "TB"]


def estimate_output_pixels(rect: Rect) -> float:
    """Number of pixels a crop to ``rect`` would contain (0 when empty)."""
    if rect.is_empty:
        return 0.0
    return float(rect.width) * float(rect.height)


def format_storage_size(n_pixels: float, bytes_per_pixel: float = 4.0) -> str:
    """Human-readable storage estimate for ``n_pixels`` pixels.

    Uses powers of 1024 and three significant digits, e.g. "1.5 MB".
    Anything beyond GB is reported in TB.
    """
    n_bytes = bytes_per_pixel * n_pixels
    if n_bytes < 1.0:
        return "0 bytes"

    value = n_bytes
    power = 0
    while value >= 1024.0 and power < len(_STORAGE_UNITS) - 1:
        value /= 1024.0
        power += 1
    return f"{value:.3g} {_STORAGE_UNITS[power]}"


def image_properties_report(frame: ImageFrame) -> str:
    """Multi-line description of a frame's geometry and display state."""
    tr = frame.transform
    extent = frame.physical_extent
    lines = [
        f"Image location: {frame.location}",
        f"Number of levels: {frame.n_levels}",
        "---Image Size---",
        f"    Width: {frame.dimensions.width}",
        f"    Height: {frame.dimensions.height}",
        "---Image Pixel Size---",
        f"    Pixel Width: {frame.pixel_size.width:g} um",
        f"    Pixel Height: {frame.pixel_size.height:g} um",
        f"    Physical Size: {extent.width:g} x {extent.height:g} um",
        "---Placement Transform---",
        f"    Pixel Spacing (um): ({frame.pixel_spacing.width:g}, "
        f"{frame.pixel_spacing.height:g})",
        f"    Center: ({tr.center.x:g}, {tr.center.y:g})",
        f"    Translation: ({tr.translation.x:g}, {tr.translation.y:g})",
        f"    Scale: ({tr.scale.width:g}, {tr.scale.height:g})",
        f"    Rotation: {tr.rotation:g}",
        f"Opacity: {frame.opacity}",
        f"Visibility: {frame.visible}",
        f"Color model and pixel type: {frame.color_model} {frame.pixel_type}",
    ]
    return "\n".join(lines) + "\n"
