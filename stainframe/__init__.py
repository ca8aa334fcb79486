# stainframe/__init__.py
"""stainframe: map geometry between two independently placed slide images."""

__version__ = "0.1.0"

from .alignment import (  # noqa: E402
    AffineTransform,
    ImageFrame,
    Point,
    Polygon,
    Rect,
    Size,
    center_difference,
    intersect_footprints,
    map_point,
    map_polygon,
    rect_to_polygon,
    resolve_center,
    transform_polygon,
)
from .config import AlignmentConfig  # noqa: E402

__all__ = [
    "AffineTransform",
    "ImageFrame",
    "Point",
    "Polygon",
    "Rect",
    "Size",
    "AlignmentConfig",
    "resolve_center",
    "center_difference",
    "map_point",
    "map_polygon",
    "transform_polygon",
    "rect_to_polygon",
    "intersect_footprints",
]
