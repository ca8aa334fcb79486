# stainframe/alignment/__init__.py
"""Coordinate-frame reconciliation between two placed images."""

from .affine import AffineTransform, TransformDirection
from .footprints import intersect_footprints, intersect_rects, rect_to_polygon
from .frames import ImageFrame
from .geometry import Point, Polygon, Rect, Size
from .reframing import (
    center_difference,
    map_point,
    map_polygon,
    resolve_center,
    transform_polygon,
)

__all__ = [
    "AffineTransform",
    "TransformDirection",
    "ImageFrame",
    "Point",
    "Polygon",
    "Rect",
    "Size",
    "resolve_center",
    "center_difference",
    "map_point",
    "map_polygon",
    "transform_polygon",
    "rect_to_polygon",
    "intersect_rects",
    "intersect_footprints",
]
