# stainframe/alignment/footprints.py
"""Rectangle/polygon conversion and footprint intersection."""

import logging

from .frames import ImageFrame
from .geometry import Polygon, Rect

logger = logging.getLogger(__name__)


def rect_to_polygon(rect: Rect) -> Polygon:
    """Four-vertex polygon tracing a rectangle.

    Vertices start at the bottom-left corner (y pointing down) and go
    clockwise: (x_min, y_max), (x_max, y_max), (x_max, y_min), (x_min, y_min).
    An empty rectangle gives an empty polygon.
    """
    if rect.is_empty:
        return Polygon()

    return Polygon(
        [
            (rect.x, rect.y_max),
            (rect.x_max, rect.y_max),
            (rect.x_max, rect.y),
            (rect.x, rect.y),
        ]
    )


def intersect_rects(a: Rect, b: Rect) -> Rect:
    """Axis-aligned overlap of two rectangles (possibly empty)."""
    return a.intersection(b)


def intersect_footprints(frame_a: ImageFrame, frame_b: ImageFrame) -> Rect:
    """Overlap of two images' full-extent rectangles.

    Each footprint is taken in its own native pixel space; no cross-frame
    mapping is applied. An empty result means the images do not overlap,
    which callers should branch on rather than treat as a failure.
    """
    overlap = intersect_rects(frame_a.footprint, frame_b.footprint)
    if overlap.is_empty:
        logger.info(
            f"Footprints of {frame_a.location} and {frame_b.location} "
            f"do not overlap"
        )
    return overlap
