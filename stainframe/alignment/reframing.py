# stainframe/alignment/reframing.py
"""Express geometry from one image frame in another image frame.

All functions take a directional ``(initial, final)`` frame pair and map
geometry given in ``initial``'s pixel space into ``final``'s pixel space.

Coordinate Systems:
- Pixel space: (x, y) in an image's own full-resolution pixel grid
- Physical space: micrometers, pixel coordinates times the intrinsic pixel size
- Display space: pixel space after the viewer's placement transform

There are two mappings and they are not interchangeable:
1. ``map_point``/``map_polygon`` rescale between pixel sizes and shift by the
   offset between image centers. Rotation and scale of the placement
   transforms are ignored, i.e. both images are assumed axis-aligned.
2. ``transform_polygon`` removes the final image's placement and imposes the
   initial image's placement, both in the final image's pixel units, to get
   geometry as it appears on the final image's displayed canvas.

Preconditions: pixel sizes and transform scales are strictly positive.
Missing metadata is defaulted to 1.0 um when frames are built, so these
functions never guard against division by zero.
"""

import logging

from .affine import AffineTransform, TransformDirection
from .frames import ImageFrame
from .geometry import Point, Polygon

logger = logging.getLogger(__name__)


def resolve_center(frame: ImageFrame) -> Point:
    """Physical-space center of an image, in micrometers.

    Viewers leave the transform center at (0, 0) until the user moves it.
    An explicit center is returned unchanged; the unset sentinel falls back
    to the physical midpoint of the image.

    Args:
        frame: Image frame

    Returns:
        Center point in micrometers
    """
    if frame.transform.has_center:
        return frame.transform.center

    return Point(
        frame.pixel_size.width * frame.dimensions.width / 2.0,
        frame.pixel_size.height * frame.dimensions.height / 2.0,
    )


def center_difference(initial: ImageFrame, final: ImageFrame) -> Point:
    """Offset from the initial image center to the final image center.

    Returns:
        The offset in the final image's pixel units
    """
    c0 = resolve_center(initial)
    c1 = resolve_center(final)
    return Point(
        (c1.x - c0.x) / final.pixel_size.width,
        (c1.y - c0.y) / final.pixel_size.height,
    )


def map_point(point: Point, initial: ImageFrame, final: ImageFrame) -> Point:
    """Map a point from initial's pixel space into final's pixel space.

    The point is rescaled from initial's pixel size to final's, then
    shifted by the center offset between the two images.

    Args:
        point: (x, y) in initial's pixel coordinates
        initial: Frame the point is expressed in
        final: Frame to express the point in

    Returns:
        (x, y) in final's pixel coordinates
    """
    diff = center_difference(initial, final)
    x, y = point
    return Point(
        initial.pixel_size.width * x / final.pixel_size.width + diff.x,
        initial.pixel_size.height * y / final.pixel_size.height + diff.y,
    )


def map_polygon(polygon: Polygon, initial: ImageFrame, final: ImageFrame) -> Polygon:
    """Apply ``map_point`` to every vertex, keeping vertex order."""
    return Polygon(map_point(vertex, initial, final) for vertex in polygon)


def _initial_space_transform(initial: ImageFrame, final: ImageFrame) -> AffineTransform:
    """Initial image placement expressed in final image pixel units.

    The translation is rescaled by final's pixel size and corrected by
    ``(scale - 1) * center`` because the placement transform scales about
    its own center while this one scales about the origin.
    """
    tr = initial.transform
    fpx = final.pixel_size
    return AffineTransform(
        translation=Point(
            tr.translation.x / fpx.width - (tr.scale.width - 1.0) * tr.center.x,
            tr.translation.y / fpx.height - (tr.scale.height - 1.0) * tr.center.y,
        ),
        scale=tr.scale,
        rotation=tr.rotation,
    )


def _final_space_transform(final: ImageFrame) -> AffineTransform:
    """Final image placement in its own pixel units (no center correction)."""
    tr = final.transform
    fpx = final.pixel_size
    return AffineTransform(
        translation=Point(
            tr.translation.x / fpx.width,
            tr.translation.y / fpx.height,
        ),
        scale=tr.scale,
        rotation=tr.rotation,
    )


def transform_polygon(
    polygon: Polygon, initial: ImageFrame, final: ImageFrame
) -> Polygon:
    """Place a polygon on the final image's displayed canvas.

    Undoes the final image's placement transform, then applies the initial
    image's placement transform, both expressed in final's pixel units.

    Only the initial transform gets the ``(scale - 1) * center`` translation
    correction; the final image is the display reference. As a consequence
    ``transform_polygon(p, f, f)`` is a no-op only when ``f`` has unit scale
    or an unset center.

    Args:
        polygon: Polygon in final's pixel coordinates (typically the output
            of ``map_polygon``)
        initial: Frame whose placement should be imposed
        final: Frame whose placement should be removed

    Returns:
        Polygon in final's displayed pixel coordinates
    """
    if polygon.is_empty:
        return Polygon()

    initial_space = _initial_space_transform(initial, final)
    final_space = _final_space_transform(final)

    logger.debug(f"Removing final placement {final_space}")
    logger.debug(f"Imposing initial placement {initial_space}")

    staged = final_space.transform_polygon(polygon, TransformDirection.INVERSE)
    return initial_space.transform_polygon(staged, TransformDirection.FORWARD)
