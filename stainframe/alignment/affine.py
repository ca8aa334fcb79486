# stainframe/alignment/affine.py
"""Placement transforms for images shown on a shared viewer canvas.

A placement transform is a scale/rotation/translation about a center of
rotation, the way slide viewers store how an image has been moved on the
canvas. Applying it to a point ``p``:

1. rotate ``p`` about ``center`` by ``rotation`` degrees
2. scale the result about ``center`` by ``scale``
3. translate by ``translation``

As a homogeneous matrix this is ``T(center + translation) @ S @ R @ T(-center)``.

A center of (0, 0) is the "unset" sentinel written by viewers whose center
control was never touched. It is not a valid center at the origin; see
``stainframe.alignment.reframing.resolve_center``.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .geometry import Point, Polygon, Size


class TransformDirection(Enum):
    """Which way to apply a transform."""

    FORWARD = "forward"
    INVERSE = "inverse"


@dataclass(frozen=True)
class AffineTransform:
    """Scale/rotation/translation transform about a center of rotation.

    Attributes:
        translation: Offset applied last
        scale: Per-axis scale factors, both strictly positive
        rotation: Rotation angle in degrees
        center: Center of rotation and scaling, (0, 0) meaning unset

    Example:
        >>> t = AffineTransform(scale=Size(2.0, 2.0), translation=Point(10, 0))
        >>> t.transform_point(5.0, 5.0)
        (20.0, 10.0)
    """

    translation: Point = field(default_factory=lambda: Point(0.0, 0.0))
    scale: Size = field(default_factory=lambda: Size(1.0, 1.0))
    rotation: float = 0.0
    center: Point = field(default_factory=lambda: Point(0.0, 0.0))

    def __post_init__(self):
        object.__setattr__(self, "translation", Point(*map(float, self.translation)))
        object.__setattr__(self, "scale", Size(*map(float, self.scale)))
        object.__setattr__(self, "center", Point(*map(float, self.center)))
        object.__setattr__(self, "rotation", float(self.rotation))

    @classmethod
    def identity(cls) -> "AffineTransform":
        """Create identity transform."""
        return cls()

    def replace(self, **changes) -> "AffineTransform":
        """Copy of this transform with the given fields changed."""
        return replace(self, **changes)

    @property
    def has_center(self) -> bool:
        """False when the center holds the (0, 0) unset sentinel."""
        return not (self.center.x == 0.0 and self.center.y == 0.0)

    @property
    def is_identity(self) -> bool:
        return bool(np.allclose(self.matrix, np.eye(3)))

    @property
    def matrix(self) -> NDArray[np.float64]:
        """Forward transform as a 3x3 homogeneous matrix."""
        cx, cy = self.center
        tx, ty = self.translation
        return (
            _translation_matrix(cx + tx, cy + ty)
            @ _scale_matrix(self.scale.width, self.scale.height)
            @ _rotation_matrix(self.rotation)
            @ _translation_matrix(-cx, -cy)
        )

    @property
    def inverse_matrix(self) -> NDArray[np.float64]:
        """Inverse transform, undoing the forward steps in reverse order."""
        cx, cy = self.center
        tx, ty = self.translation
        return (
            _translation_matrix(cx, cy)
            @ _rotation_matrix(-self.rotation)
            @ _scale_matrix(1.0 / self.scale.width, 1.0 / self.scale.height)
            @ _translation_matrix(-cx - tx, -cy - ty)
        )

    def transform_point(self, x: float, y: float) -> Tuple[float, float]:
        """Transform a single point.

        Args:
            x: X coordinate
            y: Y coordinate

        Returns:
            Transformed (x, y) tuple
        """
        return _apply(self.matrix, x, y)

    def inverse_transform_point(self, x: float, y: float) -> Tuple[float, float]:
        """Undo the transform for a single point."""
        return _apply(self.inverse_matrix, x, y)

    def transform_points(self, points: NDArray[np.floating]) -> NDArray[np.float64]:
        """Transform an (N, 2) array of points.

        Args:
            points: Array of shape (N, 2) with x, y coordinates

        Returns:
            Transformed points of shape (N, 2)
        """
        return _apply_many(self.matrix, points)

    def inverse_transform_points(
        self, points: NDArray[np.floating]
    ) -> NDArray[np.float64]:
        """Undo the transform for an (N, 2) array of points."""
        return _apply_many(self.inverse_matrix, points)

    def transform_polygon(
        self,
        polygon: Polygon,
        direction: TransformDirection = TransformDirection.FORWARD,
    ) -> Polygon:
        """Apply the transform to every vertex, keeping vertex order.

        An empty polygon is returned unchanged.
        """
        if polygon.is_empty:
            return Polygon()

        if direction is TransformDirection.INVERSE:
            transformed = self.inverse_transform_points(polygon.to_array())
        else:
            transformed = self.transform_points(polygon.to_array())
        return Polygon.from_array(transformed)

    def __repr__(self) -> str:
        return (
            f"AffineTransform(translation=({self.translation.x:.4f}, "
            f"{self.translation.y:.4f}), "
            f"scale=({self.scale.width:.4f}, {self.scale.height:.4f}), "
            f"rotation={self.rotation:.2f}deg, "
            f"center=({self.center.x:.4f}, {self.center.y:.4f}))"
        )


def _translation_matrix(tx: float, ty: float) -> NDArray[np.float64]:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def _scale_matrix(sx: float, sy: float) -> NDArray[np.float64]:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def _rotation_matrix(degrees: float) -> NDArray[np.float64]:
    theta = math.radians(degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return np.array([[cos_t, -sin_t, 0.0], [sin_t, cos_t, 0.0], [0.0, 0.0, 1.0]])


def _apply(matrix: NDArray[np.float64], x: float, y: float) -> Tuple[float, float]:
    result = matrix @ np.array([x, y, 1.0])
    return (float(result[0]), float(result[1]))


def _apply_many(
    matrix: NDArray[np.float64], points: NDArray[np.floating]
) -> NDArray[np.float64]:
    points = np.asarray(points, dtype=np.float64)
    if points.ndim == 1:
        points = points.reshape(1, -1)

    # Convert to homogeneous coordinates
    ones = np.ones((points.shape[0], 1))
    homogeneous = np.hstack([points, ones])

    transformed = (matrix @ homogeneous.T).T
    return transformed[:, :2]
