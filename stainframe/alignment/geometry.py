# stainframe/alignment/geometry.py
"""Plain geometry value types shared by the alignment code.

Coordinate conventions:
- Pixel coordinates are (x, y) with the origin at the top-left, y pointing down
- Physical coordinates are in micrometers
- Rectangles span [x, x + width) x [y, y + height)
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple, Tuple, Union

import numpy as np
from numpy.typing import NDArray


class Point(NamedTuple):
    """A 2D point (or vector) with float coordinates."""

    x: float
    y: float


class Size(NamedTuple):
    """A 2D extent, e.g. pixel dimensions or pixel spacing."""

    width: Union[int, float]
    height: Union[int, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle.

    Attributes:
        x: Left edge
        y: Top edge
        width: Extent along x (empty when <= 0)
        height: Extent along y (empty when <= 0)
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_size(cls, size: Size) -> "Rect":
        """Rectangle anchored at the origin with the given extent."""
        return cls(0, 0, size.width, size.height)

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def area(self) -> float:
        if self.is_empty:
            return 0.0
        return float(self.width) * float(self.height)

    def intersection(self, other: "Rect") -> "Rect":
        """Overlap of two rectangles.

        Returns:
            The overlapping rectangle, or Rect(0, 0, 0, 0) when they do
            not overlap (or either one is empty)
        """
        if self.is_empty or other.is_empty:
            return Rect(0, 0, 0, 0)

        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.x_max, other.x_max)
        y1 = min(self.y_max, other.y_max)

        if x1 <= x0 or y1 <= y0:
            return Rect(0, 0, 0, 0)
        return Rect(x0, y0, x1 - x0, y1 - y0)


@dataclass(frozen=True)
class Polygon:
    """Ordered list of vertices. A polygon with no vertices is "no geometry"."""

    vertices: Tuple[Point, ...] = ()

    def __init__(self, vertices: Iterable[Tuple[float, float]] = ()):
        object.__setattr__(
            self,
            "vertices",
            tuple(Point(float(x), float(y)) for x, y in vertices),
        )

    @classmethod
    def from_array(cls, points: NDArray[np.floating]) -> "Polygon":
        """Build from an (N, 2) array of x, y coordinates."""
        return cls((float(x), float(y)) for x, y in np.asarray(points).reshape(-1, 2))

    def to_array(self) -> NDArray[np.float64]:
        """Vertices as an (N, 2) float array (shape (0, 2) when empty)."""
        if not self.vertices:
            return np.empty((0, 2), dtype=np.float64)
        return np.array(self.vertices, dtype=np.float64)

    @property
    def is_empty(self) -> bool:
        return len(self.vertices) == 0

    def allclose(self, other: "Polygon", atol: float = 1e-9) -> bool:
        """Vertex-wise comparison within an absolute tolerance."""
        if len(self) != len(other):
            return False
        return bool(np.allclose(self.to_array(), other.to_array(), atol=atol))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> Point:
        return self.vertices[index]
