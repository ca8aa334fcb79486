# stainframe/alignment/frames.py
"""Image frame descriptors.

An ImageFrame bundles everything the alignment code needs to know about a
loaded image: where the viewer placed it, how large its pixels are and how
many of them it has. Frames are built once per image load (see
``stainframe.metadata.frame_loader``) and never mutated afterwards.

Two pixel spacings are carried per image:
- ``pixel_size``: intrinsic spacing read from the image's own metadata
- ``pixel_spacing``: spacing set by the user in the viewer's transform
  controls, persisted in the image's session file

Both are in micrometers and default to 1.0 um per axis.
"""

from dataclasses import dataclass, field

from .affine import AffineTransform
from .geometry import Rect, Size

DEFAULT_PIXEL_SIZE_UM = 1.0


def _unit_size() -> Size:
    return Size(DEFAULT_PIXEL_SIZE_UM, DEFAULT_PIXEL_SIZE_UM)


@dataclass(frozen=True)
class ImageFrame:
    """Geometry and descriptive metadata of one loaded image.

    Attributes:
        location: Path or URI of the image (opaque to the alignment code)
        dimensions: Image (width, height) in pixels at full resolution
        transform: Placement transform of the image on the viewer canvas
        pixel_size: Intrinsic pixel size from image metadata (um/pixel)
        pixel_spacing: User-set pixel spacing from the session (um/pixel)
        n_levels: Number of pyramid levels
        opacity: Display opacity (0-100)
        visible: Display visibility
        color_model: Color model name, e.g. "RGB"
        pixel_type: Channel data type name, e.g. "uint8"
    """

    location: str
    dimensions: Size
    transform: AffineTransform = field(default_factory=AffineTransform.identity)
    pixel_size: Size = field(default_factory=_unit_size)
    pixel_spacing: Size = field(default_factory=_unit_size)
    n_levels: int = 1
    opacity: int = 100
    visible: bool = True
    color_model: str = "RGB"
    pixel_type: str = "uint8"

    def __post_init__(self):
        width, height = self.dimensions
        object.__setattr__(self, "dimensions", Size(int(width), int(height)))
        object.__setattr__(self, "pixel_size", Size(*map(float, self.pixel_size)))
        object.__setattr__(
            self, "pixel_spacing", Size(*map(float, self.pixel_spacing))
        )

    @property
    def footprint(self) -> Rect:
        """Full extent of the image in its own pixel space."""
        return Rect.from_size(self.dimensions)

    @property
    def physical_extent(self) -> Size:
        """Full extent of the image in micrometers."""
        return Size(
            self.dimensions.width * self.pixel_size.width,
            self.dimensions.height * self.pixel_size.height,
        )
