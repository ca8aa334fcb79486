# stainframe/metadata/frame_loader.py
"""Build ImageFrame values from image metadata.

Image I/O lives outside stainframe. Whatever opens the image hands over a
plain metadata dictionary (or a JSON descriptor file holding one)::

    {
        "location": "/slides/source.svs",
        "dimensions": [40000, 30000],
        "pixel_size": [0.25, 0.25],
        "pixel_size_unit": "um",
        "transform": {
            "translation": [0.0, 0.0],
            "scale": [1.0, 1.0],
            "rotation": 0.0,
            "center": [0.0, 0.0]
        },
        "n_levels": 4,
        "opacity": 100,
        "visible": true,
        "color_model": "RGB",
        "pixel_type": "uint8"
    }

Only ``location`` and ``dimensions`` are required. A missing or non-positive
pixel size defaults to 1.0 um (configurable) so that frame mapping stays
well-defined. Non-numeric values and a non-positive transform scale are
rejected with ValueError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from ..alignment.affine import AffineTransform
from ..alignment.frames import DEFAULT_PIXEL_SIZE_UM, ImageFrame
from ..alignment.geometry import Point, Size
from .session import read_session_pixel_spacing, session_path_for
from .units import to_micrometers

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number(value: Any, name: str) -> float:
    if not _is_number(value):
        raise ValueError(f"'{name}' must be a number, got {value!r}")
    return value


def _pair(value: Any, name: str, allow_none: bool = False) -> Sequence[float]:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(_is_number(v) or (allow_none and v is None) for v in value)
    ):
        raise ValueError(f"'{name}' must be a pair of numbers, got {value!r}")
    return value


def transform_from_dict(data: Optional[Dict[str, Any]]) -> AffineTransform:
    """Parse a placement transform; missing keys take identity values.

    Raises:
        ValueError: If a value is not numeric or the scale is not positive
    """
    if not data:
        return AffineTransform.identity()

    if not isinstance(data, dict):
        raise ValueError(f"'transform' must be an object, got {data!r}")

    scale = Size(*_pair(data.get("scale", (1.0, 1.0)), "scale"))
    if scale.width <= 0 or scale.height <= 0:
        raise ValueError(f"Transform scale must be positive, got {tuple(scale)}")

    return AffineTransform(
        translation=Point(*_pair(data.get("translation", (0.0, 0.0)), "translation")),
        scale=scale,
        rotation=float(_number(data.get("rotation", 0.0), "rotation")),
        center=Point(*_pair(data.get("center", (0.0, 0.0)), "center")),
    )


def _pixel_size_from_metadata(
    metadata: Dict[str, Any], location: str, default: float
) -> Size:
    """Intrinsic pixel size in um, replacing missing axes with ``default``."""
    raw = metadata.get("pixel_size")
    unit = metadata.get("pixel_size_unit", "um")

    if raw is None:
        logger.warning(
            f"No pixel size in metadata for {location}, using {default} um"
        )
        return Size(default, default)

    if _is_number(raw):
        raw = (raw, raw)

    components = []
    for axis, value in zip("xy", _pair(raw, "pixel_size", allow_none=True)):
        if value is None or value <= 0:
            logger.warning(
                f"Invalid {axis} pixel size {value!r} for {location}, "
                f"using {default} um"
            )
            components.append(default)
        else:
            components.append(to_micrometers(float(value), unit))
    return Size(*components)


def frame_from_metadata(
    metadata: Dict[str, Any],
    pixel_spacing: Optional[Size] = None,
    default_pixel_size: float = DEFAULT_PIXEL_SIZE_UM,
) -> ImageFrame:
    """Build an ImageFrame from a metadata dictionary.

    Args:
        metadata: Image metadata, see module docstring for the layout
        pixel_spacing: User-set spacing from the session, in um;
            (1.0, 1.0) when None
        default_pixel_size: Pixel size in um used for missing or
            non-positive axes

    Returns:
        ImageFrame for the image

    Raises:
        ValueError: If location or dimensions are missing or malformed
    """
    location = metadata.get("location")
    if not location:
        raise ValueError("Image metadata is missing 'location'")

    if "dimensions" not in metadata:
        raise ValueError(f"Image metadata for {location} is missing 'dimensions'")
    width, height = _pair(metadata["dimensions"], "dimensions")
    if width < 0 or height < 0:
        raise ValueError(
            f"Image dimensions must be non-negative, got ({width}, {height})"
        )

    if pixel_spacing is None:
        pixel_spacing = Size(DEFAULT_PIXEL_SIZE_UM, DEFAULT_PIXEL_SIZE_UM)

    frame = ImageFrame(
        location=str(location),
        dimensions=Size(int(width), int(height)),
        transform=transform_from_dict(metadata.get("transform")),
        pixel_size=_pixel_size_from_metadata(
            metadata, str(location), default_pixel_size
        ),
        pixel_spacing=pixel_spacing,
        n_levels=int(_number(metadata.get("n_levels", 1), "n_levels")),
        opacity=int(_number(metadata.get("opacity", 100), "opacity")),
        visible=bool(metadata.get("visible", True)),
        color_model=str(metadata.get("color_model", "RGB")),
        pixel_type=str(metadata.get("pixel_type", "uint8")),
    )

    logger.debug(f"Built frame for {frame.location}: {frame.dimensions} px")
    return frame


def load_frame(
    descriptor_path: Union[str, Path],
    session_path: Optional[Union[str, Path]] = None,
    default_pixel_size: float = DEFAULT_PIXEL_SIZE_UM,
) -> ImageFrame:
    """Load an ImageFrame from a JSON descriptor file.

    Args:
        descriptor_path: JSON file holding the image metadata
        session_path: Session file with the user-set pixel spacing; looked
            up next to the image location when None
        default_pixel_size: Pixel size in um used when the descriptor has none

    Returns:
        ImageFrame for the described image

    Raises:
        ValueError: If the descriptor cannot be read or is malformed
    """
    descriptor_path = Path(descriptor_path)
    try:
        with open(descriptor_path, "r", encoding="utf-8") as f:
            metadata = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Could not read frame descriptor {descriptor_path}: {e}") from e

    if not isinstance(metadata, dict):
        raise ValueError(f"Frame descriptor {descriptor_path} must hold a JSON object")

    if session_path is None and metadata.get("location"):
        session_path = session_path_for(metadata["location"])

    spacing = None
    if session_path is not None:
        spacing = read_session_pixel_spacing(session_path)

    logger.info(f"Loaded frame descriptor {descriptor_path}")
    return frame_from_metadata(
        metadata, pixel_spacing=spacing, default_pixel_size=default_pixel_size
    )
