# stainframe/metadata/session.py
"""User-set pixel spacing from viewer session files.

The viewer persists the pixel spacing typed into its transform controls in
an XML session file stored next to the image (``<image>.session.xml``),
separately from the image's own metadata. Only that spacing is read here.

Recognised layouts for the spacing element (tag matched case-insensitively
as ``pixelsize``, ``pixel-size`` or ``pixel_size``)::

    <pixelsize width="0.25" height="0.25"/>
    <pixelsize><width>0.25</width><height>0.25</height></pixelsize>
    <pixel-size x="0.25" y="0.25" unit="um"/>
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from ..alignment.frames import DEFAULT_PIXEL_SIZE_UM
from ..alignment.geometry import Size
from .units import to_micrometers

logger = logging.getLogger(__name__)

_SPACING_TAGS = {"pixelsize", "pixel-size", "pixel_size"}


def session_path_for(location: Union[str, Path]) -> Path:
    """Session file path for an image location."""
    location = Path(location)
    return location.with_name(location.name + ".session.xml")


def _local_tag(element: ET.Element) -> str:
    # Strip any "{namespace}" prefix
    return element.tag.rsplit("}", 1)[-1].lower()


def _read_component(element: ET.Element, *names: str) -> Optional[float]:
    """Read a value from an attribute or child element, first name wins."""
    for name in names:
        if name in element.attrib:
            return float(element.attrib[name])
        for child in element:
            if _local_tag(child) == name and child.text and child.text.strip():
                return float(child.text.strip())
    return None


def read_session_pixel_spacing(path: Union[str, Path]) -> Size:
    """Read the user-set pixel spacing from a session file.

    Args:
        path: Path to the session XML file

    Returns:
        Pixel spacing in micrometers; (1.0, 1.0) when the file does not
        exist or holds no spacing element

    Raises:
        ValueError: If the file is not valid XML or the spacing values are
            not numbers
    """
    path = Path(path)
    default = Size(DEFAULT_PIXEL_SIZE_UM, DEFAULT_PIXEL_SIZE_UM)

    if not path.exists():
        logger.debug(f"No session file at {path}, using default pixel spacing")
        return default

    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ValueError(f"Invalid session file {path}: {e}") from e

    for element in root.iter():
        if _local_tag(element) not in _SPACING_TAGS:
            continue

        try:
            width = _read_component(element, "width", "x")
            height = _read_component(element, "height", "y")
        except ValueError as e:
            raise ValueError(f"Invalid pixel spacing in session file {path}: {e}") from e

        if width is None or height is None:
            logger.warning(f"Incomplete pixel spacing in {path}, using default")
            return default

        unit = element.attrib.get("unit", "um")
        spacing = Size(to_micrometers(width, unit), to_micrometers(height, unit))
        logger.debug(f"Session pixel spacing from {path}: {spacing}")
        return spacing

    logger.debug(f"No pixel spacing in session file {path}, using default")
    return default
