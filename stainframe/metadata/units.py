# stainframe/metadata/units.py
"""Length unit normalisation.

Every physical length inside stainframe is in micrometers. Metadata from
different sources reports pixel sizes in different units, so conversion
happens here, once, before a frame is built.
"""

from typing import Dict, Optional

_UM_PER_UNIT: Dict[str, float] = {
    "nm": 1e-3,
    "nanometer": 1e-3,
    "um": 1.0,
    "µm": 1.0,
    "μm": 1.0,
    "micron": 1.0,
    "micrometer": 1.0,
    "mm": 1e3,
    "millimeter": 1e3,
    "cm": 1e4,
    "centimeter": 1e4,
}


def to_micrometers(value: float, unit: Optional[str] = "um") -> float:
    """Convert a length to micrometers.

    Args:
        value: Length in ``unit``
        unit: Unit name; None is treated as micrometers

    Returns:
        Length in micrometers

    Raises:
        ValueError: If the unit is not recognised
    """
    if unit is None:
        return float(value)

    key = unit.strip().lower().rstrip("s")
    if key not in _UM_PER_UNIT:
        supported = ", ".join(sorted(_UM_PER_UNIT))
        raise ValueError(f"Unsupported length unit '{unit}'. Supported: {supported}")
    return float(value) * _UM_PER_UNIT[key]
