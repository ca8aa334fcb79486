# stainframe/overlay.py
"""Overlay and crop planning for a source/mask image pair.

Workflow:
1. Trace the mask footprint as a polygon in mask pixel space
2. Reframe it into source pixel space (pixel size + center offset)
3. Place it on the source image's displayed canvas (placement transforms)
4. Intersect both footprints to decide whether cropping is possible

The source border needs no mapping: it always stays in source pixel space.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt

from .alignment.footprints import intersect_footprints, rect_to_polygon
from .alignment.frames import ImageFrame
from .alignment.geometry import Polygon, Rect
from .alignment.reframing import map_polygon, transform_polygon
from .config import AlignmentConfig
from .metadata.report import estimate_output_pixels, format_storage_size

logger = logging.getLogger(__name__)

MASK_BORDER_COLOR = (1.0, 1.0, 0.0)
SOURCE_BORDER_COLOR = (0.0, 1.0, 1.0)


@dataclass(frozen=True)
class OverlayPlan:
    """Geometry to draw over the source image and the crop it allows.

    Attributes:
        source: Frame of the image being displayed and cropped
        mask: Frame of the mask/reference image
        mask_border: Mask footprint in source display pixel space
        source_border: Source footprint in source pixel space
        intersection: Overlap of the two footprints (empty if none)
        crop_pixels: Pixel count of a crop to the intersection
        crop_storage: Human-readable storage estimate for the crop
        exceeds_pixel_threshold: Crop is larger than the configured warning size
    """

    source: ImageFrame
    mask: ImageFrame
    mask_border: Polygon
    source_border: Polygon
    intersection: Rect
    crop_pixels: float
    crop_storage: str
    exceeds_pixel_threshold: bool

    @property
    def can_crop(self) -> bool:
        """Whether the images overlap, i.e. downstream crop/mask is possible."""
        return not self.intersection.is_empty


def build_overlay(
    source: ImageFrame,
    mask: ImageFrame,
    config: Optional[AlignmentConfig] = None,
) -> OverlayPlan:
    """Compute overlay borders and the crop rectangle for an image pair.

    Args:
        source: Frame of the displayed (source) image
        mask: Frame of the mask image
        config: Planning settings; defaults when None

    Returns:
        OverlayPlan for the pair
    """
    if config is None:
        config = AlignmentConfig()

    mask_polygon = rect_to_polygon(mask.footprint)
    source_polygon = rect_to_polygon(source.footprint)

    reframed = map_polygon(mask_polygon, mask, source)
    mask_border = transform_polygon(reframed, mask, source)

    intersection = intersect_footprints(mask, source)
    crop_pixels = estimate_output_pixels(intersection)
    crop_storage = format_storage_size(crop_pixels, config.bytes_per_pixel)
    exceeds = crop_pixels > config.pixel_warning_threshold

    if intersection.is_empty:
        logger.info("Mask and source images do not overlap, nothing to crop")
    else:
        logger.info(
            f"Crop region {intersection.width:g}x{intersection.height:g} px "
            f"at ({intersection.x:g}, {intersection.y:g}), ~{crop_storage}"
        )
    if exceeds:
        logger.warning(
            f"Crop region has {crop_pixels:.3g} pixels, above the warning "
            f"threshold of {config.pixel_warning_threshold:.3g}"
        )

    return OverlayPlan(
        source=source,
        mask=mask,
        mask_border=mask_border,
        source_border=source_polygon,
        intersection=intersection,
        crop_pixels=crop_pixels,
        crop_storage=crop_storage,
        exceeds_pixel_threshold=exceeds,
    )


def _add_border(ax, polygon: Polygon, color, label: str) -> None:
    if polygon.is_empty:
        return
    ax.add_patch(
        mpatches.Polygon(
            polygon.to_array(),
            closed=True,
            fill=False,
            edgecolor=color,
            linewidth=3,
            linestyle="--",
            label=label,
        )
    )


def plot_overlay(
    plan: OverlayPlan, output_path: Union[str, Path], dpi: int = 150
) -> Path:
    """Render both image borders and the crop region to an image file.

    Args:
        plan: Overlay plan to draw
        output_path: Destination file; format follows the extension
        dpi: Output resolution

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    fig, ax = plt.subplots(figsize=(8, 8))

    _add_border(ax, plan.mask_border, MASK_BORDER_COLOR, "Mask image border")
    _add_border(ax, plan.source_border, SOURCE_BORDER_COLOR, "Source image border")

    if plan.can_crop:
        rect = plan.intersection
        ax.add_patch(
            mpatches.Rectangle(
                (rect.x, rect.y),
                rect.width,
                rect.height,
                fill=True,
                alpha=0.2,
                facecolor="gray",
                label="Crop region",
            )
        )

    ax.autoscale_view()
    ax.set_aspect("equal")
    ax.invert_yaxis()  # pixel space, y down
    ax.set_facecolor("black")
    ax.set_xlabel("x (source pixels)")
    ax.set_ylabel("y (source pixels)")
    ax.set_title(f"{Path(plan.mask.location).name} over {Path(plan.source.location).name}")
    ax.legend(loc="upper right")

    fig.tight_layout()
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)

    logger.info(f"Saved overlay plot to {output_path}")
    return output_path
