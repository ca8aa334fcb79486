# stainframe/__main__.py
import logging
from pathlib import Path
from typing import Optional

import click

from stainframe.config import AlignmentConfig
from stainframe.metadata.frame_loader import load_frame
from stainframe.metadata.report import image_properties_report
from stainframe.metadata.session import session_path_for
from stainframe.overlay import build_overlay, plot_overlay
from stainframe.utils.logging_config import setup_logging


def _session_for(descriptor, session_dir: Optional[Path]) -> Optional[Path]:
    """Session file in session_dir named after the descriptor, if given."""
    if session_dir is None:
        return None
    return session_dir / session_path_for(Path(descriptor).stem).name


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("mask", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--session-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory holding <descriptor name>.session.xml files. "
    "If not specified, session files are looked up next to each image.",
)
@click.option(
    "--plot",
    type=click.Path(path_type=Path),
    default=None,
    help="Write an overlay plot of both image borders to this file",
)
@click.option(
    "--pixel-warning-threshold",
    type=float,
    default=AlignmentConfig.pixel_warning_threshold,
    help="Warn when the crop region has more pixels than this",
)
@click.option(
    "--bytes-per-pixel",
    type=float,
    default=AlignmentConfig.bytes_per_pixel,
    help="Bytes per pixel used for the crop storage estimate",
)
@click.option(
    "--default-pixel-size",
    type=float,
    default=AlignmentConfig.default_pixel_size_um,
    help="Pixel size in micrometers for images whose metadata has none",
)
# Logging options
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default="INFO",
    help="Set the logging level",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the log file",
)
def main(
    source: Path,
    mask: Path,
    session_dir: Optional[Path],
    plot: Optional[Path],
    pixel_warning_threshold: float,
    bytes_per_pixel: float,
    default_pixel_size: float,
    log_level: str,
    log_file: Optional[Path],
):
    """Report how a mask image lines up with a source image.

    SOURCE: JSON frame descriptor of the source image
    MASK: JSON frame descriptor of the mask image
    """
    if pixel_warning_threshold <= 0:
        raise click.BadParameter(
            "Pixel warning threshold must be positive",
            param_hint="pixel_warning_threshold",
        )
    if bytes_per_pixel <= 0:
        raise click.BadParameter(
            "Bytes per pixel must be positive", param_hint="bytes_per_pixel"
        )
    if default_pixel_size <= 0:
        raise click.BadParameter(
            "Default pixel size must be positive", param_hint="default_pixel_size"
        )

    setup_logging(log_level=getattr(logging, log_level), log_file=log_file)

    config = AlignmentConfig(
        pixel_warning_threshold=pixel_warning_threshold,
        bytes_per_pixel=bytes_per_pixel,
        default_pixel_size_um=default_pixel_size,
    )

    try:
        source_frame = load_frame(
            source,
            _session_for(source, session_dir),
            default_pixel_size=config.default_pixel_size_um,
        )
        mask_frame = load_frame(
            mask,
            _session_for(mask, session_dir),
            default_pixel_size=config.default_pixel_size_um,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    plan = build_overlay(source_frame, mask_frame, config)

    click.echo("Mask image properties:")
    click.echo(image_properties_report(mask_frame))
    click.echo("Source image properties:")
    click.echo(image_properties_report(source_frame))

    click.echo("Mask image border in source pixels:")
    for vertex in plan.mask_border:
        click.echo(f"    ({vertex.x:.2f}, {vertex.y:.2f})")

    if plan.can_crop:
        rect = plan.intersection
        click.echo(
            f"Crop region: x={rect.x:g}, y={rect.y:g}, "
            f"width={rect.width:g}, height={rect.height:g}"
        )
        click.echo(f"Estimated crop size: {plan.crop_storage}")
        if plan.exceeds_pixel_threshold:
            click.echo(
                f"Warning: the crop region has {plan.crop_pixels:.3g} pixels "
                f"(~{plan.crop_storage}). Saving it may take a long time."
            )
    else:
        click.echo("The images do not overlap; there is nothing to crop.")

    if plot is not None:
        plot_overlay(plan, plot, dpi=config.plot_dpi)
        click.echo(f"Overlay plot saved as {plot}")


if __name__ == "__main__":
    main()
