"""CLI application entry point for glyphmesh.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from glyphmesh import __version__
from glyphmesh.cli.output import (
    console,
    print_error,
    print_header,
    print_loops_removed,
    print_step,
    print_success,
    print_svg_info,
)
from glyphmesh.config import (
    GeometryConfig,
    GlyphMeshSettings,
    InputConfig,
    LoggingConfig,
)
from glyphmesh.core import MeshPipeline
from glyphmesh.exceptions import GlyphMeshError, ObjSaveError, SvgLoadError
from glyphmesh.io import ObjWriter
from glyphmesh.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphmesh",
    help="Extrude the paths of an SVG document into a closed OBJ solid.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphmesh[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def extrude(
    input_svg: Annotated[
        Path,
        typer.Argument(
            help="Path to input SVG file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.obj)",
        ),
    ] = None,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Curve flattening tolerance in output units",
            min=0.0001,
            max=100.0,
        ),
    ] = 0.1,
    allow_missing_transform: Annotated[
        bool,
        typer.Option(
            "--allow-missing-transform",
            help="Use the identity when the document has no <g transform>",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Extrude every <path> of an SVG document between z=0 and z=1.

    The paths are cleaned of degenerate loops, transformed by the document's
    <g transform>, triangulated and written as an OBJ mesh with outward
    facing caps and side walls.

    Example:
        glyphmesh logo.svg

    This will create logo.obj next to the input file.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_svg.exists():
        print_error(
            f"Input file not found: {input_svg}",
            details=f"The file '{input_svg}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_svg.is_file():
        print_error(
            f"Input path is not a file: {input_svg}",
            details="Please provide a path to an SVG file.",
        )
        raise typer.Exit(code=1)

    if log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    # Create settings from CLI arguments
    settings = GlyphMeshSettings(
        geometry=GeometryConfig(curve_tolerance=tolerance),
        input=InputConfig(require_transform=not allow_missing_transform),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    output_path = output if output is not None else ObjWriter.get_output_path(input_svg)
    pipeline = MeshPipeline(settings, logger=logger)

    try:
        if not quiet:
            print_step("Extruding")

        stats = pipeline.process(input_svg, output_path)

        if not quiet:
            print_svg_info(
                svg_path=str(input_svg),
                path_count=stats.glyph_count,
                contour_count=stats.contour_count,
                transform=stats.transform,
            )

        if verbose:
            print_loops_removed(stats.loops_by_glyph, stats.sources)

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=stats.duration_seconds,
                vertices=stats.mesh_vertices,
                faces=stats.face_count,
                side_walls=stats.side_walls,
                loops_removed=stats.loops_removed,
            )

    except SvgLoadError as e:
        print_error(f"Could not load SVG: {e.reason}")
        raise typer.Exit(code=1)
    except ObjSaveError as e:
        print_error(f"Could not save OBJ: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphMeshError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
