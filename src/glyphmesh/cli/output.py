"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""


from rich.console import Console
from rich.markup import escape
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glyphmesh[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_svg_info(svg_path: str, path_count: int, contour_count: int, transform: list[float]) -> None:
    """Print input document information.

    Args:
        svg_path: Path to the SVG file
        path_count: Number of <path> elements
        contour_count: Number of flattened contours
        transform: Document transform coefficients [a, b, c, d, e, f]
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(svg_path)
    console.print(line)
    console.print(f"  {path_count:,} paths {SYM_DOT} {contour_count:,} contours")
    coefficients = " ".join(f"{value:g}" for value in transform)
    console.print(f"  transform [{coefficients}]")


def print_loops_removed(loops_by_path: dict[str, int], sources: dict[str, str]) -> None:
    """Print paths that had repeated-vertex loops removed.

    Args:
        loops_by_path: Loops removed per glyph name
        sources: Original path data per glyph name
    """
    for name, count in loops_by_path.items():
        if count:
            plural = "loop" if count == 1 else "loops"
            line = Text(f"  Removed {count} {plural} from: ")
            line.append(sources.get(name, name))
            console.print(line)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    vertices: int,
    faces: int,
    side_walls: int,
    loops_removed: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        vertices: Number of vertices written
        faces: Number of faces written
        side_walls: Number of side quads
        loops_removed: Number of degenerate loops removed from the input
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(
        f"  {vertices:,} vertices {SYM_DOT} {faces:,} faces {SYM_DOT} "
        f"{side_walls:,} side walls {SYM_DOT} {loops_removed} loops removed"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
