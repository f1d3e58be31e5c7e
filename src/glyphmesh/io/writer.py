"""OBJ writer for extruded meshes.

Only vertex (v) and face (f) lines are written. Faces use 1-based vertex
numbering, and all vertex lines precede all face lines.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from glyphmesh.domain import Mesh
from glyphmesh.exceptions import ObjSaveError


def format_number(value: float, precision: int = 10) -> str:
    """Format a coordinate with the given number of significant digits."""
    # Adding 0.0 turns -0.0 into 0.0.
    return format(value + 0.0, f".{precision}g")


def format_vertex(x: float, y: float, z: float, precision: int = 10) -> str:
    """Format a vertex line.

    Examples:
        >>> format_vertex(1.0, -0.0, 0.5)
        'v 1 0 0.5'
    """
    return (
        f"v {format_number(x, precision)} {format_number(y, precision)} "
        f"{format_number(z, precision)}"
    )


def format_face(i0: int, i1: int, i2: int) -> str:
    """Format a face line from 1-based vertex indices."""
    return f"f {i0} {i1} {i2}"


def iter_obj_lines(mesh: Mesh, precision: int = 10) -> Iterator[str]:
    """Yield the OBJ lines for a mesh, without line terminators."""
    for x, y, z in mesh.vertices:
        yield format_vertex(x, y, z, precision)
    for i0, i1, i2 in mesh.faces:
        yield format_face(i0, i1, i2)


class ObjWriter:
    """Writes meshes as ASCII OBJ.

    Example:
        writer = ObjWriter(Path("logo.obj"))
        writer.save(mesh)
    """

    def __init__(self, output_path: Path, precision: int = 10) -> None:
        """Initialize the OBJ writer.

        Args:
            output_path: Path where the OBJ will be saved
            precision: Significant digits for vertex coordinates
        """
        self._output_path = output_path
        self._precision = precision

    def write(self, mesh: Mesh, stream: TextIO) -> None:
        """Write a mesh to an open text stream."""
        for line in iter_obj_lines(mesh, self._precision):
            stream.write(line)
            stream.write("\n")

    def save(self, mesh: Mesh) -> None:
        """Save the mesh to the output path.

        Raises:
            ObjSaveError: If the file cannot be written
        """
        try:
            with self._output_path.open("w", encoding="utf-8", newline="\n") as stream:
                self.write(mesh, stream)
        except OSError as e:
            raise ObjSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the OBJ path for an input file.

        Converts: logo.svg -> logo.obj

        Args:
            input_path: Original SVG file path

        Returns:
            Path with the .obj extension
        """
        return input_path.with_suffix(".obj")
