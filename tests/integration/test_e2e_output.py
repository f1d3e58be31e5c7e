"""End-to-end tests: SVG in, OBJ out, checked as a solid with trimesh."""

import math
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest
import trimesh

from glyphmesh.config import GeometryConfig, GlyphMeshSettings
from glyphmesh.core import MeshPipeline


def _write_svg(path: Path, transform: str, *paths: str) -> Path:
    body = "".join(f'<path d="{d}"/>' for d in paths)
    path.write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">'
        f'<g transform="{transform}">{body}</g></svg>',
        encoding="utf-8",
    )
    return path


def _load_obj(path: Path) -> tuple[list[str], trimesh.Trimesh]:
    """Parse the OBJ by hand so the file format itself is checked."""
    lines = path.read_text(encoding="utf-8").splitlines()
    vertices = [[float(v) for v in line.split()[1:]] for line in lines if line.startswith("v ")]
    faces = [[int(i) - 1 for i in line.split()[1:]] for line in lines if line.startswith("f ")]
    mesh = trimesh.Trimesh(
        vertices=np.array(vertices, dtype=np.float64),
        faces=np.array(faces, dtype=np.int64),
        process=False,
    )
    return lines, mesh


def _run(tmp_path: Path, transform: str, *paths: str, tolerance: float = 0.1):
    svg = _write_svg(tmp_path / "input.svg", transform, *paths)
    output = tmp_path / "input.obj"
    settings = GlyphMeshSettings(geometry=GeometryConfig(curve_tolerance=tolerance))
    stats = MeshPipeline(settings, logger=MagicMock()).process(svg, output)
    lines, mesh = _load_obj(output)
    return stats, lines, mesh


def _assert_solid(mesh: trimesh.Trimesh) -> None:
    assert mesh.is_watertight
    assert mesh.is_winding_consistent
    assert mesh.volume > 0


class TestSolids:
    """Extruded outlines must be closed, consistently wound solids."""

    def test_square(self, tmp_path: Path) -> None:
        """Unit square: 8 vertex lines, 12 face lines, a unit cube."""
        _, lines, mesh = _run(tmp_path, "matrix(1 0 0 1 0 0)", "M0 0 L1 0 L1 1 L0 1 Z")

        assert sum(line.startswith("v ") for line in lines) == 8
        assert sum(line.startswith("f ") for line in lines) == 12
        assert all(line.startswith("v ") for line in lines[:8])
        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(1.0)

    def test_first_vertices_interleave_planes(self, tmp_path: Path) -> None:
        """The first point appears at z=0 then z=1."""
        _, lines, _ = _run(tmp_path, "matrix(1 0 0 1 0 0)", "M0 0 L1 0 L1 1 L0 1 Z")

        assert lines[:2] == ["v 0 0 0", "v 0 0 1"]

    def test_square_with_hole(self, tmp_path: Path) -> None:
        """Walls on the outer and inner boundary, hole left open."""
        stats, lines, mesh = _run(
            tmp_path,
            "matrix(1 0 0 1 0 0)",
            "M0 0 L3 0 L3 3 L0 3 Z M1 1 L2 1 L2 2 L1 2 Z",
        )

        assert sum(line.startswith("v ") for line in lines) == 16
        assert sum(line.startswith("f ") for line in lines) == 32
        assert stats.side_walls == 8
        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(8.0)

    def test_hole_with_collinear_points(self, tmp_path: Path) -> None:
        """Mid-edge points on shell and hole still get their walls."""
        stats, lines, mesh = _run(
            tmp_path,
            "matrix(1 0 0 1 0 0)",
            "M0 0 L1.5 0 L3 0 L3 3 L0 3 Z M1 1 L2 1 L2 1.5 L2 2 L1 2 Z",
        )

        assert sum(line.startswith("v ") for line in lines) == 20
        assert stats.side_walls == 10
        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(8.0)

    def test_mirrored_document(self, tmp_path: Path) -> None:
        """The usual y-down flip still yields an outward solid."""
        _, _, mesh = _run(tmp_path, "matrix(1 0 0 -1 0 100)", "M0 0 L4 0 L4 2 L0 2 Z")

        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(8.0)
        assert mesh.bounds[0][1] == pytest.approx(98.0)

    def test_ring_from_arcs(self, tmp_path: Path) -> None:
        """A ring drawn with arcs approximates the annulus volume."""
        _, _, mesh = _run(
            tmp_path,
            "translate(50 50)",
            "M 10 0 A 10 10 0 1 0 -10 0 A 10 10 0 1 0 10 0 Z "
            "M 5 0 A 5 5 0 1 0 -5 0 A 5 5 0 1 0 5 0 Z",
            tolerance=0.01,
        )

        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(math.pi * (10**2 - 5**2), rel=0.01)

    def test_several_paths(self, tmp_path: Path) -> None:
        """Every path contributes its own closed component."""
        stats, _, mesh = _run(
            tmp_path,
            "scale(2)",
            "M0 0 L1 0 L1 1 L0 1 Z",
            "M3 0 L4 0 L3.5 1 Z",
        )

        assert stats.glyph_count == 2
        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(4.0 + 2.0)

    def test_spike_removed(self, tmp_path: Path) -> None:
        """A degenerate spike is cleaned so the solid stays closed."""
        stats, _, mesh = _run(
            tmp_path,
            "matrix(1 0 0 1 0 0)",
            "M0 0 L2 0 L3 1 L2 0 L2 2 L0 2 Z",
        )

        assert stats.loops_removed == 1
        _assert_solid(mesh)
        assert mesh.volume == pytest.approx(4.0)
