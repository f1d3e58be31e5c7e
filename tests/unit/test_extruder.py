"""Tests for the extrusion mesh builder.

These use hand-written triangles so face output can be checked exactly.
"""

import pytest

from glyphmesh.core.edges import build_edge_index
from glyphmesh.core.extruder import MeshBuilder, back_index, front_index
from glyphmesh.domain import Contour, Glyph, IndexRange, Triangle
from glyphmesh.exceptions import MeshConsistencyError

SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
SQUARE_TRIANGLES = [Triangle(0, 1, 2), Triangle(0, 2, 3)]


def _glyph(*contours: list[tuple[float, float]], name: str = "path-0") -> Glyph:
    return Glyph(name=name, contours=[Contour.from_tuples(c) for c in contours])


def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normal(vertices, face):
    p0, p1, p2 = (vertices[i - 1] for i in face)
    u = tuple(p1[k] - p0[k] for k in range(3))
    v = tuple(p2[k] - p0[k] for k in range(3))
    return _cross(u, v)


@pytest.fixture
def square_mesh():
    """Extruded unit square."""
    glyph = _glyph(SQUARE)
    builder = MeshBuilder()
    result = builder.add_glyph(
        glyph, IndexRange(0, 4), SQUARE_TRIANGLES, build_edge_index(glyph, 0)
    )
    return builder.build(), result


class TestVertexLayout:
    """Tests for vertex doubling."""

    def test_index_mapping(self) -> None:
        """Vertex i sits at 2i+1 on z=0 and 2i+2 on z=1."""
        assert front_index(0) == 1
        assert back_index(0) == 2
        assert front_index(3) == 7
        assert back_index(3) == 8

    def test_vertices_doubled(self, square_mesh) -> None:
        """Each input point yields a z=0 and a z=1 vertex, interleaved."""
        mesh, _ = square_mesh

        assert mesh.vertices == [
            (0.0, 0.0, 0.0), (0.0, 0.0, 1.0),
            (1.0, 0.0, 0.0), (1.0, 0.0, 1.0),
            (1.0, 1.0, 0.0), (1.0, 1.0, 1.0),
            (0.0, 1.0, 0.0), (0.0, 1.0, 1.0),
        ]


class TestFaces:
    """Tests for cap and side face emission."""

    def test_square_faces(self, square_mesh) -> None:
        """Caps then side quads, per triangle, in edge order."""
        mesh, result = square_mesh

        assert mesh.faces == [
            # Triangle(0, 1, 2)
            (5, 3, 1), (2, 4, 6),
            (5, 6, 3), (3, 6, 4),
            (3, 4, 1), (1, 4, 2),
            # Triangle(0, 2, 3)
            (7, 5, 1), (2, 6, 8),
            (7, 8, 5), (5, 8, 6),
            (1, 2, 7), (7, 2, 8),
        ]
        assert result.cap_faces == 4
        assert result.side_faces == 8
        assert result.side_walls == 4

    def test_no_wall_on_diagonal(self, square_mesh) -> None:
        """The 0-2 diagonal gets no side quad."""
        mesh, _ = square_mesh

        for face in mesh.faces:
            zero_plane = {i for i in face if i % 2 == 1}
            assert zero_plane != {1, 5}

    def test_normals_point_outward(self, square_mesh) -> None:
        """Every face normal points away from the unit cube's center."""
        mesh, _ = square_mesh

        for face in mesh.faces:
            normal = _normal(mesh.vertices, face)
            centroid = [sum(mesh.vertices[i - 1][k] for i in face) / 3 for k in range(3)]
            outward = [centroid[0] - 0.5, centroid[1] - 0.5, centroid[2] - 0.5]
            assert sum(n * o for n, o in zip(normal, outward)) > 0

    def test_every_edge_shared_twice(self, square_mesh) -> None:
        """Each directed edge appears once and its reverse once."""
        mesh, _ = square_mesh

        directed = []
        for a, b, c in mesh.faces:
            directed.extend([(a, b), (b, c), (c, a)])

        assert len(directed) == len(set(directed))
        assert all((v, u) in set(directed) for u, v in directed)

    def test_mesh_totals(self, square_mesh) -> None:
        """Mesh keeps cap and side face totals."""
        mesh, _ = square_mesh

        assert mesh.vertex_count == 8
        assert mesh.face_count == 12
        assert mesh.cap_faces == 4
        assert mesh.side_faces == 8


class TestMultipleGlyphs:
    """Tests for accumulating several glyphs."""

    def test_second_glyph_offsets(self) -> None:
        """A second glyph's faces use its own index block."""
        first = _glyph(SQUARE, name="a")
        second = _glyph([(5, 0), (6, 0), (5, 1)], name="b")
        builder = MeshBuilder()

        builder.add_glyph(first, IndexRange(0, 4), SQUARE_TRIANGLES, build_edge_index(first, 0))
        result = builder.add_glyph(
            second, IndexRange(4, 3), [Triangle(4, 5, 6)], build_edge_index(second, 4)
        )
        mesh = builder.build()

        assert result.cap_faces == 2
        assert result.side_faces == 6
        assert mesh.vertex_count == 14
        assert (13, 11, 9) in mesh.faces
        assert (10, 12, 14) in mesh.faces
        assert max(i for face in mesh.faces for i in face) == 14

    def test_empty_glyph_adds_nothing(self) -> None:
        """A glyph without points contributes no vertices or faces."""
        builder = MeshBuilder()
        result = builder.add_glyph(_glyph(), IndexRange(0, 0), [], frozenset())

        assert result.cap_faces == 0
        assert builder.build().is_empty()


class TestConsistency:
    """Tests for index consistency checks."""

    def test_foreign_index_rejected(self) -> None:
        """A triangle outside the glyph's range is an error."""
        glyph = _glyph(SQUARE)
        builder = MeshBuilder()

        with pytest.raises(MeshConsistencyError) as exc_info:
            builder.add_glyph(
                glyph, IndexRange(0, 4), [Triangle(0, 1, 7)], build_edge_index(glyph, 0)
            )

        assert exc_info.value.index == 7
        assert exc_info.value.glyph_name == "path-0"

    def test_out_of_order_range_rejected(self) -> None:
        """Ranges must follow on from the previous glyph."""
        glyph = _glyph(SQUARE)
        builder = MeshBuilder()

        with pytest.raises(MeshConsistencyError):
            builder.add_glyph(glyph, IndexRange(4, 4), [], build_edge_index(glyph, 4))

    def test_wrong_range_size_rejected(self) -> None:
        """The range must cover exactly the glyph's points."""
        glyph = _glyph(SQUARE)
        builder = MeshBuilder()

        with pytest.raises(MeshConsistencyError):
            builder.add_glyph(glyph, IndexRange(0, 3), [], build_edge_index(glyph, 0))
