"""Extrusion of triangulated glyphs into a closed solid.

Every input vertex i is doubled: (x, y, 0) at 1-based position 2i+1 and
(x, y, 1) at 2i+2. For each counter-clockwise triangle (i0, i1, i2):

- the z=0 cap is emitted reversed, (2*i2+1, 2*i1+1, 2*i0+1), facing -z
- the z=1 cap keeps the triangle's order, (2*i0+2, 2*i1+2, 2*i2+2), facing +z
- each triangle edge that is a boundary edge of the original contours gets
  a side quad. Walking the edges in clockwise order ((i2, i1), (i1, i0),
  (i0, i2)) puts the glyph's interior on the right, which makes the quad
  face outward for shells and holes alike.

The original contour orientation is never consulted: a triangle knows
which side of its boundary edge is inside.
"""

from dataclasses import dataclass

from glyphmesh.core.edges import BoundaryEdgeSet, is_boundary_edge
from glyphmesh.domain import Glyph, IndexRange, Mesh, Triangle
from glyphmesh.exceptions import MeshConsistencyError

Z_FRONT = 0.0
Z_BACK = 1.0


def front_index(i: int) -> int:
    """1-based output index of vertex i on the z=0 plane."""
    return 2 * i + 1


def back_index(i: int) -> int:
    """1-based output index of vertex i on the z=1 plane."""
    return 2 * i + 2


@dataclass
class ExtrusionResult:
    """Faces contributed by one glyph.

    Attributes:
        cap_faces: Triangles on the z=0 and z=1 caps
        side_faces: Triangles on the side walls
    """

    cap_faces: int = 0
    side_faces: int = 0

    @property
    def side_walls(self) -> int:
        """Number of side quads (two triangles each)."""
        return self.side_faces // 2


class MeshBuilder:
    """Accumulates extruded glyphs into one mesh.

    Glyphs must be added in index order: each glyph's range has to start
    where the previous one stopped, so vertex lines line up with indices.

    Example:
        builder = MeshBuilder()
        builder.add_glyph(glyph, index_range, triangles, edges)
        mesh = builder.build()
    """

    def __init__(self) -> None:
        self._mesh = Mesh()
        self._next_index = 0

    def add_glyph(
        self,
        glyph: Glyph,
        index_range: IndexRange,
        triangles: list[Triangle],
        edges: BoundaryEdgeSet,
    ) -> ExtrusionResult:
        """Emit the doubled vertices, caps and side walls of one glyph.

        Args:
            glyph: Sanitized, transformed glyph
            index_range: Vertex indices reserved for the glyph
            triangles: Counter-clockwise triangles over global indices
            edges: Boundary edges of the glyph

        Returns:
            Face counts for the glyph

        Raises:
            MeshConsistencyError: If the range is out of order or a triangle
                references a vertex outside it
        """
        if index_range.start != self._next_index or index_range.count != glyph.point_count:
            raise MeshConsistencyError(
                glyph.name,
                index_range.start,
                (self._next_index, self._next_index + glyph.point_count),
            )

        for contour in glyph.contours:
            for point in contour.points:
                self._mesh.vertices.append((point.x, point.y, Z_FRONT))
                self._mesh.vertices.append((point.x, point.y, Z_BACK))
        self._next_index = index_range.stop

        result = ExtrusionResult()
        for triangle in triangles:
            for index in triangle.indices():
                if index not in index_range:
                    raise MeshConsistencyError(
                        glyph.name, index, (index_range.start, index_range.stop)
                    )
            result.cap_faces += self._emit_caps(triangle)
            for u, v in triangle.edges():
                if is_boundary_edge(edges, u, v):
                    result.side_faces += self._emit_side_quad(front_index(u), front_index(v))

        self._mesh.cap_faces += result.cap_faces
        self._mesh.side_faces += result.side_faces
        return result

    def build(self) -> Mesh:
        """Return the accumulated mesh."""
        return self._mesh

    def _emit_caps(self, triangle: Triangle) -> int:
        i0, i1, i2 = triangle.indices()
        self._mesh.faces.append((front_index(i2), front_index(i1), front_index(i0)))
        self._mesh.faces.append((back_index(i0), back_index(i1), back_index(i2)))
        return 2

    def _emit_side_quad(self, a: int, b: int) -> int:
        # a and b are z=0 indices; a + 1 and b + 1 are their z=1 twins.
        self._mesh.faces.append((a, a + 1, b))
        self._mesh.faces.append((b, a + 1, b + 1))
        return 2
