"""Mesh-side domain types.

- EdgeKey: A directed pair of vertex indices
- Triangle: Three vertex indices in counter-clockwise order
- IndexRange: The contiguous vertex index block reserved for one glyph
- Mesh: The extruded output (3D vertices and 1-based faces)
"""

from dataclasses import dataclass, field

EdgeKey = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Triangle:
    """A triangle over original (non-doubled) vertex indices.

    Vertices are counter-clockwise when seen from +z.
    """

    i0: int
    i1: int
    i2: int

    def indices(self) -> tuple[int, int, int]:
        return (self.i0, self.i1, self.i2)

    def edges(self) -> tuple[EdgeKey, EdgeKey, EdgeKey]:
        """Directed edges in clockwise order: (i2, i1), (i1, i0), (i0, i2)."""
        return ((self.i2, self.i1), (self.i1, self.i0), (self.i0, self.i2))


@dataclass(frozen=True, slots=True)
class IndexRange:
    """Contiguous block of vertex indices reserved for one glyph.

    Attributes:
        start: First vertex index of the glyph
        count: Number of vertices in the glyph
    """

    start: int
    count: int

    @property
    def stop(self) -> int:
        return self.start + self.count

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.stop


@dataclass
class Mesh:
    """Extruded solid mesh.

    Vertex i of the input lives at 1-based positions 2i+1 (z=0) and
    2i+2 (z=1). Faces use 1-based vertex numbering.

    Attributes:
        vertices: 3D vertex positions in emission order
        faces: Triangles as 1-based vertex index triples
        cap_faces: Number of cap triangles (front and back)
        side_faces: Number of side wall triangles
    """

    vertices: list[tuple[float, float, float]] = field(default_factory=list)
    faces: list[tuple[int, int, int]] = field(default_factory=list)
    cap_faces: int = 0
    side_faces: int = 0

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def is_empty(self) -> bool:
        return not self.faces
