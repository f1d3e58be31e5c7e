"""Domain models for glyphmesh.

This module contains the domain models representing contours, glyphs and
the extruded mesh. They are independent of the SVG, tessellation and OBJ
libraries used around them.

Key classes:
- Point: An immutable 2D point
- Contour: A closed contour without a duplicated closing point
- Glyph: The contours of one source path
- Triangle: A counter-clockwise vertex index triple
- IndexRange: Vertex indices reserved for one glyph
- Mesh: Doubled 3D vertices and 1-based faces
"""

from glyphmesh.domain.contour import EPSILON, Contour, Point, points_equal
from glyphmesh.domain.glyph import Glyph
from glyphmesh.domain.mesh import EdgeKey, IndexRange, Mesh, Triangle

__all__: list[str] = [
    "EPSILON",
    # Core types
    "Point",
    "Contour",
    "Glyph",
    # Mesh types
    "EdgeKey",
    "IndexRange",
    "Mesh",
    "Triangle",
    # Helpers
    "points_equal",
]
