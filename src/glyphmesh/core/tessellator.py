"""Polygon tessellation adapter.

Wraps a constrained triangulation backend (mapbox-earcut by default) behind
a synchronous call that returns one of a closed set of outcomes:

- TriangleBatch: the glyph was triangulated
- IntersectionRequired: a new vertex would be needed at an intersection
- TessellatorFailure: the backend failed, with a numeric error code
- PrimitiveMismatch: the backend output cannot be read as triangles

Contract:
- Every input vertex is tagged with its global vertex index, and every
  triangle refers back to those tags only. The backend never synthesizes
  vertices; if it references one that was not supplied, the input needed
  an intersection vertex and is rejected.
- Every supplied vertex is used by some triangle, so every boundary edge is
  a triangle edge. Collinear vertices the backend drops are put back; one
  that cannot be is a failure.
- The extrusion normal is +z. Triangles come back counter-clockwise.
- Contour orientation does not matter. A contour nested inside an odd
  number of other contours is a hole of the innermost one containing it.
- Intersecting or touching contours are rejected up front, since ear
  clipping would silently produce overlapping triangles for them.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

import mapbox_earcut
import numpy as np
from shapely.geometry import LinearRing, Polygon
from shapely.validation import explain_validity

from glyphmesh.domain import Contour, Glyph, Triangle
from glyphmesh.exceptions import (
    TessellatorError,
    UnexpectedPrimitiveTypeError,
    UnsupportedIntersectionError,
)

# Coordinates beyond this are rejected, as the GLU tessellator does.
MAX_COORD = 1e150

# Relative tolerance for a dropped vertex to count as lying on an edge.
COLLINEAR_TOLERANCE = 1e-9

TriangulationBackend = Callable[[np.ndarray, np.ndarray], np.ndarray]


class TessErrorCode(IntEnum):
    """Error numbers reported by the adapter."""

    COORD_TOO_LARGE = 100155
    BACKEND_FAILURE = 100160
    VERTEX_DROPPED = 100161


@dataclass(frozen=True)
class TriangleBatch:
    """Successful tessellation.

    Attributes:
        triangles: Counter-clockwise triangles over global vertex indices
        restored_vertices: Collinear vertices the backend dropped that were
            put back by splitting the triangle covering them
    """

    triangles: list[Triangle]
    restored_vertices: int = 0


@dataclass(frozen=True)
class IntersectionRequired:
    """Input needs a vertex at a computed intersection."""

    detail: str


@dataclass(frozen=True)
class TessellatorFailure:
    """Backend reported an error."""

    code: int
    detail: str


@dataclass(frozen=True)
class PrimitiveMismatch:
    """Backend output is not a list of independent triangles."""

    detail: str


TessellationOutcome = TriangleBatch | IntersectionRequired | TessellatorFailure | PrimitiveMismatch


@dataclass
class _Ring:
    """A contour prepared for the backend."""

    contour: Contour
    base_index: int
    depth: int = 0
    parent: int | None = None
    holes: list[int] = field(default_factory=list)


def earcut_backend(vertices: np.ndarray, ring_ends: np.ndarray) -> np.ndarray:
    """Triangulate one polygon with holes using mapbox-earcut.

    Args:
        vertices: (N, 2) float64 array, shell first, then each hole
        ring_ends: uint32 array of cumulative ring end offsets

    Returns:
        Flat array of local vertex indices, three per triangle
    """
    return mapbox_earcut.triangulate_float64(vertices, ring_ends)


class PolygonTessellator:
    """Triangulates glyphs into counter-clockwise triangles.

    Stateless apart from the backend; one instance can serve every glyph.

    Example:
        tessellator = PolygonTessellator()
        triangles = tessellator.triangulate(glyph, base_index=0)
    """

    def __init__(self, backend: TriangulationBackend = earcut_backend) -> None:
        """Initialize the tessellator.

        Args:
            backend: Function triangulating one shell with its holes
        """
        self._backend = backend

    def tessellate(self, glyph: Glyph, base_index: int) -> TessellationOutcome:
        """Triangulate a glyph and report the outcome.

        Args:
            glyph: Sanitized glyph
            base_index: Global vertex index of the glyph's first point

        Returns:
            One of TriangleBatch, IntersectionRequired, TessellatorFailure,
            PrimitiveMismatch
        """
        rings = self._prepare_rings(glyph, base_index)

        for ring in rings:
            for point in ring.contour.points:
                if not (math.isfinite(point.x) and math.isfinite(point.y)) or (
                    abs(point.x) > MAX_COORD or abs(point.y) > MAX_COORD
                ):
                    return TessellatorFailure(
                        code=TessErrorCode.COORD_TOO_LARGE,
                        detail=f"coordinate out of range: ({point.x}, {point.y})",
                    )

        intersection = _find_intersection(rings)
        if intersection is not None:
            return IntersectionRequired(detail=intersection)

        _assign_nesting(rings)

        triangles: list[Triangle] = []
        restored = 0
        for shell in rings:
            if shell.depth % 2 != 0:
                continue
            members = [shell] + [rings[i] for i in shell.holes]
            outcome = self._triangulate_shell(members)
            if not isinstance(outcome, TriangleBatch):
                return outcome
            triangles.extend(outcome.triangles)
            restored += outcome.restored_vertices

        return TriangleBatch(triangles=triangles, restored_vertices=restored)

    def triangulate(self, glyph: Glyph, base_index: int) -> list[Triangle]:
        """Triangulate a glyph, raising on any outcome other than success.

        Args:
            glyph: Sanitized glyph
            base_index: Global vertex index of the glyph's first point

        Returns:
            Counter-clockwise triangles over global vertex indices

        Raises:
            UnsupportedIntersectionError: If an intersection vertex would be needed
            TessellatorError: If the backend failed
            UnexpectedPrimitiveTypeError: If the output is not triangles
        """
        return self.unwrap(glyph, self.tessellate(glyph, base_index))

    def unwrap(self, glyph: Glyph, outcome: TessellationOutcome) -> list[Triangle]:
        """Return the triangles of a successful outcome, raise otherwise.

        Args:
            glyph: Glyph the outcome belongs to (for error messages)
            outcome: Result of tessellate()

        Returns:
            Counter-clockwise triangles over global vertex indices
        """
        if isinstance(outcome, TriangleBatch):
            return outcome.triangles
        if isinstance(outcome, IntersectionRequired):
            raise UnsupportedIntersectionError(glyph.name, outcome.detail)
        if isinstance(outcome, TessellatorFailure):
            raise TessellatorError(outcome.code, outcome.detail)
        raise UnexpectedPrimitiveTypeError(outcome.detail)

    def _prepare_rings(self, glyph: Glyph, base_index: int) -> list[_Ring]:
        """Assign each contour its first global index; skip arealess ones."""
        rings: list[_Ring] = []
        index = base_index
        for contour in glyph.contours:
            if len(contour.points) >= 3:
                rings.append(_Ring(contour=contour, base_index=index))
            index += len(contour.points)
        return rings

    def _triangulate_shell(self, members: list[_Ring]) -> TessellationOutcome:
        """Run the backend on one shell with its holes.

        Args:
            members: Shell ring followed by its hole rings

        Returns:
            TriangleBatch on success, otherwise the failure outcome
        """
        coords: list[tuple[float, float]] = []
        tags: list[int] = []
        ends: list[int] = []
        for ring in members:
            coords.extend(ring.contour.to_tuples())
            tags.extend(range(ring.base_index, ring.base_index + len(ring.contour.points)))
            ends.append(len(coords))

        vertices = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        ring_ends = np.asarray(ends, dtype=np.uint32)

        try:
            result = self._backend(vertices, ring_ends)
        except (ValueError, TypeError, RuntimeError) as exc:
            return TessellatorFailure(code=TessErrorCode.BACKEND_FAILURE, detail=str(exc))

        local = np.asarray(result).ravel()
        if local.size % 3 != 0:
            return PrimitiveMismatch(
                detail=f"{local.size} vertex references, not a multiple of 3"
            )

        faces: list[tuple[int, int, int]] = []
        for k in range(0, local.size, 3):
            a, b, c = (int(i) for i in local[k : k + 3])
            if max(a, b, c) >= len(tags) or min(a, b, c) < 0:
                return IntersectionRequired(
                    detail=f"backend referenced vertex {max(a, b, c)} that was not supplied"
                )
            if _orientation(coords[a], coords[b], coords[c]) < 0:
                b, c = c, b
            faces.append((a, b, c))

        used = {i for face in faces for i in face}
        dropped = [i for i in range(len(tags)) if i not in used]
        for v in dropped:
            faces, placed = _insert_on_edge(faces, coords, v)
            if not placed:
                x, y = coords[v]
                return TessellatorFailure(
                    code=TessErrorCode.VERTEX_DROPPED,
                    detail=f"vertex {tags[v]} at ({x:g}, {y:g}) is on no triangle edge",
                )

        triangles = [Triangle(tags[a], tags[b], tags[c]) for a, b, c in faces]
        return TriangleBatch(triangles=triangles, restored_vertices=len(dropped))


def _orientation(
    p0: tuple[float, float], p1: tuple[float, float], p2: tuple[float, float]
) -> float:
    """Twice the signed area of a triangle (positive if counter-clockwise)."""
    return (p1[0] - p0[0]) * (p2[1] - p0[1]) - (p2[0] - p0[0]) * (p1[1] - p0[1])


def _on_segment(p: tuple[float, float], a: tuple[float, float], b: tuple[float, float]) -> bool:
    """Check whether p lies on segment ab, strictly between its ends."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return False
    if abs(_orientation(a, b, p)) > COLLINEAR_TOLERANCE * length_sq:
        return False
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    return 0.0 < t < 1.0


def _insert_on_edge(
    faces: list[tuple[int, int, int]],
    coords: list[tuple[float, float]],
    v: int,
) -> tuple[list[tuple[int, int, int]], bool]:
    """Put a dropped vertex back onto the triangle edge passing through it.

    Earcut removes vertices collinear with their neighbours, replacing the
    boundary edges (u, v) and (v, w) with a single edge (u, w). Splitting
    every triangle (u, w, x) into (u, v, x) and (v, w, x) brings the original
    boundary edges back; orientation is unchanged.

    Args:
        faces: Counter-clockwise triangles over local indices
        coords: Local vertex coordinates
        v: Local index of the dropped vertex

    Returns:
        Tuple of (new triangle list, whether any triangle was split)
    """
    result: list[tuple[int, int, int]] = []
    placed = False
    for i0, i1, i2 in faces:
        for a, b, c in ((i0, i1, i2), (i1, i2, i0), (i2, i0, i1)):
            if _on_segment(coords[v], coords[a], coords[b]):
                result.append((a, v, c))
                result.append((v, b, c))
                placed = True
                break
        else:
            result.append((i0, i1, i2))
    return result, placed


def _find_intersection(rings: list[_Ring]) -> str | None:
    """Describe the first self-intersection or contact between rings.

    Args:
        rings: Rings of one glyph

    Returns:
        Human readable description, or None if the rings are disjoint and simple
    """
    shapes = [LinearRing(ring.contour.to_tuples()) for ring in rings]

    for idx, shape in enumerate(shapes):
        if not shape.is_simple:
            reason = explain_validity(Polygon(shape))
            return f"contour {idx} intersects itself: {reason}"

    for i in range(len(shapes)):
        for j in range(i + 1, len(shapes)):
            if shapes[i].intersects(shapes[j]):
                contact = shapes[i].intersection(shapes[j]).representative_point()
                return f"contours {i} and {j} meet near ({contact.x:g}, {contact.y:g})"

    return None


def _assign_nesting(rings: list[_Ring]) -> None:
    """Compute nesting depth and parent of every ring.

    Rings are known to be disjoint, so testing one vertex is enough to
    decide containment. The parent is the deepest containing ring.
    """
    containers: list[list[int]] = []
    for idx, ring in enumerate(rings):
        test = ring.contour.points[0]
        containers.append([
            other_idx
            for other_idx, other in enumerate(rings)
            if other_idx != idx and other.contour.contains_point(test.x, test.y)
        ])

    for idx, ring in enumerate(rings):
        ring.depth = len(containers[idx])
        if containers[idx]:
            ring.parent = max(containers[idx], key=lambda i: len(containers[i]))

    for idx, ring in enumerate(rings):
        if ring.depth % 2 == 1 and ring.parent is not None:
            rings[ring.parent].holes.append(idx)
