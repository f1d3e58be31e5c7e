"""Boundary edge index.

Records every edge of the original contours so the mesh builder can tell a
boundary edge (which needs a side wall) from a diagonal the tessellator
introduced. Both directions are stored: contour orientation is not trusted,
and storing both saves checking twice per triangle edge.
"""

from glyphmesh.domain import EdgeKey, Glyph

BoundaryEdgeSet = frozenset[EdgeKey]


def build_edge_index(glyph: Glyph, base_index: int) -> BoundaryEdgeSet:
    """Build the set of boundary edges of a glyph.

    Vertex indices are assigned in traversal order (contour by contour,
    point by point) starting at base_index, matching the indices handed to
    the tessellator.

    Args:
        glyph: Sanitized glyph
        base_index: Vertex index of the glyph's first point

    Returns:
        Frozen set of (u, v) pairs, each edge present in both directions
    """
    edges: set[EdgeKey] = set()
    index = base_index

    for contour in glyph.contours:
        n = len(contour.points)
        for k in range(n):
            current = index + k
            prev = index + (k - 1 if k > 0 else n - 1)
            edges.add((prev, current))
            edges.add((current, prev))
        index += n

    return frozenset(edges)


def is_boundary_edge(edges: BoundaryEdgeSet, u: int, v: int) -> bool:
    """Check whether (u, v) is an edge of the original contours."""
    return (u, v) in edges
