"""Core geometry pipeline for glyphmesh.

This module contains the algorithms that turn raw contours into an
extruded solid:

- Contour sanitization (repeated-vertex loops, double closing)
- Affine transform application
- Vertex index allocation
- Boundary edge indexing
- Polygon tessellation (adapter over mapbox-earcut)
- Extrusion into caps and side walls

Apart from MeshBuilder and MeshPipeline, all services are stateless.

Key functions:
- sanitize: Clean one contour, counting removed loops
- sanitize_glyph: Clean every contour of a glyph
- apply_transform: Transform glyph coordinates in place
- allocate_index_ranges: Reserve vertex indices per glyph
- build_edge_index: Collect a glyph's boundary edges

Key classes:
- PolygonTessellator: Triangulates glyphs
- MeshBuilder: Accumulates extruded glyphs into a mesh
- MeshPipeline: Runs the whole conversion
"""

from glyphmesh.core.edges import BoundaryEdgeSet, build_edge_index, is_boundary_edge
from glyphmesh.core.extruder import ExtrusionResult, MeshBuilder
from glyphmesh.core.indexing import allocate_index_ranges
from glyphmesh.core.pipeline import MeshPipeline
from glyphmesh.core.sanitizer import sanitize, sanitize_glyph
from glyphmesh.core.tessellator import (
    IntersectionRequired,
    PolygonTessellator,
    PrimitiveMismatch,
    TessellationOutcome,
    TessellatorFailure,
    TessErrorCode,
    TriangleBatch,
)
from glyphmesh.core.transform import apply_transform, is_identity

__all__ = [
    "BoundaryEdgeSet",
    # Extrusion
    "ExtrusionResult",
    # Tessellation outcomes
    "IntersectionRequired",
    "MeshBuilder",
    # Pipeline
    "MeshPipeline",
    "PolygonTessellator",
    "PrimitiveMismatch",
    "TessErrorCode",
    "TessellationOutcome",
    "TessellatorFailure",
    "TriangleBatch",
    # Functions
    "allocate_index_ranges",
    "apply_transform",
    "build_edge_index",
    "is_boundary_edge",
    "is_identity",
    "sanitize",
    "sanitize_glyph",
]
