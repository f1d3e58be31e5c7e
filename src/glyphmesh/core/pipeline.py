"""Orchestration of the extrusion pipeline.

Runs every glyph through the stages in order:

1. sanitize contours (loop and closing-duplicate removal)
2. apply the document transform
3. reserve a vertex index range per glyph
4. build the boundary edge index, triangulate, extrude

Processing is single-threaded. Every error is fatal: the run stops and no
output file is written, since a structurally wrong mesh is worse than none.
"""

import time
from collections.abc import Sequence
from pathlib import Path

import structlog
from fontTools.misc.transform import Transform

from glyphmesh.config import GlyphMeshSettings
from glyphmesh.core.edges import build_edge_index
from glyphmesh.core.extruder import MeshBuilder
from glyphmesh.core.indexing import allocate_index_ranges
from glyphmesh.core.sanitizer import sanitize_glyph
from glyphmesh.core.tessellator import PolygonTessellator, TriangleBatch
from glyphmesh.core.transform import apply_transform
from glyphmesh.domain import Glyph, Mesh
from glyphmesh.exceptions import GlyphMeshError
from glyphmesh.io import ObjWriter, SvgReader
from glyphmesh.utils import ProcessingLogger, ProcessingStats


class MeshPipeline:
    """Turns glyphs into one extruded mesh.

    Example:
        pipeline = MeshPipeline(GlyphMeshSettings())
        stats = pipeline.process(Path("logo.svg"), Path("logo.obj"))
    """

    def __init__(
        self,
        settings: GlyphMeshSettings,
        tessellator: PolygonTessellator | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings
            tessellator: Tessellation adapter (earcut-backed by default)
            logger: Structured logger (module logger if None)
        """
        self.settings = settings
        self.tessellator = tessellator or PolygonTessellator()
        self.logger = logger or structlog.get_logger("glyphmesh")
        self.processing_logger = ProcessingLogger(self.logger)

    def sanitize(self, glyphs: Sequence[Glyph]) -> int:
        """Sanitize every glyph in place.

        Returns:
            Total number of loops removed
        """
        geometry = self.settings.geometry
        total = 0
        for glyph in glyphs:
            try:
                loops = sanitize_glyph(
                    glyph,
                    epsilon=geometry.epsilon,
                    max_loop_span=geometry.max_loop_span,
                )
            except GlyphMeshError as e:
                self.processing_logger.log_glyph_error(glyph.name, e)
                raise
            self.processing_logger.log_glyph_sanitized(glyph.name, loops, glyph.source)
            total += loops
        return total

    def build(self, glyphs: Sequence[Glyph], transform: Transform) -> tuple[Mesh, ProcessingStats]:
        """Sanitize, transform, triangulate and extrude glyphs.

        Glyph contours are modified in place.

        Args:
            glyphs: Raw glyphs in output order
            transform: Document transform

        Returns:
            Tuple of (mesh, processing statistics)

        Raises:
            GlyphMeshError: On any geometry, tessellation or mesh error
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        self.sanitize(glyphs)
        apply_transform(transform, glyphs)
        ranges = allocate_index_ranges(glyphs)

        builder = MeshBuilder()
        for glyph, index_range in zip(glyphs, ranges, strict=True):
            start = time.time()
            self.processing_logger.log_glyph_start(
                glyph.name, len(glyph.contours), index_range.count
            )
            try:
                edges = build_edge_index(glyph, index_range.start)
                outcome = self.tessellator.tessellate(glyph, index_range.start)
                if isinstance(outcome, TriangleBatch) and outcome.restored_vertices:
                    self.processing_logger.log_restored_vertices(
                        glyph.name, outcome.restored_vertices
                    )
                triangles = self.tessellator.unwrap(glyph, outcome)
                result = builder.add_glyph(glyph, index_range, triangles, edges)
            except GlyphMeshError as e:
                self.processing_logger.log_glyph_error(glyph.name, e)
                raise

            self.processing_logger.log_glyph_complete(
                glyph.name,
                triangles=len(triangles),
                cap_faces=result.cap_faces,
                side_faces=result.side_faces,
                duration_ms=(time.time() - start) * 1000,
            )

        mesh = builder.build()
        stats.mesh_vertices = mesh.vertex_count
        stats.end_time = time.time()
        return mesh, stats

    def load_glyphs(self, svg_path: Path) -> tuple[list[Glyph], Transform]:
        """Read an SVG file into raw glyphs and its document transform.

        The flattening tolerance is scaled by the transform so it holds in
        output units.
        """
        with SvgReader(svg_path, require_transform=self.settings.input.require_transform) as reader:
            transform = reader.transform()
            tolerance = self.settings.geometry.scaled_curve_tolerance(transform[0], transform[3])
            glyphs = list(reader.iter_glyphs(tolerance))

        self.processing_logger.stats.transform = list(transform)

        self.logger.debug(
            "SVG loaded",
            path=str(svg_path),
            glyphs=len(glyphs),
            transform=list(transform),
            tolerance=tolerance,
        )
        return glyphs, transform

    def process(self, svg_path: Path, output_path: Path) -> ProcessingStats:
        """Convert an SVG file into an OBJ file.

        Args:
            svg_path: Input SVG document
            output_path: Destination OBJ path

        Returns:
            Processing statistics

        Raises:
            FileNotFoundError: If the SVG file does not exist
            GlyphMeshError: On any input, geometry, tessellation or output error
        """
        glyphs, transform = self.load_glyphs(svg_path)
        mesh, stats = self.build(glyphs, transform)

        ObjWriter(output_path, precision=self.settings.output.precision).save(mesh)
        self.logger.info(
            "OBJ written",
            path=str(output_path),
            vertices=mesh.vertex_count,
            faces=mesh.face_count,
        )
        return stats
