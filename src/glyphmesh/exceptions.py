"""Exception hierarchy for Glyphmesh."""


class GlyphMeshError(Exception):
    """Base exception for all Glyphmesh errors."""

    pass


class InputError(GlyphMeshError):
    """Errors related to reading and interpreting the input document."""

    pass


class SvgLoadError(InputError):
    """Error loading an SVG file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load SVG '{path}': {reason}")


class TransformSpecError(InputError):
    """Zero or several <g transform> attributes where exactly one is required."""

    def __init__(self, count: int) -> None:
        self.count = count
        if count == 0:
            message = "No transform found; exactly one <g transform> is required"
        else:
            message = f"Multiple transforms found ({count}); exactly one is allowed"
        super().__init__(message)


class InvalidTransformError(InputError):
    """Transform attribute could not be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid transform '{text}': {reason}")


class PathDataError(InputError):
    """Path data could not be parsed into contours."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid path data: {reason}")


class GeometryError(GlyphMeshError):
    """Errors in contour geometry."""

    pass


class DegenerateLoopTooLargeError(GeometryError):
    """A repeated vertex encloses more edges than a removable loop may have.

    Usually a real self-intersection rather than a degenerate spike.
    """

    def __init__(self, span: int, start: int, end: int) -> None:
        self.span = span
        self.start = start
        self.end = end
        super().__init__(
            f"Removed big loop: vertex {start} repeats at {end} "
            f"({span} edges between them)"
        )


class TessellationError(GlyphMeshError):
    """Errors reported by the polygon tessellator."""

    pass


class UnsupportedIntersectionError(TessellationError):
    """Tessellation would need a new vertex at a computed intersection."""

    def __init__(self, glyph_name: str, detail: str) -> None:
        self.glyph_name = glyph_name
        self.detail = detail
        super().__init__(
            f"Cannot tessellate '{glyph_name}': intersecting contours ({detail})"
        )


class TessellatorError(TessellationError):
    """Tessellator reported an error code."""

    def __init__(self, code: int, detail: str) -> None:
        self.code = code
        self.detail = detail
        super().__init__(f"Tessellator error number {code}: {detail}")


class UnexpectedPrimitiveTypeError(TessellationError):
    """Tessellator produced something other than independent triangles."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Expected triangles but got: {detail}")


class MeshError(GlyphMeshError):
    """Errors while assembling the output mesh."""

    pass


class MeshConsistencyError(MeshError):
    """Triangle references a vertex outside its glyph's index range."""

    def __init__(self, glyph_name: str, index: int, index_range: tuple[int, int]) -> None:
        self.glyph_name = glyph_name
        self.index = index
        self.index_range = index_range
        start, stop = index_range
        super().__init__(
            f"Triangle of '{glyph_name}' references vertex {index} "
            f"outside its range [{start}, {stop})"
        )


class OutputError(GlyphMeshError):
    """Errors related to writing the mesh."""

    pass


class ObjSaveError(OutputError):
    """Error saving an OBJ file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save OBJ '{path}': {reason}")
