"""Affine transform application.

Transforms are fontTools Transform objects. Their coefficient order
(xx, xy, yx, yy, dx, dy) is the SVG matrix(a, b, c, d, e, f) order:

    x' = a*x + c*y + e
    y' = b*x + d*y + f
"""

from collections.abc import Iterable

from fontTools.misc.transform import Identity, Transform

from glyphmesh.domain import Contour, Glyph, Point


def is_identity(matrix: Transform) -> bool:
    """Check whether a transform leaves every point unchanged."""
    return tuple(matrix) == tuple(Identity)


def transform_contour(matrix: Transform, contour: Contour) -> None:
    """Transform a contour's points in place.

    Args:
        matrix: Transform to apply
        contour: Contour whose point list is replaced
    """
    contour.points = [Point(*matrix.transformPoint((p.x, p.y))) for p in contour.points]


def apply_transform(matrix: Transform, glyphs: Iterable[Glyph]) -> None:
    """Apply a transform to every point of every glyph in place.

    Only coordinates change; contour sizes and point order are kept, so
    vertex indices and boundary edges are unaffected.

    Args:
        matrix: Transform to apply
        glyphs: Glyphs to transform
    """
    if is_identity(matrix):
        return

    for glyph in glyphs:
        for contour in glyph.contours:
            transform_contour(matrix, contour)
