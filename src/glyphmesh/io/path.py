"""Conversion of SVG path data into polygonal contours.

Path data is parsed by fontTools' SVG path parser, which drives a pen.
The pen here flattens every curve into line segments at a fixed tolerance
and collects one contour per subpath. Open subpaths are treated as
implicitly closed.
"""

from fontTools.pens.basePen import BasePen
from fontTools.svgLib.path import parse_path

from glyphmesh.domain import Contour, Point
from glyphmesh.exceptions import PathDataError
from glyphmesh.io._bezier import flatten_cubic, flatten_quadratic


def _point(pt: tuple[float, float]) -> Point:
    return Point(float(pt[0]), float(pt[1]))


class FlatteningPen(BasePen):
    """Pen that records subpaths as flattened contours.

    Example:
        pen = FlatteningPen(tolerance=0.1)
        parse_path("M0 0 L10 0 Q10 10 0 10 Z", pen)
        contours = pen.contours
    """

    def __init__(self, tolerance: float) -> None:
        """Initialize the pen.

        Args:
            tolerance: Maximum distance between a curve and its polyline
        """
        super().__init__(glyphSet=None)
        self.tolerance = tolerance
        self.contours: list[Contour] = []
        self._points: list[Point] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._finish()
        self._points = [_point(pt)]

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._points.append(_point(pt))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        controls = [self._points[-1], _point(pt1), _point(pt2), _point(pt3)]
        self._points.extend(flatten_cubic(controls, self.tolerance)[1:])

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        controls = [self._points[-1], _point(pt1), _point(pt2)]
        self._points.extend(flatten_quadratic(controls, self.tolerance)[1:])

    def _closePath(self) -> None:
        self._finish()

    def _endPath(self) -> None:
        self._finish()

    def _finish(self) -> None:
        if self._points:
            self.contours.append(Contour(points=self._points))
            self._points = []


def parse_path_contours(path_data: str, tolerance: float) -> list[Contour]:
    """Parse SVG path data into flattened contours.

    Contours are returned as drawn: a subpath that ends on its start point
    keeps the duplicate, which the sanitizer removes later.

    Args:
        path_data: Value of a <path> element's d attribute
        tolerance: Curve flattening tolerance in path units

    Returns:
        One contour per subpath

    Raises:
        PathDataError: If the path data is malformed
    """
    pen = FlatteningPen(tolerance)
    try:
        parse_path(path_data, pen)
    except (ValueError, IndexError) as e:
        raise PathDataError(str(e)) from e
    pen._finish()
    return pen.contours
