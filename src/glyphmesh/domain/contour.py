"""Core geometric types for contour representation.

This module defines the fundamental geometric types used throughout glyphmesh:
- Point: An immutable 2D point
- Contour: A closed polyline, stored without a duplicated closing point
- points_equal: Epsilon-aware vertex comparison
"""

from dataclasses import dataclass

# Two coordinates closer than this are the same vertex.
EPSILON = 1e-11


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. Identity is purely its coordinates; algorithms
    compare points with points_equal rather than ==.

    Attributes:
        x: X coordinate in document units
        y: Y coordinate in document units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


def points_equal(a: Point, b: Point, epsilon: float = EPSILON) -> bool:
    """Check whether two points are equal within epsilon on both axes.

    Args:
        a: First point
        b: Second point
        epsilon: Maximum allowed difference per coordinate

    Returns:
        True if |a.x - b.x| <= epsilon and |a.y - b.y| <= epsilon
    """
    dx = a.x - b.x
    dy = a.y - b.y
    return -epsilon <= dx <= epsilon and -epsilon <= dy <= epsilon


@dataclass
class Contour:
    """A closed contour representing a shape boundary.

    The edge from the last point back to the first is real but is not
    stored as a duplicate point. Winding direction carries no meaning:
    holes and shells are told apart by containment, not orientation.

    Attributes:
        points: List of points forming the contour
    """

    points: list[Point]

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Returns:
            Signed area (positive for counter-clockwise)
        """
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return area / 2.0

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point is inside contour using ray casting algorithm.

        Args:
            x: X coordinate of point to test
            y: Y coordinate of point to test

        Returns:
            True if point is inside contour, False otherwise
        """
        n = len(self.points)
        if n < 3:
            return False

        inside = False
        j = n - 1

        for i in range(n):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def to_tuples(self) -> list[tuple[float, float]]:
        """Return the points as plain (x, y) tuples."""
        return [p.to_tuple() for p in self.points]

    @classmethod
    def from_tuples(cls, coords: list[tuple[float, float]]) -> "Contour":
        """Build a contour from (x, y) pairs.

        Args:
            coords: Sequence of (x, y) coordinates

        Returns:
            Contour instance
        """
        return cls(points=[Point(float(x), float(y)) for x, y in coords])
