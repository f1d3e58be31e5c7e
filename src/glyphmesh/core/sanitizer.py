"""Contour cleanup before tessellation.

Flattened path data often repeats vertices: a path that returns to its start
point before closing, or tiny spikes where a curve doubles back onto itself.
The tessellator cannot handle either (a repeated vertex is a zero-length
intersection), so they are removed here.

This does not deal with real intersections, only with the same vertex
appearing twice. A repeated vertex enclosing more than a couple of edges is
more likely a genuine self-intersection and is rejected rather than cut away.
"""

from glyphmesh.domain import EPSILON, Contour, Glyph, Point, points_equal
from glyphmesh.exceptions import DegenerateLoopTooLargeError

DEFAULT_MAX_LOOP_SPAN = 2


def _find_repeat(points: list[Point], epsilon: float) -> tuple[int, int] | None:
    """Return the first (k, j) with k < j whose vertices coincide."""
    n = len(points)
    for k in range(n):
        p0 = points[k]
        for j in range(k + 1, n):
            if points_equal(p0, points[j], epsilon):
                return k, j
    return None


def sanitize(
    contour: Contour,
    epsilon: float = EPSILON,
    max_loop_span: int = DEFAULT_MAX_LOOP_SPAN,
) -> tuple[Contour, int]:
    """Remove repeated-vertex loops and a duplicated closing point.

    Scans vertex pairs until a coincident pair (k, j) is found:

    - k is the first and j the last vertex: the contour is double closed,
      the last vertex is dropped. Not counted as a loop.
    - otherwise vertices k..j-1 are dropped, collapsing the loop onto
      vertex j, and the loop is counted.

    The scan restarts from the beginning after every removal, since a
    removal can expose a new match, until a full pass finds nothing.

    Args:
        contour: Contour to clean (left unmodified)
        epsilon: Per-axis tolerance for coincident vertices
        max_loop_span: Largest number of edges a removable loop may enclose

    Returns:
        Tuple of (cleaned contour, number of loops removed)

    Raises:
        DegenerateLoopTooLargeError: If a loop encloses more than max_loop_span edges
    """
    points = list(contour.points)
    loops = 0

    while (match := _find_repeat(points, epsilon)) is not None:
        k, j = match
        if k == 0 and j == len(points) - 1:
            del points[-1]
            continue

        span = j - k
        if span > max_loop_span:
            raise DegenerateLoopTooLargeError(span=span, start=k, end=j)
        del points[k:j]
        loops += 1

    return Contour(points=points), loops


def sanitize_glyph(
    glyph: Glyph,
    epsilon: float = EPSILON,
    max_loop_span: int = DEFAULT_MAX_LOOP_SPAN,
) -> int:
    """Sanitize every contour of a glyph in place.

    Args:
        glyph: Glyph whose contours are replaced by their cleaned versions
        epsilon: Per-axis tolerance for coincident vertices
        max_loop_span: Largest number of edges a removable loop may enclose

    Returns:
        Total number of loops removed across the glyph's contours
    """
    total = 0
    cleaned: list[Contour] = []
    for contour in glyph.contours:
        result, loops = sanitize(contour, epsilon=epsilon, max_loop_span=max_loop_span)
        cleaned.append(result)
        total += loops
    glyph.contours = cleaned
    return total
