"""Glyph representation.

A glyph is the set of contours that came from one source path. Its contours
are triangulated together. Which contours are holes is decided by nesting
when the glyph is tessellated.
"""

from dataclasses import dataclass, field

from glyphmesh.domain.contour import Contour


@dataclass
class Glyph:
    """All contours of one source path.

    Attributes:
        name: Label used in diagnostics (e.g. "path-3")
        contours: Contours in source order
        source: Original path data, kept for diagnostics
    """

    name: str
    contours: list[Contour]
    source: str = field(default="", repr=False)

    def is_empty(self) -> bool:
        """Check if glyph has no contours.

        Returns:
            True if glyph has no contours, False otherwise
        """
        return len(self.contours) == 0

    @property
    def point_count(self) -> int:
        """Total number of points across all contours."""
        return sum(len(contour.points) for contour in self.contours)
