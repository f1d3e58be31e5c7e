"""Vertex index allocation.

Every point of every glyph gets a dense, 0-based vertex index in traversal
order. Each glyph's block is reserved up front so glyphs can be processed
independently without sharing a running counter.
"""

from collections.abc import Sequence

from glyphmesh.domain import Glyph, IndexRange


def allocate_index_ranges(glyphs: Sequence[Glyph]) -> list[IndexRange]:
    """Reserve a contiguous vertex index range for each glyph.

    Must run after sanitization, since cleanup changes point counts.

    Args:
        glyphs: Glyphs in output order

    Returns:
        One IndexRange per glyph, contiguous and in the same order
    """
    ranges: list[IndexRange] = []
    start = 0
    for glyph in glyphs:
        count = glyph.point_count
        ranges.append(IndexRange(start=start, count=count))
        start += count
    return ranges
