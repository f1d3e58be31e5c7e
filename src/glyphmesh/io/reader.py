"""SVG reader for extracting path outlines.

This module provides the SvgReader class for loading an SVG document and
turning its <path> elements into glyph domain models.
"""

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from fontTools.misc.transform import Identity, Transform

from glyphmesh.domain import Glyph
from glyphmesh.exceptions import SvgLoadError, TransformSpecError
from glyphmesh.io.path import parse_path_contours
from glyphmesh.io.transform import parse_transform


def _local_name(tag: str) -> str:
    """Strip the XML namespace from an element tag."""
    return tag.rsplit("}", 1)[-1]


class SvgReader:
    """Loads SVG documents and extracts path data.

    Only <path> elements are read. The document's coordinate system is
    given by the transform attribute of a single <g> element.

    Example:
        with SvgReader(Path("logo.svg")) as reader:
            transform = reader.transform()
            for glyph in reader.iter_glyphs(tolerance=0.1):
                print(glyph.name)
    """

    def __init__(self, svg_path: Path, require_transform: bool = True) -> None:
        """Initialize the SVG reader.

        Args:
            svg_path: Path to the SVG file
            require_transform: Whether a missing <g transform> is an error
        """
        self._svg_path = svg_path
        self._require_transform = require_transform
        self._root: ET.Element | None = None

    def load(self) -> None:
        """Load and parse the SVG file.

        Raises:
            FileNotFoundError: If SVG file does not exist
            SvgLoadError: If the file is not well-formed XML
        """
        if not self._svg_path.exists():
            raise FileNotFoundError(f"SVG file not found: {self._svg_path}")

        try:
            self._root = ET.parse(self._svg_path).getroot()
        except ET.ParseError as e:
            raise SvgLoadError(str(self._svg_path), str(e)) from e

    @classmethod
    def from_string(cls, text: str, require_transform: bool = True) -> "SvgReader":
        """Create a reader over an in-memory SVG document.

        Args:
            text: SVG document source
            require_transform: Whether a missing <g transform> is an error

        Returns:
            Loaded SvgReader

        Raises:
            SvgLoadError: If the text is not well-formed XML
        """
        reader = cls(Path("<string>"), require_transform=require_transform)
        try:
            reader._root = ET.fromstring(text)
        except ET.ParseError as e:
            raise SvgLoadError("<string>", str(e)) from e
        return reader

    def _require_root(self) -> ET.Element:
        if self._root is None:
            raise RuntimeError("SVG not loaded. Call load() first.")
        return self._root

    @property
    def path_data(self) -> list[str]:
        """The d attribute of every <path> element, in document order.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        root = self._require_root()
        return [
            element.get("d", "")
            for element in root.iter()
            if _local_name(element.tag) == "path" and element.get("d")
        ]

    @property
    def transform_string(self) -> str | None:
        """The transform attribute of the document's single <g> element.

        Returns:
            Transform text, or None when absent and not required

        Raises:
            TransformSpecError: If there are several, or none while required
            RuntimeError: If the document has not been loaded yet
        """
        root = self._require_root()
        found = [
            element.get("transform", "")
            for element in root.iter()
            if _local_name(element.tag) == "g" and element.get("transform") is not None
        ]

        if len(found) > 1:
            raise TransformSpecError(len(found))
        if not found:
            if self._require_transform:
                raise TransformSpecError(0)
            return None
        return found[0]

    def transform(self) -> Transform:
        """Parse the document transform.

        Returns:
            The document transform, identity when absent and not required
        """
        text = self.transform_string
        if text is None:
            return Identity
        return parse_transform(text)

    def iter_glyphs(self, tolerance: float) -> Iterator[Glyph]:
        """Iterate over paths, converting each to a glyph.

        Args:
            tolerance: Curve flattening tolerance in path units

        Yields:
            One Glyph per <path>, named path-0, path-1, ...
        """
        for idx, data in enumerate(self.path_data):
            yield Glyph(
                name=f"path-{idx}",
                contours=parse_path_contours(data, tolerance),
                source=data,
            )

    def close(self) -> None:
        """Release the parsed document."""
        self._root = None

    def __enter__(self) -> "SvgReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
