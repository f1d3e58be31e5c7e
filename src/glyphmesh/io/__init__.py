"""SVG input and OBJ output for glyphmesh.

This module handles reading SVG documents and writing OBJ meshes. It
provides a clean abstraction layer between file formats and the domain
models.

Key responsibilities:
- Extract <path> data and the document transform from SVG
- Flatten path curves into contours
- Parse SVG transform lists
- Write OBJ vertex and face lines

Key classes:
- SvgReader: Load SVG documents and extract glyphs
- ObjWriter: Save extruded meshes
"""

from glyphmesh.io.path import FlatteningPen, parse_path_contours
from glyphmesh.io.reader import SvgReader
from glyphmesh.io.transform import parse_transform
from glyphmesh.io.writer import ObjWriter, format_face, format_vertex

__all__ = [
    "FlatteningPen",
    "ObjWriter",
    "SvgReader",
    "format_face",
    "format_vertex",
    "parse_path_contours",
    "parse_transform",
]
