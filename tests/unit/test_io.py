"""Tests for SVG reading, path flattening and OBJ writing."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest
from fontTools.misc.transform import Identity

from glyphmesh.domain import Mesh, Point
from glyphmesh.exceptions import (
    ObjSaveError,
    PathDataError,
    SvgLoadError,
    TransformSpecError,
)
from glyphmesh.io import (
    ObjWriter,
    SvgReader,
    format_face,
    format_vertex,
    parse_path_contours,
)
from glyphmesh.io.writer import format_number

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'


def _svg(body: str) -> str:
    return f"<svg {SVG_NS}>{body}</svg>"


SQUARE_SVG = _svg(
    '<g transform="matrix(1 0 0 -1 0 100)">'
    '<path d="M0 0 L10 0 L10 10 L0 10 Z"/>'
    '<path d="M20 0 L30 0 L30 10 Z"/>'
    "</g>"
)


class TestSvgReader:
    """Tests for SvgReader."""

    def test_path_data_in_document_order(self) -> None:
        """Every <path> d attribute is returned in order."""
        reader = SvgReader.from_string(SQUARE_SVG)

        assert reader.path_data == ["M0 0 L10 0 L10 10 L0 10 Z", "M20 0 L30 0 L30 10 Z"]

    def test_path_without_data_skipped(self) -> None:
        """Paths with an empty or missing d are ignored."""
        reader = SvgReader.from_string(
            _svg('<g transform="scale(1)"><path/><path d=""/><path d="M0 0 L1 0 L1 1 Z"/></g>')
        )

        assert reader.path_data == ["M0 0 L1 0 L1 1 Z"]

    def test_transform(self) -> None:
        """The single <g> transform is parsed."""
        reader = SvgReader.from_string(SQUARE_SVG)

        assert reader.transform_string == "matrix(1 0 0 -1 0 100)"
        assert tuple(reader.transform()) == (1, 0, 0, -1, 0, 100)

    def test_missing_transform_required(self) -> None:
        """No <g transform> is an error by default."""
        reader = SvgReader.from_string(_svg('<path d="M0 0 L1 0 L1 1 Z"/>'))

        with pytest.raises(TransformSpecError) as exc_info:
            reader.transform()

        assert exc_info.value.count == 0

    def test_missing_transform_allowed(self) -> None:
        """Without the requirement, a missing transform is the identity."""
        reader = SvgReader.from_string(
            _svg('<path d="M0 0 L1 0 L1 1 Z"/>'), require_transform=False
        )

        assert reader.transform_string is None
        assert reader.transform() is Identity

    def test_multiple_transforms(self) -> None:
        """Several <g transform> elements are ambiguous."""
        reader = SvgReader.from_string(
            _svg(
                '<g transform="scale(2)"><path d="M0 0 L1 0 L1 1 Z"/></g>'
                '<g transform="scale(3)"><path d="M5 5 L6 5 L6 6 Z"/></g>'
            )
        )

        with pytest.raises(TransformSpecError) as exc_info:
            reader.transform()

        assert exc_info.value.count == 2

    def test_malformed_xml(self) -> None:
        """Broken XML is reported as a load error."""
        with pytest.raises(SvgLoadError):
            SvgReader.from_string("<svg><g></svg>")

    def test_iter_glyphs(self) -> None:
        """Each path becomes a named glyph carrying its source."""
        glyphs = list(SvgReader.from_string(SQUARE_SVG).iter_glyphs(tolerance=0.1))

        assert [g.name for g in glyphs] == ["path-0", "path-1"]
        assert glyphs[0].source == "M0 0 L10 0 L10 10 L0 10 Z"
        assert glyphs[0].contours[0].to_tuples() == [(0, 0), (10, 0), (10, 10), (0, 10)]
        assert len(glyphs[1].contours[0]) == 3

    def test_not_loaded(self, tmp_path: Path) -> None:
        """Accessors need load() first."""
        reader = SvgReader(tmp_path / "a.svg")

        with pytest.raises(RuntimeError, match="not loaded"):
            _ = reader.path_data

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            SvgReader(tmp_path / "missing.svg").load()

    def test_context_manager(self, tmp_path: Path) -> None:
        """The reader loads on entry and releases on exit."""
        svg_path = tmp_path / "square.svg"
        svg_path.write_text(SQUARE_SVG, encoding="utf-8")

        with SvgReader(svg_path) as reader:
            assert len(reader.path_data) == 2

        with pytest.raises(RuntimeError):
            _ = reader.path_data


class TestPathParsing:
    """Tests for path data flattening."""

    def test_polygon(self) -> None:
        """Straight segments keep their vertices."""
        contours = parse_path_contours("M0 0 L10 0 L10 10 L0 10 Z", tolerance=0.1)

        assert len(contours) == 1
        assert contours[0].to_tuples() == [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_explicit_closing_point_kept(self) -> None:
        """A subpath ending on its start keeps the duplicate point."""
        contours = parse_path_contours("M0 0 L10 0 L10 10 L0 0 Z", tolerance=0.1)

        assert contours[0].points[-1] == Point(0.0, 0.0)
        assert len(contours[0]) == 4

    def test_relative_commands(self) -> None:
        """Relative commands resolve against the current point."""
        contours = parse_path_contours("m1 1 h2 v2 h-2 z", tolerance=0.1)

        assert contours[0].to_tuples() == [(1, 1), (3, 1), (3, 3), (1, 3)]

    def test_subpaths(self) -> None:
        """Every subpath is its own contour."""
        contours = parse_path_contours(
            "M0 0 L3 0 L3 3 L0 3 Z M1 1 L2 1 L2 2 L1 2 Z", tolerance=0.1
        )

        assert [len(c) for c in contours] == [4, 4]

    def test_unclosed_subpath(self) -> None:
        """A subpath without Z still yields a contour."""
        contours = parse_path_contours("M0 0 L5 0 L5 5", tolerance=0.1)

        assert contours[0].to_tuples() == [(0, 0), (5, 0), (5, 5)]

    def test_quadratic_flattened(self) -> None:
        """A quadratic curve becomes several points within its hull."""
        contours = parse_path_contours("M0 0 Q5 10 10 0 Z", tolerance=0.1)
        points = contours[0].points

        assert len(points) > 3
        assert points[0] == Point(0.0, 0.0)
        assert points[-1] == Point(10.0, 0.0)
        assert all(0 <= p.y <= 5.0 + 1e-9 for p in points)

    def test_cubic_finer_with_smaller_tolerance(self) -> None:
        """Lower tolerance gives more segments."""
        data = "M0 0 C0 10 10 10 10 0 Z"

        coarse = parse_path_contours(data, tolerance=1.0)[0]
        fine = parse_path_contours(data, tolerance=0.01)[0]

        assert len(fine) > len(coarse)

    def test_parse_error(self) -> None:
        """Parser errors become PathDataError."""
        with patch("glyphmesh.io.path.parse_path", side_effect=ValueError("bad token")):
            with pytest.raises(PathDataError, match="bad token"):
                parse_path_contours("M0 0", tolerance=0.1)


class TestObjWriter:
    """Tests for OBJ output."""

    @pytest.fixture
    def mesh(self) -> Mesh:
        """Three-vertex, one-face mesh."""
        return Mesh(
            vertices=[(1.0, -0.0, 0.0), (0.25, 1 / 3, 1.0), (2.0, 2.0, 0.0)],
            faces=[(1, 2, 3)],
        )

    def test_format_number(self) -> None:
        """Ten significant digits, no trailing zeros, no negative zero."""
        assert format_number(1.0) == "1"
        assert format_number(-0.0) == "0"
        assert format_number(1 / 3) == "0.3333333333"
        assert format_number(1234.5) == "1234.5"

    def test_format_lines(self) -> None:
        """Vertex and face line formats."""
        assert format_vertex(1.0, -0.0, 0.5) == "v 1 0 0.5"
        assert format_face(1, 2, 3) == "f 1 2 3"

    def test_write_stream(self, mesh: Mesh) -> None:
        """Vertices come before faces, one per line."""
        stream = io.StringIO()

        ObjWriter(Path("unused.obj")).write(mesh, stream)

        assert stream.getvalue().splitlines() == [
            "v 1 0 0",
            "v 0.25 0.3333333333 1",
            "v 2 2 0",
            "f 1 2 3",
        ]

    def test_save(self, mesh: Mesh, tmp_path: Path) -> None:
        """save() writes the file."""
        output = tmp_path / "out.obj"

        ObjWriter(output).save(mesh)

        assert output.read_text(encoding="utf-8").endswith("f 1 2 3\n")

    def test_save_error(self, mesh: Mesh, tmp_path: Path) -> None:
        """Unwritable destinations raise ObjSaveError."""
        output = tmp_path / "missing-dir" / "out.obj"

        with pytest.raises(ObjSaveError):
            ObjWriter(output).save(mesh)

    def test_get_output_path(self) -> None:
        """The output path swaps the suffix for .obj."""
        assert ObjWriter.get_output_path(Path("art/logo.svg")) == Path("art/logo.obj")
