"""Tests for the render pass and the frame grid."""

from __future__ import annotations

import math

import numpy as np
import pytest

from wireglyph import render
from wireglyph.config import EngineConfig, build_engine
from wireglyph.errors import DegenerateProjectionWarning
from wireglyph.frame import Frame, FrameBuffer
from wireglyph.glyphs import BLANK, GlyphMapper
from wireglyph.projection import ProjectionPipeline
from wireglyph.raster import Rasterizer
from wireglyph.rotation import RotationEngine
from wireglyph.shapes import from_lists, square

TAU = 2 * math.pi


def _painted(frame):
    rows, cols = frame.shape
    return {(x, y) for y in range(rows) for x in range(cols) if frame[y, x] != BLANK}


def _connected(cells):
    """8-connectivity flood fill."""
    cells = set(cells)
    start = next(iter(cells))
    seen = {start}
    stack = [start]
    while stack:
        x, y = stack.pop()
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                n = (x + dx, y + dy)
                if n in cells and n not in seen:
                    seen.add(n)
                    stack.append(n)
    return seen == cells


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


class TestFrame:
    """Frame is a read-only square character grid."""

    def test_read_only(self) -> None:
        frame = Frame([["a", "b"], ["c", "d"]])
        with pytest.raises(ValueError):
            frame.grid[0, 0] = "x"

    def test_multi_character_cell_rejected(self) -> None:
        with pytest.raises(ValueError, match="one character"):
            Frame([["ab", "c"], ["d", "e"]])

    def test_empty_cell_rejected(self) -> None:
        with pytest.raises(ValueError, match="one character"):
            Frame([["", "c"], ["d", "e"]])

    def test_flat_grid_rejected(self) -> None:
        with pytest.raises(ValueError, match="2D"):
            Frame(["a", "b"])

    def test_text(self) -> None:
        frame = Frame([["a", "b"], ["c", "d"]])
        assert frame.rows() == ["ab", "cd"]
        assert frame.text == "ab\ncd"
        assert str(frame) == frame.text

    def test_equality(self) -> None:
        assert Frame([["a"]]) == Frame([["a"]])
        assert Frame([["a"]]) != Frame([["b"]])

    def test_source_not_aliased(self) -> None:
        source = np.full((2, 2), " ", dtype="<U1")
        frame = Frame(source)
        source[0, 0] = "x"
        assert frame[0, 0] == " "


# ---------------------------------------------------------------------------
# square preset
# ---------------------------------------------------------------------------


class TestSquareFrame:
    """The 41-cell square at rest."""

    def test_grid_size(self, square_engine) -> None:
        _, shape, buffer = square_engine
        frame = buffer.render(shape, {})
        assert frame.shape == (41, 41)
        assert all(len(row) == 41 for row in frame.rows())

    def test_corners_at_expected_offsets(self, square_engine) -> None:
        _, shape, buffer = square_engine
        frame = buffer.render(shape, {"XY": 0.0})
        for x, y in [(10, 10), (30, 10), (30, 30), (10, 30)]:
            assert frame[y, x] == "W"

    def test_outline_is_closed(self, square_engine) -> None:
        _, shape, buffer = square_engine
        painted = _painted(buffer.render(shape, {}))
        boundary = {(x, y) for x in range(10, 31) for y in range(10, 31) if x in (10, 30) or y in (10, 30)}
        assert painted == boundary
        assert len(painted) == 80
        assert _connected(painted)

    def test_edges_are_connected(self, square_engine) -> None:
        _, shape, buffer = square_engine
        points = buffer.project(shape, {"XY": 0.3})
        cells = set()
        for i, j in shape.edges:
            cells |= {(s.x, s.y) for s in buffer.rasterizer.rasterize_edge(points[i], points[j])}
        assert _connected(cells)

    def test_quarter_turn_matches_rest(self, square_engine) -> None:
        _, shape, buffer = square_engine
        assert buffer.render(shape, {"XY": math.pi / 2}) == buffer.render(shape, {})


# ---------------------------------------------------------------------------
# determinism and periodicity
# ---------------------------------------------------------------------------


class TestDeterminism:
    """Renders are pure functions of (shape, angles), seeded or not."""

    def test_repeatable(self, tesseract_engine) -> None:
        _, shape, buffer = tesseract_engine
        assert buffer.render(shape, {}) == buffer.render(shape, {})

    def test_full_turn_matches_rest(self, tesseract_engine) -> None:
        _, shape, buffer = tesseract_engine
        full = {"XY": TAU, "YZ": TAU, "ZW": TAU, "WX": TAU}
        assert buffer.render(shape, full) == buffer.render(shape, {})

    def test_full_turn_square(self, square_engine) -> None:
        _, shape, buffer = square_engine
        assert buffer.render(shape, {"XY": TAU}) == buffer.render(shape, {})

    def test_seeded_buffers_agree(self) -> None:
        shape = square(21)

        def make(seed):
            return FrameBuffer(41, RotationEngine(["XY"]), ProjectionPipeline(), glyphs=GlyphMapper(rng=seed))

        angles = {"XY": 0.37}
        assert make(5).render(shape, angles) == make(5).render(shape, angles)

    def test_seeded_buffer_repeats(self) -> None:
        shape, buffer = build_engine(EngineConfig.from_preset("tesseract", seed=3))
        angles = {"XY": 0.4, "ZW": 1.1}
        assert buffer.render(shape, angles) == buffer.render(shape, angles)
        assert buffer.render(shape, {}) == buffer.render(shape, {})

    def test_seeded_render_is_independent_of_history(self) -> None:
        shape, buffer = build_engine(EngineConfig.from_preset("tesseract", seed=3))
        first = buffer.render(shape, {"XY": 0.4})
        for angle in (0.1, 0.2, 0.3):
            buffer.render(shape, {"YZ": angle})
        assert buffer.render(shape, {"XY": 0.4}) == first

    def test_alphabet_is_closed(self, tesseract_engine) -> None:
        _, shape, buffer = tesseract_engine
        frame = buffer.render(shape, {"XY": 0.2, "YZ": 0.9, "ZW": 1.7, "WX": 0.4})
        assert frame.alphabet() <= buffer.glyphs.alphabet
        assert frame.shape == (60, 60)


# ---------------------------------------------------------------------------
# paint order
# ---------------------------------------------------------------------------


class TestPaintOrder:
    """Last write wins: edges in order, then vertices."""

    def test_vertex_painted_over_edge(self) -> None:
        # (1, 0) gets a half-coverage sample from the edge and is also a vertex
        shape = from_lists([[0, 0], [4, 2], [1, 0]], [(0, 1)])
        frame = render(shape, canvas_size=11, fov=1.0)
        assert frame[5, 6] == "W"

    def test_half_coverage_without_vertex(self) -> None:
        shape = from_lists([[0, 0], [4, 2]], [(0, 1)])
        frame = render(shape, canvas_size=11, fov=1.0)
        assert frame[5, 6] == "\\"

    @pytest.mark.parametrize(("edges", "glyph"), [([(2, 3), (0, 1)], "\\"), ([(0, 1), (2, 3)], "W")])
    def test_later_edge_wins(self, edges, glyph) -> None:
        shape = from_lists([[0, 0], [4, 2], [0, 1], [4, 1]], edges)
        frame = render(shape, canvas_size=11, fov=1.0)
        # shape-space (1, 1): 0.5 from the slanted edge, 1.0 from the flat one
        assert frame[6, 6] == glyph


# ---------------------------------------------------------------------------
# clipping and degeneracy
# ---------------------------------------------------------------------------


class TestClipping:
    """Nothing outside the canvas is written and nothing raises."""

    def test_shape_larger_than_canvas(self) -> None:
        frame = render(square(101), canvas_size=11, fov=1.0)
        assert _painted(frame) == set()

    def test_singular_vertex_is_clipped(self) -> None:
        shape = from_lists([[0, 0, 0], [1, 1, -10]], [(0, 1)])
        with pytest.warns(DegenerateProjectionWarning):
            frame = render(shape, canvas_size=11, offsets={3: 10.0}, fov=1.0)
        assert _painted(frame) == {(5 + i, 5 + i) for i in range(6)}


# ---------------------------------------------------------------------------
# stroke style and configuration
# ---------------------------------------------------------------------------


class TestStrokeStyle:
    """Plain line glyphs chosen by edge direction."""

    def test_square_outline(self) -> None:
        buffer = FrameBuffer(41, RotationEngine(["XY"]), ProjectionPipeline(), style="stroke")
        frame = buffer.render(square(21), {})
        assert frame.rows()[10][11:30] == "-" * 19
        assert frame.rows()[30][11:30] == "-" * 19
        assert all(frame[y, 10] == "|" for y in range(11, 30))
        assert all(frame[y, 30] == "|" for y in range(11, 30))
        assert frame.alphabet() <= {BLANK, "-", "|"}


class TestFrameBufferConfig:
    """Construction-time validation."""

    def test_unknown_style(self) -> None:
        with pytest.raises(ValueError, match="style"):
            FrameBuffer(11, RotationEngine(["XY"]), ProjectionPipeline(), style="neon")

    def test_rasterizer_mismatch(self) -> None:
        with pytest.raises(ValueError, match="canvas"):
            FrameBuffer(11, RotationEngine(["XY"]), ProjectionPipeline(), rasterizer=Rasterizer(12))

    def test_custom_blank(self) -> None:
        buffer = FrameBuffer(5, RotationEngine(["XY"]), ProjectionPipeline(), blank=".")
        frame = buffer.render(from_lists([[0, 0], [0, 0.2]], []), {})
        assert frame.rows()[0] == "....."

    def test_render_many(self, square_engine) -> None:
        _, shape, buffer = square_engine
        frames = list(buffer.render_many(shape, [{"XY": 0.1 * i} for i in range(4)]))
        assert len(frames) == 4
        assert frames[0] != frames[1]
