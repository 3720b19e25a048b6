"""Per-frame character grid and the render pass that fills it."""

import logging

import numpy as np

from wireglyph.glyphs import BLANK, GlyphMapper, stroke_glyph
from wireglyph.projection import round_half_up
from wireglyph.raster import Rasterizer

log = logging.getLogger(__name__)

STYLES = ("density", "stroke")


# ==============================================================================
# 1. FRAME
# ==============================================================================
class Frame:
    """Read-only square grid of single characters for one frame."""

    def __init__(self, grid):
        cells = np.array(grid, dtype=str)
        if cells.ndim != 2:
            raise ValueError(f"frame grid must be 2D, got shape {cells.shape}")
        if cells.size and np.any(np.char.str_len(cells) != 1):
            raise ValueError("every frame cell must hold exactly one character")
        grid = cells.astype("<U1")
        grid.setflags(write=False)
        self.grid = grid

    @property
    def shape(self):
        return self.grid.shape

    def __getitem__(self, index):
        return self.grid[index]

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __repr__(self):
        return f"Frame({self.grid.shape[0]}x{self.grid.shape[1]})"

    def rows(self):
        return ["".join(row) for row in self.grid]

    @property
    def text(self):
        return "\n".join(self.rows())

    def __str__(self):
        return self.text

    def alphabet(self):
        return set(np.unique(self.grid).tolist())


# ==============================================================================
# 2. RENDER PASS
# ==============================================================================
class FrameBuffer:
    """Rotate, project, rasterize and paint one frame.

    Cell (y + half, x + half) receives a sample at shape-space (x, y). Edges
    are painted in edge order and vertices last, with the last write to a
    cell winning.
    """

    def __init__(self, canvas_size, rotation, projection, rasterizer=None, glyphs=None, style="density", blank=BLANK, snap=False):
        if style not in STYLES:
            raise ValueError(f"unknown style {style!r}, expected one of {STYLES}")
        if len(blank) != 1:
            raise ValueError(f"blank must be a single character, got {blank!r}")
        self.canvas_size = int(canvas_size)
        self.rotation = rotation
        self.projection = projection
        self.rasterizer = rasterizer or Rasterizer(self.canvas_size)
        if self.rasterizer.canvas_size != self.canvas_size:
            raise ValueError(
                f"rasterizer canvas {self.rasterizer.canvas_size} does not match frame canvas {self.canvas_size}"
            )
        self.glyphs = glyphs or GlyphMapper()
        self.style = style
        self.blank = blank
        self.snap = bool(snap)
        self.half = self.canvas_size // 2

    def clear(self):
        return np.full((self.canvas_size, self.canvas_size), self.blank, dtype="<U1")

    def project(self, shape, rotation_spec):
        rotated = self.rotation.rotate(shape.vertices, rotation_spec)
        if self.snap:
            rotated = round_half_up(rotated)
        return self.projection.project(rotated)

    def render(self, shape, rotation_spec=None):
        grid = self.clear()
        self.glyphs.reset()
        points = self.project(shape, rotation_spec)
        if self.style == "stroke":
            self._paint_strokes(grid, shape, points)
        else:
            self._paint_density(grid, shape, points)
        return Frame(grid)

    def render_many(self, shape, rotation_specs):
        for spec in rotation_specs:
            yield self.render(shape, spec)

    def _paint_density(self, grid, shape, points):
        ras = self.rasterizer
        for i, j in shape.edges:
            for s in ras.rasterize_edge(points[i], points[j]):
                grid[s.y + self.half, s.x + self.half] = self.glyphs.glyph_for(s.brightness)
        for p in points:
            for s in ras.rasterize_vertex(p):
                grid[s.y + self.half, s.x + self.half] = self.glyphs.glyph_for(s.brightness)

    def _paint_strokes(self, grid, shape, points):
        for i, j in shape.edges:
            (x0, y0), (x1, y1) = points[i], points[j]
            glyph = stroke_glyph(x1 - x0, y1 - y0)
            for x, y in self.rasterizer.stroke_edge(points[i], points[j]):
                grid[y + self.half, x + self.half] = glyph
