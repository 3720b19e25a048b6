"""Line rasterization into brightness samples, clipped to the canvas."""

import math
from typing import NamedTuple


class Sample(NamedTuple):
    x: int
    y: int
    brightness: float


# ==============================================================================
# 1. LINE ALGORITHMS (shape space, unclipped apart from the step window)
# ==============================================================================
def _dominant(p0, p1):
    """Transpose to the dominant axis and order the endpoints along it."""
    x0, y0 = (int(v) for v in p0)
    x1, y1 = (int(v) for v in p1)

    steep = abs(y1 - y0) > abs(x1 - x0)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    grad = (y1 - y0) / dx if dx else 0.0
    return steep, x0, y0, x1, grad


def _window(x0, x1, lo, hi):
    start = x0 if lo is None else max(x0, lo)
    stop = x1 if hi is None else min(x1, hi)
    return range(start, stop + 1)


def wu_line(p0, p1, lo=None, hi=None):
    """Anti-aliased line between integer endpoints.

    Steps one unit at a time along the dominant axis. At each step the exact
    secondary position splits its coverage between the floor cell
    (1 - frac) and the cell above it (frac). Zero-coverage halves are
    skipped. lo/hi restrict the steps to a window on the dominant axis.
    """
    steep, x0, y0, x1, grad = _dominant(p0, p1)

    samples = []
    for x in _window(x0, x1, lo, hi):
        exact = y0 + grad * (x - x0)
        y = math.floor(exact)
        frac = exact - y
        if frac < 1.0:
            samples.append(Sample(y, x, 1.0 - frac) if steep else Sample(x, y, 1.0 - frac))
        if frac > 0.0:
            samples.append(Sample(y + 1, x, frac) if steep else Sample(x, y + 1, frac))
    return samples


def stroke_line(p0, p1, lo=None, hi=None):
    """Aliased integer line, one cell per step along the dominant axis."""
    steep, x0, y0, x1, grad = _dominant(p0, p1)

    points = []
    for x in _window(x0, x1, lo, hi):
        y = math.floor(y0 + grad * (x - x0) + 0.5)
        points.append((y, x) if steep else (x, y))
    return points


# ==============================================================================
# 2. CANVAS-BOUND RASTERIZER
# ==============================================================================
class Rasterizer:
    """Emits only samples that land on a canvas centred on the origin."""

    def __init__(self, canvas_size):
        if canvas_size < 1:
            raise ValueError(f"canvas size must be positive, got {canvas_size}")
        self.canvas_size = int(canvas_size)
        self.half = self.canvas_size // 2
        self.lo = -self.half
        self.hi = self.canvas_size - 1 - self.half

    @property
    def bounds(self):
        return self.lo, self.hi

    def in_bounds(self, x, y):
        return self.lo <= x <= self.hi and self.lo <= y <= self.hi

    def rasterize_edge(self, p0, p1):
        return [s for s in wu_line(p0, p1, self.lo, self.hi) if self.in_bounds(s.x, s.y)]

    def rasterize_vertex(self, p):
        x, y = (int(v) for v in p)
        if not self.in_bounds(x, y):
            return []
        return [Sample(x, y, 1.0)]

    def stroke_edge(self, p0, p1):
        return [(x, y) for x, y in stroke_line(p0, p1, self.lo, self.hi) if self.in_bounds(x, y)]
