"""Perspective folds from k dimensions down to integer screen coordinates."""

import logging
import warnings

import numpy as np

from wireglyph.errors import DegenerateProjectionWarning

log = logging.getLogger(__name__)

# ==============================================================================
# CONFIGURATION
# ==============================================================================
DEFAULT_DISTANCE = 5.0   # camera distance, in shape radii, for each fold
DEFAULT_FILL = 1.7       # how much of the half canvas the projected radius spans
SINGULARITY_EPS = 1e-9   # divisor magnitude treated as the vanishing point
FAR_AWAY = 1e9           # stand-in coordinate for points at the singularity


def round_half_up(values):
    """Round .5 towards +inf, the way screen rounding has always worked here."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


# ==============================================================================
# 1. ANALYTIC CONSTANTS
# ==============================================================================
def perspective_offsets(shape, distance=DEFAULT_DISTANCE):
    """Offset C_n for every fold n -> n-1, keyed by the source dimension n.

    C_n = round(distance * r_n), with r_n the shape's radius over its first
    n axes, so every fold keeps the same camera-to-size ratio.
    """
    offsets = {}
    for n in range(shape.dimension, 2, -1):
        offsets[n] = float(round_half_up(distance * shape.radius(n)))
    return offsets


def projected_radius(radius, offsets, k):
    """Worst-case radius after every fold: r_(n-1) = r_n * C_n / (C_n - r_n)."""
    r = float(radius)
    for n in range(k, 2, -1):
        c = offsets[n]
        if c <= r:
            raise ValueError(f"offset C_{n}={c} does not clear the radius {r:.3f}; the shape would reach the vanishing point")
        r = r * c / (c - r)
    return r


def fit_fov(shape, offsets, canvas_size, fill=DEFAULT_FILL):
    """Scale so the folded radius covers `fill` times the half canvas."""
    r2 = projected_radius(shape.radius(), offsets, shape.dimension)
    if r2 == 0:
        return 1.0
    return (canvas_size // 2) / r2 * fill


# ==============================================================================
# 2. PIPELINE
# ==============================================================================
class ProjectionPipeline:
    """Folds (n, k) points to (n, 2) ints, highest axis first."""

    def __init__(self, offsets=None, fov=1.0):
        self.offsets = {int(n): float(c) for n, c in (offsets or {}).items()}
        for n, c in self.offsets.items():
            if n < 3:
                raise ValueError(f"folds start at dimension 3, got an offset for {n}")
            if c <= 0:
                raise ValueError(f"offset C_{n} must be positive, got {c}")
        self.fov = float(fov)

    @classmethod
    def fit(cls, shape, canvas_size, distance=DEFAULT_DISTANCE, fill=DEFAULT_FILL, offsets=None, fov=None):
        """Analytic offsets and FOV for a shape; explicit values win."""
        merged = perspective_offsets(shape, distance)
        if offsets:
            merged.update({int(n): float(c) for n, c in offsets.items()})
        if fov is None:
            fov = fit_fov(shape, merged, canvas_size, fill)
        log.debug("projection for %s: offsets=%s fov=%.4f", shape.name, merged, fov)
        return cls(merged, fov)

    def fold(self, points):
        """Apply the perspective folds only, returning (n, 2) floats."""
        pts = np.array(points, dtype=np.float64)
        for n in range(pts.shape[1], 2, -1):
            if n not in self.offsets:
                raise ValueError(f"no perspective offset configured for the {n}D -> {n - 1}D fold")
            c = self.offsets[n]
            divisor = c + pts[:, n - 1]
            near = np.abs(divisor) < SINGULARITY_EPS
            if near.any():
                log.debug("fold %dD: %d point(s) at the vanishing point", n, int(near.sum()))
                warnings.warn(
                    f"perspective divisor near zero in the {n}D -> {n - 1}D fold; point will be clipped",
                    DegenerateProjectionWarning,
                    stacklevel=3,
                )
            with np.errstate(divide="ignore", invalid="ignore"):
                scale = c / divisor
                pts = pts[:, : n - 1] * scale[:, None]
            pts[near] = FAR_AWAY
        return pts

    def project(self, points):
        """Fold, scale by the FOV and round to integer screen units."""
        pts = self.fold(points) * self.fov
        pts = np.nan_to_num(pts, nan=FAR_AWAY, posinf=FAR_AWAY, neginf=-FAR_AWAY)
        pts = np.clip(pts, -FAR_AWAY, FAR_AWAY)
        return round_half_up(pts).astype(np.int64)
