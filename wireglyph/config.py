"""Engine configuration and the stock square / cube / tesseract presets."""

import logging
import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from wireglyph.frame import STYLES, FrameBuffer
from wireglyph.glyphs import DENSITY, GlyphMapper
from wireglyph.projection import DEFAULT_DISTANCE, DEFAULT_FILL, ProjectionPipeline
from wireglyph.raster import Rasterizer
from wireglyph.rotation import RotationEngine, canonical_axis_pairs
from wireglyph.shapes import hypercube, square

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Every construction-time option of the engine.

    size is the full edge length; the shape spans +/- floor(size / 2).
    offsets and fov default to the analytic fit when left as None, and
    axis_pairs defaults to canonical_axis_pairs(dimension). snap rounds the
    rotated coordinates to whole units before projecting.
    """
    dimension: int = 4
    size: float = 10
    canvas_size: int = 60
    offsets: dict | None = None
    fov: float | None = None
    distance: float = DEFAULT_DISTANCE
    fill: float = DEFAULT_FILL
    palette: tuple = DENSITY
    axis_pairs: tuple | None = None
    style: str = "density"
    seed: int | None = None
    snap: bool = False
    name: str = field(default="custom", compare=False)

    def __post_init__(self):
        if self.dimension < 2:
            raise ValueError(f"dimension must be at least 2, got {self.dimension}")
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.half_extent < 1:
            raise ValueError(f"size {self.size} gives a zero half extent, need size >= 2")
        if self.canvas_size < 1:
            raise ValueError(f"canvas_size must be positive, got {self.canvas_size}")
        if self.style not in STYLES:
            raise ValueError(f"unknown style {self.style!r}, expected one of {STYLES}")
        # Store read-only copies; replace() shares field values
        if self.offsets is not None:
            object.__setattr__(self, "offsets", MappingProxyType(dict(self.offsets)))
        if self.axis_pairs is not None:
            object.__setattr__(self, "axis_pairs", tuple(tuple(p) if not isinstance(p, str) else p for p in self.axis_pairs))

    @property
    def half_extent(self):
        return math.floor(self.size / 2)

    @property
    def rotation_order(self):
        if self.axis_pairs is None:
            return tuple(canonical_axis_pairs(self.dimension))
        return tuple(self.axis_pairs)

    @classmethod
    def from_preset(cls, name, **overrides):
        try:
            base = PRESETS[name]
        except KeyError:
            raise KeyError(f"unknown preset {name!r}, expected one of {sorted(PRESETS)}") from None
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(base, **overrides)


# ==============================================================================
# PRESETS
# ==============================================================================
PRESETS = {
    "square": EngineConfig(
        dimension=2, size=21, canvas_size=41, fov=1.0, name="square",
    ),
    "cube": EngineConfig(
        dimension=3, size=20, canvas_size=40,
        offsets={3: 87.0}, fov=80.0 / 87.0,
        axis_pairs=((1, 2), (2, 0)), snap=True, name="cube",
    ),
    "tesseract": EngineConfig(
        dimension=4, size=10, canvas_size=60, fill=1.7, name="tesseract",
    ),
}


# ==============================================================================
# BUILDERS
# ==============================================================================
def make_shape(config):
    if config.dimension == 2:
        return square(config.size)
    return hypercube(config.dimension, config.half_extent)


def build_engine(config, rng=None):
    """Return (shape, FrameBuffer) wired from a config.

    rng overrides config.seed and may be a numpy Generator.
    """
    shape = make_shape(config)
    rotation = RotationEngine(config.rotation_order)
    projection = ProjectionPipeline.fit(
        shape,
        config.canvas_size,
        distance=config.distance,
        fill=config.fill,
        offsets=config.offsets,
        fov=config.fov,
    )
    glyphs = GlyphMapper(config.palette, rng=config.seed if rng is None else rng)
    buffer = FrameBuffer(
        config.canvas_size,
        rotation,
        projection,
        rasterizer=Rasterizer(config.canvas_size),
        glyphs=glyphs,
        style=config.style,
        snap=config.snap,
    )
    log.debug("built %s engine: %d vertices, %d edges, canvas %d", config.name, len(shape), len(shape.edges), config.canvas_size)
    return shape, buffer
