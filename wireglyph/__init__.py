"""Rotating N-dimensional wireframes rendered as character grids."""

from wireglyph.config import PRESETS, EngineConfig, build_engine, make_shape
from wireglyph.errors import DefinitionError, DegenerateProjectionWarning
from wireglyph.frame import Frame, FrameBuffer
from wireglyph.glyphs import DENSITY, GlyphMapper, stroke_glyph
from wireglyph.projection import ProjectionPipeline
from wireglyph.raster import Rasterizer, Sample, wu_line
from wireglyph.rotation import RotationEngine, canonical_axis_pairs
from wireglyph.shapes import Shape, from_lists, hypercube, square

__version__ = "0.1.0"

__all__ = [
    "DENSITY",
    "PRESETS",
    "DefinitionError",
    "DegenerateProjectionWarning",
    "EngineConfig",
    "Frame",
    "FrameBuffer",
    "GlyphMapper",
    "ProjectionPipeline",
    "Rasterizer",
    "RotationEngine",
    "Sample",
    "Shape",
    "build_engine",
    "canonical_axis_pairs",
    "from_lists",
    "hypercube",
    "make_shape",
    "render",
    "square",
    "stroke_glyph",
    "wu_line",
]


def render(shape, rotation_spec=None, canvas_size=41, offsets=None, fov=None, axis_pairs=None, glyphs=None):
    """One-shot render of a shape with analytic projection defaults."""
    rotation = RotationEngine(axis_pairs or canonical_axis_pairs(shape.dimension))
    projection = ProjectionPipeline.fit(shape, canvas_size, offsets=offsets, fov=fov)
    return FrameBuffer(canvas_size, rotation, projection, glyphs=glyphs).render(shape, rotation_spec)
