"""Brightness to glyph lookup over an ordered density palette."""

import copy
import math

import numpy as np

# ==============================================================================
# CONFIGURATION
# ==============================================================================
BLANK = " "

# Least to most ink. Each band holds glyphs of roughly equal weight.
DENSITY = (
    " .'`^\",",
    ":;Il!i>",
    "<~+_-?]",
    "[}{1)(|",
    "\\/tfjrx",
    "nuvczXY",
    "UJCLQ0O",
    "Zmwqpdb",
    "khao*#M",
    "W&8%B@$",
)

# Indexed by stroke direction: flat, falling, upright, rising
STROKE_GLYPHS = "-\\|/"


def make_rng(rng):
    """Accept None, an int seed or a numpy Generator."""
    if rng is None or isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


# ==============================================================================
# 1. DENSITY GLYPHS
# ==============================================================================
class GlyphMapper:
    """Maps coverage in [0, 1] onto a band of the palette.

    Without an rng the first glyph of the band is used, so output is fully
    deterministic. With one, a glyph is drawn from the band for texture.
    The mapper draws from its own copy of the generator, and reset() rewinds
    that copy to where it started so every frame sees the same stream.
    """

    def __init__(self, palette=DENSITY, rng=None):
        bands = tuple(str(b) for b in palette)
        if not bands:
            raise ValueError("palette needs at least one band")
        for i, band in enumerate(bands):
            if not band:
                raise ValueError(f"palette band {i} is empty")
        self.palette = bands
        self.rng = copy.deepcopy(make_rng(rng))
        self._start = None if self.rng is None else self.rng.bit_generator.state

    @property
    def alphabet(self):
        return frozenset(BLANK).union(*self.palette)

    def band_index(self, brightness):
        b = float(brightness)
        if math.isnan(b):
            return 0
        last = len(self.palette) - 1
        return min(max(math.floor(b * last), 0), last)

    def reset(self):
        if self.rng is not None:
            self.rng.bit_generator.state = self._start

    def glyph_for(self, brightness):
        band = self.palette[self.band_index(brightness)]
        if self.rng is None or len(band) == 1:
            return band[0]
        return band[int(self.rng.integers(len(band)))]


# ==============================================================================
# 2. STROKE GLYPHS
# ==============================================================================
def stroke_glyph(dx, dy):
    """Pick a line glyph for a segment direction (screen y grows downwards).

    Mostly-horizontal and mostly-vertical runs get '-' and '|'; anything
    within a factor of two of the diagonal gets a slash by sign.
    """
    ax, ay = abs(dx), abs(dy)
    if ax > 2 * ay or ax == ay == 0:
        return STROKE_GLYPHS[0]
    if ay > 2 * ax:
        return STROKE_GLYPHS[2]
    if (dx > 0) == (dy > 0):
        return STROKE_GLYPHS[1]
    return STROKE_GLYPHS[3]
