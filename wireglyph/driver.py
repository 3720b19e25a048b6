"""Tick-based angle driver. The caller owns the clock; this only does arithmetic."""

import numpy as np

from wireglyph.glyphs import make_rng
from wireglyph.rotation import normalize_angles, parse_axis_pair, wrap_angle


class AngleDriver:
    """Advances one angle per axis pair on every tick.

    step, jitter and start map axis pairs to radians, keyed the way a
    rotation spec is. When jitter is given, each tick adds
    jitter * U[0, 1) on top of the fixed step.
    """

    def __init__(self, axis_pairs, step, jitter=None, rng=None, start=None):
        self.axis_pairs = tuple(parse_axis_pair(p) for p in axis_pairs)
        self.step = self._per_pair(step)
        self.jitter = self._per_pair(jitter or {})
        if any(self.jitter.values()) and rng is None:
            rng = np.random.default_rng()
        self.rng = make_rng(rng)
        self._angles = {p: wrap_angle(a) for p, a in self._per_pair(start or {}).items()}
        self.ticks = 0

    def _per_pair(self, values):
        # Same key rules as a rotation spec: a reversed pair negates the value
        return dict(zip(self.axis_pairs, normalize_angles(values, self.axis_pairs)))

    @property
    def angles(self):
        return dict(self._angles)

    def tick(self):
        for pair in self.axis_pairs:
            delta = self.step[pair]
            if self.jitter[pair]:
                delta += self.jitter[pair] * float(self.rng.random())
            self._angles[pair] = wrap_angle(self._angles[pair] + delta)
        self.ticks += 1
        return self.angles

    def frames(self, n, include_start=True):
        """Yield n rotation specs, starting from the current angles."""
        for i in range(n):
            if i or not include_start:
                self.tick()
            yield self.angles


# ==============================================================================
# PRESETS (degrees per tick, stored in radians)
# ==============================================================================
def _radians(mapping):
    return {k: float(np.radians(v)) for k, v in mapping.items()}


DRIVER_PRESETS = {
    "square": {"step": _radians({"XY": 5.0})},
    "cube": {"step": _radians({"YZ": 5.0, "ZX": 5.0})},
    "tesseract": {
        "step": _radians({"XY": 0.5, "YZ": 1.0, "ZW": 1.5, "WX": 0.0}),
        "jitter": _radians({"XY": 1.0, "YZ": 1.0, "ZW": 1.0, "WX": 1.0}),
    },
}


def driver_for(name, axis_pairs, rng=None):
    try:
        preset = DRIVER_PRESETS[name]
    except KeyError:
        raise KeyError(f"no driver preset for {name!r}, expected one of {sorted(DRIVER_PRESETS)}") from None
    return AngleDriver(axis_pairs, preset["step"], jitter=preset.get("jitter"), rng=rng)
