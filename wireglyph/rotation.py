"""Planar (Givens) rotations composed over a fixed axis-pair order."""

import logging
import math

import numpy as np

log = logging.getLogger(__name__)

AXIS_NAMES = "XYZW"
TAU = 2.0 * math.pi


# ==============================================================================
# 1. AXIS PAIRS
# ==============================================================================
def parse_axis_pair(pair):
    """Turn "ZW", ("z", "w") or (2, 3) into an index tuple."""
    if isinstance(pair, str):
        pair = tuple(pair.strip())
    try:
        a, b = pair
    except (TypeError, ValueError):
        raise ValueError(f"axis pair must name exactly two axes, got {pair!r}") from None

    out = []
    for axis in (a, b):
        if isinstance(axis, str):
            idx = AXIS_NAMES.find(axis.upper())
            if len(axis) != 1 or idx < 0:
                raise ValueError(f"unknown axis name {axis!r}, expected one of {AXIS_NAMES}")
            out.append(idx)
        else:
            out.append(int(axis))

    a, b = out
    if a < 0 or b < 0:
        raise ValueError(f"axis indices must be non-negative, got ({a}, {b})")
    if a == b:
        raise ValueError(f"axis pair ({a}, {b}) repeats an axis")
    return a, b


def axis_pair_name(pair):
    a, b = pair
    if max(a, b) < len(AXIS_NAMES):
        return AXIS_NAMES[a] + AXIS_NAMES[b]
    return f"{a}{b}"


def canonical_axis_pairs(k):
    """Default order: XY for the plane, otherwise the cyclic chain XY, YZ, ..., back to X."""
    if k < 2:
        raise ValueError(f"rotation needs at least 2 dimensions, got {k}")
    if k == 2:
        return [(0, 1)]
    return [(i, (i + 1) % k) for i in range(k)]


def wrap_angle(theta):
    """Reduce an angle into [0, 2pi) for driver state and display."""
    wrapped = float(theta) % TAU
    # Tiny negatives wrap to exactly TAU after rounding
    return 0.0 if wrapped >= TAU else wrapped


def normalize_angles(spec, axis_pairs):
    """Resolve a rotation spec into one angle per configured pair, in order.

    Keys may be names or index tuples. A key given as (b, a) addresses the
    configured (a, b) plane with the angle negated. Missing pairs are 0.
    """
    order = [tuple(p) for p in axis_pairs]
    angles = dict.fromkeys(order, 0.0)
    for key, theta in (spec or {}).items():
        pair = parse_axis_pair(key)
        if pair in angles:
            angles[pair] = float(theta)
        elif pair[::-1] in angles:
            angles[pair[::-1]] = -float(theta)
        else:
            names = ", ".join(axis_pair_name(p) for p in order)
            raise ValueError(f"rotation plane {axis_pair_name(pair)} is not configured (order: {names})")
    return [angles[p] for p in order]


# ==============================================================================
# 2. ROTATION MATRICES
# ==============================================================================
def givens(k, a, b, theta):
    """k x k rotation in the (a, b) plane; every other axis is left alone."""
    c = np.cos(theta)
    s = np.sin(theta)
    mat = np.eye(k, dtype=np.float64)
    mat[a, a] = c
    mat[a, b] = -s
    mat[b, a] = s
    mat[b, b] = c
    return mat


class RotationEngine:
    """Applies one Givens rotation per axis pair, in a fixed order.

    Each pair rotates the output of the pair before it, so the order is
    part of the animation and must stay the same from frame to frame.
    """

    def __init__(self, axis_pairs):
        pairs = [parse_axis_pair(p) for p in axis_pairs]
        planes = [frozenset(p) for p in pairs]
        if len(set(planes)) != len(planes):
            raise ValueError(f"axis pairs repeat a rotation plane: {pairs}")
        self.axis_pairs = tuple(pairs)

    @property
    def min_dimension(self):
        if not self.axis_pairs:
            return 0
        return 1 + max(max(p) for p in self.axis_pairs)

    def matrix(self, k, angles):
        """Composite matrix for one step: R_n @ ... @ R_1."""
        thetas = normalize_angles(angles, self.axis_pairs)
        mat = np.eye(k, dtype=np.float64)
        for (a, b), theta in zip(self.axis_pairs, thetas):
            mat = givens(k, a, b, theta) @ mat
        return mat

    def rotate(self, vertices, angles):
        """Return a new (n, k) array of rotated vertices."""
        verts = np.asarray(vertices, dtype=np.float64)
        k = verts.shape[1]
        if k < self.min_dimension:
            raise ValueError(f"axis pairs {self.axis_pairs} need {self.min_dimension} dimensions, vertices have {k}")
        # Row vectors: v' = (M v^T)^T
        return verts @ self.matrix(k, angles).T
