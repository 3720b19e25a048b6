"""Shape definitions: vertices in k-dimensional space plus an edge list."""

import logging
import math
import operator
from dataclasses import dataclass, field

import numpy as np

from wireglyph.errors import DefinitionError

log = logging.getLogger(__name__)


# ==============================================================================
# 1. SHAPE DATA
# ==============================================================================
@dataclass(frozen=True, eq=False)
class Shape:
    """Immutable wireframe: an (n, k) vertex array and undirected edges.

    The vertex array is copied and marked read-only so rotation can never
    write back into the definition.
    """
    vertices: np.ndarray
    edges: tuple
    name: str = field(default="shape", compare=False)

    def __post_init__(self):
        try:
            verts = np.array(self.vertices, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise DefinitionError(f"{self.name}: vertices are not a numeric grid ({e})") from None

        if verts.ndim != 2 or verts.shape[0] == 0:
            raise DefinitionError(f"{self.name}: expected a non-empty (n, k) vertex list, got shape {verts.shape}")
        if verts.shape[1] < 2:
            raise DefinitionError(f"{self.name}: dimension must be at least 2, got {verts.shape[1]}")
        if not np.all(np.isfinite(verts)):
            raise DefinitionError(f"{self.name}: vertices must be finite")
        verts.setflags(write=False)

        edges = []
        n = verts.shape[0]
        for edge in self.edges:
            try:
                i, j = (operator.index(v) for v in edge)
            except (TypeError, ValueError):
                raise DefinitionError(f"{self.name}: edge {edge!r} is not a pair of integer indices") from None
            if not (0 <= i < n and 0 <= j < n):
                raise DefinitionError(f"{self.name}: edge ({i}, {j}) references a vertex outside 0..{n - 1}")
            if i == j:
                raise DefinitionError(f"{self.name}: edge ({i}, {j}) joins a vertex to itself")
            edges.append((i, j))

        # Frozen dataclass: bypass __setattr__ to store the normalised values
        object.__setattr__(self, "vertices", verts)
        object.__setattr__(self, "edges", tuple(edges))

    def __eq__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return self.edges == other.edges and np.array_equal(self.vertices, other.vertices)

    def __len__(self):
        return self.vertices.shape[0]

    @property
    def dimension(self):
        return self.vertices.shape[1]

    def radius(self, n=None):
        """Largest vertex distance from the origin using the first n axes."""
        n = self.dimension if n is None else n
        return float(np.max(np.linalg.norm(self.vertices[:, :n], axis=1)))


# ==============================================================================
# 2. GENERATORS
# ==============================================================================
def hypercube(k, extent):
    """Generate the k-cube with vertices at +/-extent on every axis.

    Bit b of the vertex index selects the sign on axis b. Edges join
    indices that differ in exactly one bit, listed once with i < j.
    """
    if k < 2:
        raise DefinitionError(f"hypercube dimension must be at least 2, got {k}")

    count = 1 << k
    vertices = np.empty((count, k), dtype=np.float64)
    for i in range(count):
        for b in range(k):
            vertices[i, b] = extent if (i >> b) & 1 else -extent

    edges = []
    for i in range(count):
        for b in range(k):
            j = i ^ (1 << b)
            if i < j:
                edges.append((i, j))

    log.debug("hypercube k=%d extent=%s: %d vertices, %d edges", k, extent, count, len(edges))
    return Shape(vertices, tuple(edges), name=f"{k}-cube")


def square(size):
    """Four-corner outline with cyclic edges, half extent floor(size / 2)."""
    h = math.floor(size / 2)
    vertices = [
        [-h, -h],
        [ h, -h],
        [ h,  h],
        [-h,  h],
    ]
    edges = ((0, 1), (1, 2), (2, 3), (3, 0))
    return Shape(np.array(vertices, dtype=np.float64), edges, name="square")


def from_lists(vertices, edges, name="shape"):
    return Shape(vertices, tuple(edges), name=name)
