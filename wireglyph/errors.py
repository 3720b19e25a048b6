"""Error taxonomy for the wireframe engine."""


class DefinitionError(ValueError):
    """A shape whose vertices or edges cannot be rendered.

    Raised eagerly when a Shape is built, never during a render.
    """


class DegenerateProjectionWarning(RuntimeWarning):
    """A perspective divisor came within epsilon of zero.

    The affected point is pushed far off-canvas and clipped by the rasterizer.
    """
