"""Shape variant definitions."""

from enum import Enum


class ShapeKind(str, Enum):
    """Geometry shape variants of a union composite."""

    CURVE = "curve"  # Quadratic Bezier between two distinct states
    LOOP = "loop"  # State -> same state
    INITIAL = "initial"  # Free-standing marker pointing at the initial state
