"""Geometry layer: circles, arrow shapes and drawing surfaces."""

from .errors import GeometryError, GeometryUnsolvableError
from .primitives import Circle, Point
from .shape_kinds import ShapeKind
from .shapes import CurveShape, InitialMarkerShape, LoopShape, Shape, create_shape
from .surface import Arc, DrawStyle, RecordingSurface, Surface
from .svg import SvgSurface
from .theme import DEFAULT_THEME, Theme

__all__ = [
    "GeometryError",
    "GeometryUnsolvableError",
    "Circle",
    "Point",
    "ShapeKind",
    "CurveShape",
    "InitialMarkerShape",
    "LoopShape",
    "Shape",
    "create_shape",
    "Arc",
    "DrawStyle",
    "RecordingSurface",
    "Surface",
    "SvgSurface",
    "DEFAULT_THEME",
    "Theme",
]
