"""Points, circles and small angle helpers."""

import math
from dataclasses import dataclass

DEFAULT_RADIUS = 35.0
DWARF_FACTOR = 0.1

ARROWHEAD_LENGTH = 15.0
ARROWHEAD_SPREAD = math.pi / 6


@dataclass(frozen=True)
class Point:
    """A point in canvas coordinates."""

    x: float
    y: float

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)


class Circle:
    """The circle a state is drawn as; also its hit area."""

    def __init__(self, x: float = 0.0, y: float = 0.0, radius: float = DEFAULT_RADIUS):
        self.x = x
        self.y = y
        self.radius = radius

    def __repr__(self) -> str:
        return f"Circle(x={self.x}, y={self.y}, radius={self.radius})"

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def is_point_inside(self, x: float, y: float) -> bool:
        dx = self.x - x
        dy = self.y - y
        return dx * dx + dy * dy <= self.radius * self.radius

    def boundary_point(self, angle: float) -> Point:
        return Point(
            self.x + self.radius * math.cos(angle),
            self.y + self.radius * math.sin(angle),
        )

    def boundary_points(self, count: int) -> list[Point]:
        """Sample ``count`` evenly spaced points on the circumference."""
        step = 2 * math.pi / count
        return [self.boundary_point(step * i) for i in range(count)]

    def dwarf(self) -> None:
        """Shrink to a tiny guide circle."""
        self.radius *= DWARF_FACTOR


def angle_between(x1: float, y1: float, x2: float, y2: float) -> float:
    """Angle of the vector (x1, y1) -> (x2, y2), normalized to [0, 2*pi)."""
    angle = math.atan2(y2 - y1, x2 - x1)
    if angle < 0:
        angle += 2 * math.pi
    return angle


def arrowhead(tip: Point, angle: float) -> list[Point]:
    """Triangle for an arrowhead at ``tip``.

    Args:
        tip: Point of the arrowhead.
        angle: Direction from the tip towards the back of the head.

    Returns:
        The three corners, tip first.
    """
    return [
        tip,
        Point(
            tip.x + ARROWHEAD_LENGTH * math.cos(angle - ARROWHEAD_SPREAD),
            tip.y + ARROWHEAD_LENGTH * math.sin(angle - ARROWHEAD_SPREAD),
        ),
        Point(
            tip.x + ARROWHEAD_LENGTH * math.cos(angle + ARROWHEAD_SPREAD),
            tip.y + ARROWHEAD_LENGTH * math.sin(angle + ARROWHEAD_SPREAD),
        ),
    ]


def distance_to_segment(px: float, py: float, a: Point, b: Point) -> float:
    """Shortest distance from (px, py) to the segment ab."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return a.distance_to(px, py)
    t = ((px - a.x) * dx + (py - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(px - (a.x + t * dx), py - (a.y + t * dy))
