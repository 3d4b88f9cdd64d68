"""Arrow shapes drawn for union composites.

Every shape owns a single real-valued parameter that fully determines its
path: the signed bow distance of a curve, the anchor angle of a self-loop,
or the direction of the initial-state marker. Dragging a shape refits that
parameter from the pointer position.
"""

import logging
import math
from abc import ABC, abstractmethod

from .errors import GeometryUnsolvableError
from .primitives import Circle, Point, angle_between, arrowhead, distance_to_segment
from .shape_kinds import ShapeKind
from .surface import Arc, DrawStyle, Surface
from .theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

# Curve clipping and hit testing
CURVE_SAMPLES = 1000
BOUNDARY_SAMPLES = 200
BOUNDARY_THRESHOLD = 1.0
HIT_THRESHOLD = 12.0
DRAW_SEGMENTS = 50

LABEL_HIT_RADIUS = 15.0
CURVE_LABEL_OFFSET = 20.0

LOOP_RADIUS = 35.0
LOOP_SWEEP = 2 * math.pi / 3
LOOP_LABEL_DISTANCE = 1.5 * LOOP_RADIUS

INITIAL_MARKER_LENGTH = 70.0


class Shape(ABC):
    """Base class for the three arrow variants."""

    kind: ShapeKind

    def __init__(self, circle_from: Circle | None, circle_to: Circle, parameter: float = 1.0):
        self.circle_from = circle_from
        self.circle_to = circle_to
        self.parameter = parameter
        self.control_point = Point(0.0, 0.0)
        self.label = ""
        self.label_visible = True
        self.highlighted = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parameter={self.parameter:.3f})"

    def set_parameter(self, value: float) -> None:
        """Set the shape parameter. Zero is ignored."""
        if value == 0:
            return
        self.parameter = value

    def set_label_visible(self, visible: bool) -> None:
        self.label_visible = visible

    def draw(self, surface: Surface, theme: Theme = DEFAULT_THEME) -> None:
        self.update_control_point()
        self.draw_curve(surface, theme)
        if self.label_visible:
            self.draw_label(surface, theme)

    def draw_label(self, surface: Surface, theme: Theme) -> None:
        position = self.label_position()
        surface.fill_text(self.label, position.x, position.y, theme.arrow_font, theme.arrow_color)

    def color(self, theme: Theme) -> str:
        return theme.arrow_highlight if self.highlighted else theme.arrow_color

    @abstractmethod
    def update_control_point(self) -> None:
        """Recompute anchors from the endpoint circles and the parameter."""

    @abstractmethod
    def draw_curve(self, surface: Surface, theme: Theme) -> None:
        """Stroke the path and its arrowhead."""

    @abstractmethod
    def label_position(self) -> Point:
        """Where the label text is anchored."""

    @abstractmethod
    def is_label_clicked_at(self, x: float, y: float) -> bool:
        """Hit test against the label."""

    @abstractmethod
    def is_curve_clicked_at(self, x: float, y: float) -> bool:
        """Hit test against the rendered path."""

    @abstractmethod
    def recalculate_from_point(self, x: float, y: float) -> None:
        """Refit the parameter so the shape follows a dragged point."""


class CurveShape(Shape):
    """Quadratic Bezier between two distinct states.

    The ideal curve runs center to center; only the part between the
    parameters t0 and t1 where it leaves the source circle and enters the
    destination circle is drawn and hit tested.
    """

    kind = ShapeKind.CURVE

    def __init__(self, circle_from: Circle, circle_to: Circle, parameter: float = 1.0):
        super().__init__(circle_from, circle_to, parameter)
        self._interval: tuple[float, float] | None = None
        self._interval_key: tuple | None = None

    @property
    def start(self) -> Point:
        return self.circle_from.center

    @property
    def end(self) -> Point:
        return self.circle_to.center

    def _offset_point(self, scale: float = 1.0) -> Point:
        start, end = self.start, self.end
        mid_x = (start.x + end.x) / 2
        mid_y = (start.y + end.y) / 2
        dx = end.x - start.x
        dy = end.y - start.y
        length = math.hypot(dx, dy)
        if length == 0:
            return Point(mid_x, mid_y)
        offset = self.parameter * scale
        return Point(mid_x - dy / length * offset, mid_y + dx / length * offset)

    def update_control_point(self) -> None:
        self.control_point = self._offset_point()

    def point_at(self, t: float) -> Point:
        """Point of the center-to-center curve at parameter ``t``."""
        start, end, control = self.start, self.end, self.control_point
        u = 1 - t
        return Point(
            u * u * start.x + 2 * u * t * control.x + t * t * end.x,
            u * u * start.y + 2 * u * t * control.y + t * t * end.y,
        )

    def boundary_parameter(self, circle: Circle) -> float | None:
        """Curve parameter where the curve crosses ``circle``'s circumference.

        Samples the circumference and returns the parameter of the first
        curve sample lying within the threshold of the first matching
        boundary point.
        """
        low = circle.radius - BOUNDARY_THRESHOLD
        high = circle.radius + BOUNDARY_THRESHOLD
        near_boundary: list[tuple[float, Point]] = []
        for i in range(CURVE_SAMPLES + 1):
            t = i / CURVE_SAMPLES
            point = self.point_at(t)
            if low <= math.hypot(point.x - circle.x, point.y - circle.y) <= high:
                near_boundary.append((t, point))

        if not near_boundary:
            return None

        for boundary in circle.boundary_points(BOUNDARY_SAMPLES):
            for t, point in near_boundary:
                if point.distance_to(boundary.x, boundary.y) <= BOUNDARY_THRESHOLD:
                    return t
        return None

    def visible_interval(self) -> tuple[float, float]:
        """The (t0, t1) range actually drawn.

        Raises:
            GeometryUnsolvableError: If either circle crossing cannot be found.
        """
        self.update_control_point()
        key = (
            self.start,
            self.end,
            self.control_point,
            self.circle_from.radius,
            self.circle_to.radius,
        )
        if key != self._interval_key:
            t0 = self.boundary_parameter(self.circle_from)
            if t0 is None:
                raise GeometryUnsolvableError(
                    "Curve does not cross the source circle", endpoint="from"
                )
            t1 = self.boundary_parameter(self.circle_to)
            if t1 is None:
                raise GeometryUnsolvableError(
                    "Curve does not cross the destination circle", endpoint="to"
                )
            self._interval = (t0, t1)
            self._interval_key = key
        return self._interval  # type: ignore[return-value]

    def draw_curve(self, surface: Surface, theme: Theme) -> None:
        try:
            t0, t1 = self.visible_interval()
        except GeometryUnsolvableError as e:
            logger.warning("Can't draw curve: %s", e)
            return

        points = [
            self.point_at(t0 + (t1 - t0) * i / DRAW_SEGMENTS)
            for i in range(DRAW_SEGMENTS + 1)
        ]
        color = self.color(theme)
        surface.stroke_path(points, DrawStyle(stroke=color))

        angle = math.atan2(
            self.control_point.y - self.circle_to.y,
            self.control_point.x - self.circle_to.x,
        )
        surface.fill_polygon(arrowhead(self.point_at(t1), angle), color)

    def segment_hit_parameter(self, x: float, y: float) -> float | None:
        """Parameter of the first visible sample within the hit threshold."""
        try:
            t0, t1 = self.visible_interval()
        except GeometryUnsolvableError:
            return None
        for i in range(CURVE_SAMPLES + 1):
            t = t0 + (t1 - t0) * i / CURVE_SAMPLES
            if self.point_at(t).distance_to(x, y) <= HIT_THRESHOLD:
                return t
        return None

    def label_position(self) -> Point:
        apex = self._offset_point(0.5)
        start, end = self.start, self.end
        angle = angle_between(start.x, start.y, end.x, end.y)
        return Point(
            apex.x + CURVE_LABEL_OFFSET * math.sin(angle),
            apex.y + CURVE_LABEL_OFFSET * math.cos(angle),
        )

    def is_label_clicked_at(self, x: float, y: float) -> bool:
        if self.label_position().distance_to(x, y) <= LABEL_HIT_RADIUS:
            return True
        return self.segment_hit_parameter(x, y) is not None

    def is_curve_clicked_at(self, x: float, y: float) -> bool:
        return self.is_label_clicked_at(x, y)

    def recalculate_from_point(self, x: float, y: float) -> None:
        start, end = self.start, self.end
        dx = end.x - start.x
        dy = end.y - start.y
        chord = math.hypot(dx, dy)
        if chord == 0:
            return

        # Chord projection gives the curve parameter the point should sit at
        t = ((x - start.x) * dx + (y - start.y) * dy) / (chord * chord)
        if not 0 < t < 1:
            logger.debug("Drag point projects outside the chord (t=%.3f), ignored", t)
            return

        # Control point relative to start, from B(t) = (x, y)
        denominator = 2 * t * (1 - t)
        rel_x = (x - start.x - t * t * dx) / denominator
        rel_y = (y - start.y - t * t * dy) / denominator

        angle = angle_between(start.x, start.y, end.x, end.y)
        self.parameter = rel_y * math.cos(angle) - rel_x * math.sin(angle)
        self.update_control_point()


class LoopShape(Shape):
    """Self-loop drawn as an arc hanging off the state's circle."""

    kind = ShapeKind.LOOP

    def __init__(self, circle: Circle, parameter: float = 1.0):
        super().__init__(circle, circle, parameter)
        self.radius = LOOP_RADIUS
        self.start_angle = LOOP_SWEEP
        self.end_angle = -LOOP_SWEEP

    def update_control_point(self) -> None:
        owner = self.circle_to
        self.control_point = Point(
            owner.x + self.radius * math.cos(self.parameter),
            owner.y + self.radius * math.sin(self.parameter),
        )
        self.start_angle = LOOP_SWEEP + self.parameter
        self.end_angle = -LOOP_SWEEP + self.parameter

    def end_point(self) -> Point:
        return Point(
            self.control_point.x + self.radius * math.cos(self.end_angle),
            self.control_point.y + self.radius * math.sin(self.end_angle),
        )

    def draw_curve(self, surface: Surface, theme: Theme) -> None:
        color = self.color(theme)
        arc = Arc(
            self.control_point.x,
            self.control_point.y,
            self.radius,
            self.start_angle,
            self.end_angle,
            anticlockwise=True,
        )
        surface.stroke_path(arc, DrawStyle(stroke=color))

        tip = self.end_point()
        angle = math.atan2(tip.y - self.circle_to.y, tip.x - self.circle_to.x)
        surface.fill_polygon(arrowhead(tip, angle), color)

    def label_position(self) -> Point:
        self.update_control_point()
        return Point(
            self.control_point.x + LOOP_LABEL_DISTANCE * math.cos(self.parameter),
            self.control_point.y + LOOP_LABEL_DISTANCE * math.sin(self.parameter),
        )

    def is_label_clicked_at(self, x: float, y: float) -> bool:
        return self.label_position().distance_to(x, y) <= LABEL_HIT_RADIUS

    def is_curve_clicked_at(self, x: float, y: float) -> bool:
        self.update_control_point()
        inside_arc = self.control_point.distance_to(x, y) <= self.radius
        if inside_arc and not self.circle_to.is_point_inside(x, y):
            return True
        return self.is_label_clicked_at(x, y)

    def recalculate_from_point(self, x: float, y: float) -> None:
        self.parameter = angle_between(self.circle_to.x, self.circle_to.y, x, y)
        self.update_control_point()


class InitialMarkerShape(Shape):
    """Straight arrow pointing at the initial state; it has no label."""

    kind = ShapeKind.INITIAL

    def __init__(self, circle_to: Circle, parameter: float = 0.0):
        super().__init__(None, circle_to, parameter)
        self.length = INITIAL_MARKER_LENGTH
        self.label_visible = False
        self.tail = Point(0.0, 0.0)

    def set_label_visible(self, visible: bool) -> None:
        self.label_visible = False

    def update_control_point(self) -> None:
        self.control_point = self.circle_to.boundary_point(self.parameter)
        self.tail = Point(
            self.control_point.x + self.length * math.cos(self.parameter),
            self.control_point.y + self.length * math.sin(self.parameter),
        )

    @property
    def tip(self) -> Point:
        return self.control_point

    def draw_curve(self, surface: Surface, theme: Theme) -> None:
        color = self.color(theme)
        surface.stroke_path([self.tail, self.tip], DrawStyle(stroke=color))
        surface.fill_polygon(arrowhead(self.tip, self.parameter), color)

    def draw_label(self, surface: Surface, theme: Theme) -> None:
        return

    def label_position(self) -> Point:
        self.update_control_point()
        return self.tail

    def is_label_clicked_at(self, x: float, y: float) -> bool:
        return False

    def is_curve_clicked_at(self, x: float, y: float) -> bool:
        self.update_control_point()
        return distance_to_segment(x, y, self.tail, self.tip) <= HIT_THRESHOLD

    def recalculate_from_point(self, x: float, y: float) -> None:
        self.parameter = angle_between(self.circle_to.x, self.circle_to.y, x, y)
        self.update_control_point()


def create_shape(circle_from: Circle | None, circle_to: Circle) -> Shape:
    """Pick the shape variant for a (source, destination) pair."""
    if circle_from is circle_to:
        return LoopShape(circle_to)
    if circle_from is None:
        return InitialMarkerShape(circle_to)
    return CurveShape(circle_from, circle_to)
