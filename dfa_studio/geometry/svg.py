"""SVG rendition of the drawing surface."""

import math
from typing import Sequence
from xml.sax.saxutils import escape, quoteattr

from .primitives import Point
from .surface import Arc, DrawStyle, PathSpec, Region, estimate_text_width, font_size


def _font_family(font: str) -> str:
    parts = font.split(maxsplit=1)
    return parts[1] if len(parts) == 2 else "serif"


def _points_attr(points: Sequence[Point]) -> str:
    return " ".join(f"{p.x:.2f},{p.y:.2f}" for p in points)


class SvgSurface:
    """Collects drawing calls as SVG elements."""

    def __init__(self, width: int = 800, height: int = 600, background: str = "white"):
        self.width = width
        self.height = height
        self.background = background
        self._elements: list[str] = []

    def stroke_path(self, path: PathSpec, style: DrawStyle) -> None:
        fill = quoteattr(style.fill or "none")
        stroke = f'stroke={quoteattr(style.stroke)} stroke-width="{style.line_width:g}"'
        if isinstance(path, Arc):
            self._elements.append(self._arc(path, fill, stroke))
        else:
            self._elements.append(
                f'<polyline points="{_points_attr(path)}" fill={fill} {stroke}/>'
            )

    def _arc(self, arc: Arc, fill: str, stroke: str) -> str:
        if arc.anticlockwise:
            sweep = (arc.start - arc.end) % (2 * math.pi)
        else:
            sweep = (arc.end - arc.start) % (2 * math.pi)
        if sweep == 0 and arc.start != arc.end:
            sweep = 2 * math.pi
        if sweep == 0 or math.isclose(sweep, 2 * math.pi):
            return (
                f'<circle cx="{arc.cx:.2f}" cy="{arc.cy:.2f}" r="{arc.radius:.2f}" '
                f"fill={fill} {stroke}/>"
            )

        x0 = arc.cx + arc.radius * math.cos(arc.start)
        y0 = arc.cy + arc.radius * math.sin(arc.start)
        x1 = arc.cx + arc.radius * math.cos(arc.end)
        y1 = arc.cy + arc.radius * math.sin(arc.end)
        large = 1 if sweep > math.pi else 0
        direction = 0 if arc.anticlockwise else 1
        d = (
            f"M {x0:.2f} {y0:.2f} "
            f"A {arc.radius:.2f} {arc.radius:.2f} 0 {large} {direction} {x1:.2f} {y1:.2f}"
        )
        return f'<path d="{d}" fill={fill} {stroke}/>'

    def fill_text(self, text: str, x: float, y: float, font: str, color: str) -> None:
        self._elements.append(
            f'<text x="{x:.2f}" y="{y:.2f}" font-family={quoteattr(_font_family(font))} '
            f'font-size="{font_size(font):g}" fill={quoteattr(color)} '
            f'dominant-baseline="middle">{escape(text)}</text>'
        )

    def fill_polygon(self, points: Sequence[Point], color: str) -> None:
        self._elements.append(
            f'<polygon points="{_points_attr(points)}" fill={quoteattr(color)}/>'
        )

    def measure_text_width(self, text: str, font: str) -> float:
        return estimate_text_width(text, font)

    def clear(self, region: Region | None = None) -> None:
        self._elements.clear()

    def to_svg(self) -> str:
        header = (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" '
            f'height="{self.height}" viewBox="0 0 {self.width} {self.height}">'
        )
        background = (
            f'<rect width="100%" height="100%" fill={quoteattr(self.background)}/>'
        )
        return "\n".join([header, background, *self._elements, "</svg>"]) + "\n"
