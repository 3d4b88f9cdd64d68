"""Drawing surface protocol and an in-memory recording surface."""

import re
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from .primitives import Point

_FONT_SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)px")


@dataclass(frozen=True)
class Arc:
    """A circular arc, angles in radians."""

    cx: float
    cy: float
    radius: float
    start: float
    end: float
    anticlockwise: bool = False


@dataclass(frozen=True)
class DrawStyle:
    """Stroke and optional fill for a path."""

    stroke: str = "black"
    fill: str | None = None
    line_width: float = 1.0


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle to clear."""

    x: float
    y: float
    width: float
    height: float


PathSpec = Sequence[Point] | Arc


class Surface(Protocol):
    """What the core needs from a 2D drawing surface."""

    def stroke_path(self, path: PathSpec, style: DrawStyle) -> None: ...

    def fill_text(self, text: str, x: float, y: float, font: str, color: str) -> None: ...

    def fill_polygon(self, points: Sequence[Point], color: str) -> None: ...

    def measure_text_width(self, text: str, font: str) -> float: ...

    def clear(self, region: Region | None = None) -> None: ...


def font_size(font: str, default: float = 16.0) -> float:
    """Pixel size of a CSS-like font string such as ``"20px Times New Roman"``."""
    match = _FONT_SIZE_RE.search(font)
    return float(match.group(1)) if match else default


def estimate_text_width(text: str, font: str) -> float:
    """Rough advance width: half an em per character."""
    return len(text) * font_size(font) * 0.5


@dataclass
class DrawCommand:
    """One recorded drawing call."""

    op: str
    args: dict[str, Any] = field(default_factory=dict)


class RecordingSurface:
    """A surface that records every call, for tests and headless hosts."""

    def __init__(self):
        self.commands: list[DrawCommand] = []

    def stroke_path(self, path: PathSpec, style: DrawStyle) -> None:
        self.commands.append(DrawCommand("stroke_path", {"path": path, "style": style}))

    def fill_text(self, text: str, x: float, y: float, font: str, color: str) -> None:
        self.commands.append(
            DrawCommand(
                "fill_text",
                {"text": text, "x": x, "y": y, "font": font, "color": color},
            )
        )

    def fill_polygon(self, points: Sequence[Point], color: str) -> None:
        self.commands.append(
            DrawCommand("fill_polygon", {"points": list(points), "color": color})
        )

    def measure_text_width(self, text: str, font: str) -> float:
        return estimate_text_width(text, font)

    def clear(self, region: Region | None = None) -> None:
        self.commands.clear()

    def of(self, op: str) -> list[DrawCommand]:
        """Recorded commands of one kind."""
        return [command for command in self.commands if command.op == op]

    def texts(self) -> list[str]:
        """Every text drawn, in order."""
        return [command.args["text"] for command in self.of("fill_text")]
