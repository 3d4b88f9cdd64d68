"""Draws an automaton graph onto a surface."""

import math
from typing import TYPE_CHECKING

from ..model.element_types import ElementKind
from .surface import Arc, DrawStyle, Surface
from .theme import DEFAULT_THEME, Theme

if TYPE_CHECKING:
    from ..model.automaton import AutomatonGraph, StateNode


class Renderer:
    """Draws states and union composites in registry order."""

    def __init__(self, theme: Theme = DEFAULT_THEME):
        self.theme = theme

    def render(self, automaton: "AutomatonGraph", surface: Surface) -> None:
        """Clear the surface and draw every element back to front."""
        surface.clear()
        for element in automaton.get_elements():
            if element.kind == ElementKind.STATE:
                self.draw_state(element, surface)  # type: ignore[arg-type]
            else:
                element.draw(surface, self.theme)  # type: ignore[union-attr]

    def draw_state(self, state: "StateNode", surface: Surface) -> None:
        theme = self.theme
        circle = state.circle
        fill = theme.state_highlight_fill if state.highlighted else theme.state_fill
        surface.stroke_path(
            Arc(circle.x, circle.y, circle.radius, 0.0, 2 * math.pi),
            DrawStyle(stroke=theme.state_stroke, fill=fill),
        )

        if not state.label_hidden:
            width = surface.measure_text_width(state.name, theme.state_font)
            surface.fill_text(
                state.name,
                circle.x - width / 2,
                circle.y,
                theme.state_font,
                theme.state_label_color,
            )

        if state.is_final:
            surface.stroke_path(
                Arc(circle.x, circle.y, circle.radius * theme.final_ring_ratio, 0.0, 2 * math.pi),
                DrawStyle(stroke=theme.state_stroke),
            )
