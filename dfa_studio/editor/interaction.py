"""Pointer-driven editing of an automaton graph.

The host owns an ``InteractionState`` and passes it to every controller
call together with the pointer event. The controller never keeps
selection or drag flags of its own.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ..geometry.primitives import Point
from ..model.automaton import AutomatonGraph, StateNode, UnionComposite
from ..model.element_types import ElementKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in canvas coordinates."""

    x: float
    y: float
    shift: bool = False
    ctrl: bool = False


class EditKind(str, Enum):
    """What a pending label edit changes."""

    STATE_LABEL = "state_label"
    UNION_LABEL = "union_label"


@dataclass(frozen=True)
class EditRequest:
    """Ask the host to open a text box at ``anchor``."""

    kind: EditKind
    target: StateNode | UnionComposite
    anchor: Point


@dataclass
class InteractionState:
    """Selection, drag and edit flags for one canvas."""

    selected_state: StateNode | None = None
    selected_from_state: StateNode | None = None
    selected_composite: UnionComposite | None = None
    state_dragged: bool = False
    composite_dragged: bool = False
    creating_union: bool = False
    last_pointer: Point | None = None
    pending_edit: EditRequest | None = None

    def reset_gesture(self) -> None:
        """Forget everything but a pending edit."""
        self.selected_state = None
        self.selected_from_state = None
        self.selected_composite = None
        self.state_dragged = False
        self.composite_dragged = False
        self.creating_union = False
        self.last_pointer = None


class EditorController:
    """Turns pointer gestures into graph edits.

    * press and drag a state: move it
    * press and drag an arrow: reshape it
    * tap a state or an arrow: request a label edit
    * shift-drag from a state onto another: create a transition
    * ctrl-press a state: toggle final
    * double-click a state: make it initial; elsewhere: new state
    """

    def __init__(self, automaton: AutomatonGraph):
        self.automaton = automaton

    def _state_at(self, x: float, y: float) -> StateNode | None:
        for element in self.automaton.registry.reversed_view():
            if element.kind != ElementKind.STATE:  # type: ignore[attr-defined]
                continue
            if element.is_auxiliary:  # type: ignore[attr-defined]
                continue
            if element.is_clicked_at(x, y):
                return element  # type: ignore[return-value]
        return None

    def pointer_down(self, interaction: InteractionState, event: PointerEvent) -> None:
        if interaction.pending_edit is not None:
            return
        interaction.last_pointer = Point(event.x, event.y)

        state = self._state_at(event.x, event.y)
        if state is not None and event.ctrl:
            self.automaton.set_final_state(state)
            return

        if state is not None and event.shift and not interaction.creating_union:
            auxiliary = self.automaton.create_auxiliary_state(event.x, event.y)
            self.automaton.join(state, auxiliary, "")
            interaction.creating_union = True
            interaction.selected_from_state = state
            interaction.selected_state = auxiliary
            return

        element = self.automaton.registry.nth_hit_element(0, event.x, event.y)
        if element is None:
            return
        self.automaton.registry.bring_to_front(element)
        if element.kind == ElementKind.STATE:  # type: ignore[attr-defined]
            interaction.selected_state = element  # type: ignore[assignment]
        else:
            interaction.selected_composite = element  # type: ignore[assignment]

    def pointer_move(self, interaction: InteractionState, event: PointerEvent) -> bool:
        """Drag whatever is selected.

        Returns:
            True if the canvas needs a redraw.
        """
        state = interaction.selected_state
        if state is not None:
            previous = interaction.last_pointer or Point(event.x, event.y)
            position = state.position
            state.set_position(
                position.x + event.x - previous.x,
                position.y + event.y - previous.y,
            )
            interaction.state_dragged = True
            interaction.last_pointer = Point(event.x, event.y)
            return True

        composite = interaction.selected_composite
        if composite is not None:
            composite.recalculate_from_point(event.x, event.y)
            interaction.composite_dragged = True
            interaction.last_pointer = Point(event.x, event.y)
            return True

        return False

    def pointer_up(
        self, interaction: InteractionState, event: PointerEvent
    ) -> EditRequest | None:
        """Finish a gesture, possibly asking for a label edit."""
        request: EditRequest | None = None

        if interaction.creating_union:
            source = interaction.selected_from_state
            target = self._state_at(event.x, event.y)
            if source is not None and target is not None:
                self.automaton.join(source, target, "")
                composite = self.automaton.find_union_composite(source, target)
                if composite is not None:
                    request = self._union_edit(composite)
            self.automaton.remove_auxiliary_state()
        elif interaction.selected_composite is not None and not interaction.composite_dragged:
            if not interaction.selected_composite.is_initial_marker:
                request = self._union_edit(interaction.selected_composite)
        elif interaction.selected_state is not None and not interaction.state_dragged:
            request = self._state_edit(interaction.selected_state)

        interaction.reset_gesture()
        interaction.pending_edit = request
        return request

    def double_click(
        self, interaction: InteractionState, event: PointerEvent
    ) -> EditRequest | None:
        state = self._state_at(event.x, event.y)
        if state is not None:
            self.automaton.set_initial_state(state)
            return None
        state = self.automaton.create_state("", event.x, event.y)
        request = self._state_edit(state)
        interaction.pending_edit = request
        return request

    def commit_state_label(self, interaction: InteractionState, text: str) -> bool:
        """Apply a committed state name. Blank names are rejected."""
        request = interaction.pending_edit
        interaction.pending_edit = None
        if request is None or request.kind != EditKind.STATE_LABEL:
            return False
        text = text.strip()
        if not text:
            logger.info("State label not valid")
            return False
        return self.automaton.rename_state(request.target, text)  # type: ignore[arg-type]

    def commit_union_label(self, interaction: InteractionState, text: str) -> bool:
        """Replace an arrow's symbols with the comma separated ``text``."""
        request = interaction.pending_edit
        interaction.pending_edit = None
        if request is None or request.kind != EditKind.UNION_LABEL:
            return False
        text = text.strip()
        if not text:
            logger.info("Union label not valid")
            return False
        return self.automaton.relabel_union_composite(request.target, text)  # type: ignore[arg-type]

    def cancel_edit(self, interaction: InteractionState) -> None:
        interaction.pending_edit = None

    def _state_edit(self, state: StateNode) -> EditRequest:
        return EditRequest(EditKind.STATE_LABEL, state, state.position)

    def _union_edit(self, composite: UnionComposite) -> EditRequest:
        return EditRequest(EditKind.UNION_LABEL, composite, composite.label_position())
