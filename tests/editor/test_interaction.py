"""Tests for pointer-driven editing."""

import pytest

from dfa_studio.editor.interaction import (
    EditKind,
    EditorController,
    InteractionState,
    PointerEvent,
)


@pytest.fixture
def editor(automaton):
    return EditorController(automaton)


@pytest.fixture
def interaction():
    return InteractionState()


@pytest.fixture
def two_states(automaton):
    a = automaton.create_state("a", 100, 100)
    b = automaton.create_state("b", 300, 100)
    return a, b


def tap(editor, interaction, x, y, **modifiers):
    editor.pointer_down(interaction, PointerEvent(x, y, **modifiers))
    return editor.pointer_up(interaction, PointerEvent(x, y, **modifiers))


class TestDoubleClick:
    def test_creates_state_and_asks_for_name(self, editor, interaction, automaton):
        request = editor.double_click(interaction, PointerEvent(50, 60))

        state = request.target
        assert request.kind == EditKind.STATE_LABEL
        assert automaton.get_states() == [state]
        assert state.position.x == 50
        assert interaction.pending_edit is request

        assert editor.commit_state_label(interaction, "  q0 ")
        assert state.name == "q0"
        assert interaction.pending_edit is None

    def test_blank_name_rejected(self, editor, interaction):
        request = editor.double_click(interaction, PointerEvent(50, 60))

        assert not editor.commit_state_label(interaction, "   ")
        assert request.target.name == ""
        assert interaction.pending_edit is None

    def test_on_state_sets_initial(self, editor, interaction, automaton, two_states):
        a, b = two_states

        assert editor.double_click(interaction, PointerEvent(305, 95)) is None
        assert automaton.initial_state is b
        assert automaton.initial_marker.destination is b


class TestStateGestures:
    def test_drag_moves_state(self, editor, interaction, two_states):
        a, _ = two_states

        editor.pointer_down(interaction, PointerEvent(110, 100))
        assert editor.pointer_move(interaction, PointerEvent(140, 120))
        request = editor.pointer_up(interaction, PointerEvent(140, 120))

        assert request is None
        assert a.position.x == 130
        assert a.position.y == 120
        assert interaction.selected_state is None

    def test_tap_asks_for_name(self, editor, interaction, two_states):
        a, _ = two_states

        request = tap(editor, interaction, 100, 100)

        assert request.kind == EditKind.STATE_LABEL
        assert request.target is a
        assert request.anchor == a.position

    def test_tap_brings_state_to_front(self, editor, interaction, automaton, two_states):
        a, _ = two_states

        tap(editor, interaction, 100, 100)

        assert automaton.get_elements()[-1] is a

    def test_ctrl_toggles_final(self, editor, interaction, two_states):
        a, _ = two_states

        assert tap(editor, interaction, 100, 100, ctrl=True) is None
        assert a.is_final
        tap(editor, interaction, 100, 100, ctrl=True)
        assert not a.is_final

    def test_tap_empty_canvas(self, editor, interaction, two_states):
        assert tap(editor, interaction, 700, 700) is None
        assert not editor.pointer_move(interaction, PointerEvent(710, 710))

    def test_pointer_ignored_while_editing(self, editor, interaction, two_states):
        tap(editor, interaction, 100, 100)

        editor.pointer_down(interaction, PointerEvent(300, 100))
        assert interaction.selected_state is None

        editor.cancel_edit(interaction)
        assert interaction.pending_edit is None


class TestCreatingTransitions:
    def test_shift_drag_joins_states(self, editor, interaction, automaton, two_states):
        a, b = two_states

        editor.pointer_down(interaction, PointerEvent(100, 100, shift=True))
        auxiliary = automaton.auxiliary_state
        assert auxiliary is not None
        assert interaction.creating_union

        editor.pointer_move(interaction, PointerEvent(300, 100))
        assert auxiliary.position.x == 300

        request = editor.pointer_up(interaction, PointerEvent(300, 100))

        assert automaton.auxiliary_state is None
        assert request.kind == EditKind.UNION_LABEL
        composite = request.target
        assert composite is automaton.find_union_composite(a, b)

        assert editor.commit_union_label(interaction, "x, y")
        assert composite.symbols == ["x", "y"]
        assert automaton.step_state(a.transition("y")) is b

    def test_release_on_empty_canvas(self, editor, interaction, automaton, two_states):
        a, _ = two_states

        editor.pointer_down(interaction, PointerEvent(100, 100, shift=True))
        editor.pointer_move(interaction, PointerEvent(200, 400))
        request = editor.pointer_up(interaction, PointerEvent(200, 400))

        assert request is None
        assert automaton.auxiliary_state is None
        assert automaton.get_union_composites() == []
        assert a.unions == ()

    def test_blank_union_label_rejected(self, editor, interaction, automaton, two_states):
        a, b = two_states
        editor.pointer_down(interaction, PointerEvent(100, 100, shift=True))
        editor.pointer_move(interaction, PointerEvent(300, 100))
        editor.pointer_up(interaction, PointerEvent(300, 100))

        assert not editor.commit_union_label(interaction, " ")
        assert [u.symbol for u in a.unions] == [""]


class TestCompositeGestures:
    @pytest.fixture
    def composite(self, automaton, two_states):
        a, b = two_states
        automaton.join(a, b, "x")
        return automaton.find_union_composite(a, b)

    def test_tap_label_asks_for_symbols(self, editor, interaction, composite):
        label = composite.label_position()

        request = tap(editor, interaction, label.x, label.y)

        assert request.kind == EditKind.UNION_LABEL
        assert request.target is composite

    def test_drag_reshapes(self, editor, interaction, composite):
        label = composite.label_position()

        editor.pointer_down(interaction, PointerEvent(label.x, label.y))
        editor.pointer_move(interaction, PointerEvent(200, 160))
        request = editor.pointer_up(interaction, PointerEvent(200, 160))

        assert request is None
        assert composite.shape.parameter == pytest.approx(120)

    def test_tap_initial_marker_has_no_edit(self, editor, interaction, automaton, two_states):
        a, _ = two_states
        automaton.set_initial_state(a)
        shape = automaton.initial_marker.shape
        shape.update_control_point()
        x = (shape.tail.x + shape.tip.x) / 2
        y = (shape.tail.y + shape.tip.y) / 2

        assert tap(editor, interaction, x, y) is None
