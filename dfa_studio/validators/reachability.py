"""State reachability validators."""

from ..model.automaton import AutomatonGraph
from .base import ValidationResult


def check_unreachable_states(automaton: AutomatonGraph) -> ValidationResult:
    """Check for states that cannot be reached from the initial state.

    A simulation can never visit an unreachable state, so such a state is
    either missing an incoming transition or should be removed.

    Args:
        automaton: The automaton to check.

    Returns:
        ValidationResult with errors for unreachable states.
    """
    result = ValidationResult()

    states = automaton.get_states()
    if not states:
        return result

    initial = automaton.initial_state
    if initial is None:
        result.add_error(
            code="NO_INITIAL_STATE",
            message="Automaton has states but no initial state defined",
        )
        return result

    reachable = automaton.reachable_states()
    for state in states:
        if state.is_auxiliary:
            continue
        if state not in reachable:
            result.add_error(
                code="UNREACHABLE_STATE",
                message=f"State '{state.name}' cannot be reached from initial state '{initial.name}'",
                state=state.name,
            )

    return result


def check_final_states(automaton: AutomatonGraph) -> ValidationResult:
    """Warn when no state is final; such an automaton rejects every word."""
    result = ValidationResult()
    if automaton.get_states() and not automaton.final_states:
        result.add_warning(
            code="NO_FINAL_STATE",
            message="Automaton has no final state and accepts no word",
        )
    return result
