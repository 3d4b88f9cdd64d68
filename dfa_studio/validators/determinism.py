"""Determinism and completeness validators."""

from collections import Counter

from ..model.automaton import AutomatonGraph
from .base import ValidationResult


def check_determinism(automaton: AutomatonGraph) -> ValidationResult:
    """Check that no state has two destinations for one symbol.

    The transition table resolves such a conflict by taking the first
    matching entry, so the later destinations are dead. Exact duplicate
    entries are only a warning.

    Args:
        automaton: The automaton to check.

    Returns:
        ValidationResult with errors for nondeterministic symbols and
        warnings for duplicate or empty-symbol transitions.
    """
    result = ValidationResult()

    for state in automaton.get_states():
        if state.is_auxiliary:
            continue

        # symbol -> {destination id: destination name}
        destinations: dict[str, dict[int, str]] = {}
        counts = Counter((union.symbol, union.state.id) for union in state.unions)

        for union in state.unions:
            target = automaton.step_state(union.state)
            target_name = target.name if target is not None else str(union.state.id)
            if not union.symbol:
                result.add_warning(
                    code="EMPTY_SYMBOL",
                    message=f"State '{state.name}' has a transition to '{target_name}' with no symbol",
                    state=state.name,
                )
                continue
            destinations.setdefault(union.symbol, {})[union.state.id] = target_name

        for symbol, targets in destinations.items():
            if len(targets) > 1:
                names = list(targets.values())
                result.add_error(
                    code="NONDETERMINISTIC_SYMBOL",
                    message=f"State '{state.name}' has {len(names)} destinations on '{symbol}': {', '.join(names)}",
                    state=state.name,
                    symbol=symbol,
                    destinations=names,
                )

        for (symbol, _), count in counts.items():
            if symbol and count > 1:
                result.add_warning(
                    code="DUPLICATE_TRANSITION",
                    message=f"State '{state.name}' repeats a transition on '{symbol}' {count} times",
                    state=state.name,
                    symbol=symbol,
                )

    return result


def check_completeness(automaton: AutomatonGraph) -> ValidationResult:
    """Warn about states missing a transition for some alphabet symbol."""
    result = ValidationResult()
    alphabet = automaton.alphabet()

    for state in automaton.get_states():
        if state.is_auxiliary:
            continue
        missing = [symbol for symbol in alphabet if state.transition(symbol) is None]
        if missing:
            result.add_warning(
                code="INCOMPLETE_STATE",
                message=f"State '{state.name}' has no transition on: {', '.join(missing)}",
                state=state.name,
                missing=missing,
            )

    return result


def check_state_names(automaton: AutomatonGraph) -> ValidationResult:
    """Warn about blank or repeated state names.

    Name lookups take the first match, so a repeated name hides the
    later states from name-based joins.
    """
    result = ValidationResult()
    names = Counter(
        state.name for state in automaton.get_states() if not state.is_auxiliary
    )

    for name, count in names.items():
        if not name.strip():
            result.add_warning(
                code="BLANK_STATE_NAME",
                message=f"{count} state(s) have no name",
            )
        elif count > 1:
            result.add_warning(
                code="DUPLICATE_STATE_NAME",
                message=f"State name '{name}' is used by {count} states",
                state=name,
            )

    return result
