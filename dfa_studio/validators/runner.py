"""Validation runner that orchestrates all validators."""

from ..model.automaton import AutomatonGraph
from ..schema.loader import build_automaton, get_sample
from .base import ValidationResult
from .determinism import check_completeness, check_determinism, check_state_names
from .reachability import check_final_states, check_unreachable_states


def run_validators(automaton: AutomatonGraph) -> ValidationResult:
    """Run all validators on an automaton.

    Args:
        automaton: The automaton to check.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    result.merge(check_state_names(automaton))
    result.merge(check_determinism(automaton))

    result.merge(check_unreachable_states(automaton))
    result.merge(check_final_states(automaton))
    result.merge(check_completeness(automaton))

    return result


def validate_sample(name: str) -> ValidationResult:
    """Build a packaged sample and validate it.

    Raises:
        UnknownSampleError: If there is no such sample.
        SchemaLoadError: If the catalog cannot be loaded.
        SchemaValidationError: If the catalog fails schema validation.
    """
    return run_validators(build_automaton(get_sample(name)))
