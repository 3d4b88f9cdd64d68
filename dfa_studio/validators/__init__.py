"""Validators for structural checks of automata."""

from .base import Severity, ValidationIssue, ValidationResult
from .determinism import check_completeness, check_determinism, check_state_names
from .reachability import check_final_states, check_unreachable_states
from .runner import run_validators, validate_sample

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_completeness",
    "check_determinism",
    "check_state_names",
    "check_final_states",
    "check_unreachable_states",
    "run_validators",
    "validate_sample",
]
