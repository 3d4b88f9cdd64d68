"""Schema layer for sample automaton catalogs."""

from .errors import SchemaLoadError, SchemaValidationError, UnknownSampleError
from .models import AutomatonSpec, SampleCatalog, StateSpec, TransitionSpec
from .loader import (
    build_automaton,
    get_sample,
    load_samples,
    load_yaml,
    parse_samples,
    parse_samples_from_string,
)

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "UnknownSampleError",
    "AutomatonSpec",
    "SampleCatalog",
    "StateSpec",
    "TransitionSpec",
    "build_automaton",
    "get_sample",
    "load_samples",
    "load_yaml",
    "parse_samples",
    "parse_samples_from_string",
]
