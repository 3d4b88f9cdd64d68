"""Model layer: the transition table, element registry and automaton graph."""

from .element_types import ElementKind
from .transition_table import State, Union
from .registry import Element, ElementRegistry
from .automaton import AUXILIARY_STATE_ID, AutomatonGraph, StateNode, UnionComposite

__all__ = [
    "ElementKind",
    "State",
    "Union",
    "Element",
    "ElementRegistry",
    "AUXILIARY_STATE_ID",
    "AutomatonGraph",
    "StateNode",
    "UnionComposite",
]
