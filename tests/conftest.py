"""Shared fixtures for tests."""

import random

import pytest

from dfa_studio.model.automaton import AutomatonGraph
from dfa_studio.schema.loader import build_automaton, parse_samples_from_string
from dfa_studio.simulation.sequencer import Sequencer
from dfa_studio.simulation.settings import INSTANT


@pytest.fixture
def rng() -> random.Random:
    """Return a seeded random source for reproducible curve skews."""
    return random.Random(0)


@pytest.fixture
def automaton(rng) -> AutomatonGraph:
    """Return an empty automaton."""
    return AutomatonGraph(rng=rng)


@pytest.fixture
def parity_automaton(rng) -> AutomatonGraph:
    """Return the two-state automaton over {0, 1}.

    a -0-> a, a -1-> b, b -1-> a, b -0-> b; a is initial, b is final.
    """
    graph = AutomatonGraph(rng=rng)
    a = graph.create_state("a", 200, 300)
    b = graph.create_state("b", 500, 300)
    graph.set_initial_state(a)
    graph.set_final_state(b)
    graph.join("a", "a", "0")
    graph.join("a", "b", "1")
    graph.join("b", "a", "1")
    graph.join("b", "b", "0")
    return graph


@pytest.fixture
def sequencer(parity_automaton) -> Sequencer:
    """Return a zero-delay sequencer over the parity automaton."""
    return Sequencer(parity_automaton, INSTANT)


@pytest.fixture
def catalog_yaml() -> str:
    """Return a small samples catalog."""
    return """
samples:
  pair:
    description: One transition
    initial: p
    states:
      - {name: p, x: 100, y: 100}
      - {name: q, x: 300, y: 100, final: true}
    transitions:
      - {from: p, to: q, symbols: "x, y"}
      - {from: q, to: q, symbols: [x, y]}

  numbered:
    initial: 0
    states:
      - name: 0
      - name: 1
        final: true
    transitions:
      - from: 0
        to: 1
        symbols: 7
"""


@pytest.fixture
def catalog(catalog_yaml):
    """Return the parsed small catalog."""
    return parse_samples_from_string(catalog_yaml)


@pytest.fixture
def pair_automaton(catalog, rng) -> AutomatonGraph:
    """Return the automaton built from the 'pair' sample."""
    return build_automaton(catalog.samples["pair"], rng=rng)
