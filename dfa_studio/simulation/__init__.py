"""Simulation layer: animated walks of a word over an automaton."""

from .settings import INSTANT, AnimationSettings
from .sequencer import AnimationStep, Sequencer, SimulationPhase, SimulationResult

__all__ = [
    "INSTANT",
    "AnimationSettings",
    "AnimationStep",
    "Sequencer",
    "SimulationPhase",
    "SimulationResult",
]
