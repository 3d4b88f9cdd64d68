"""Step-driven animation of an automaton consuming a word.

The walk is a generator of highlight changes. Each yielded step has
already been applied to the graph's highlight flags and carries the
delay the host should wait before resuming. ``Sequencer.run`` is the
asyncio driver; ``Sequencer.trace`` replays the same walk without
waiting.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Sequence

from ..model.automaton import AutomatonGraph, StateNode, UnionComposite
from .settings import AnimationSettings

logger = logging.getLogger(__name__)


class SimulationPhase(str, Enum):
    """Where the sequencer is in its walk."""

    IDLE = "idle"
    FLICKERING = "flickering"
    TRANSITIONING = "transitioning"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class AnimationStep:
    """One highlight toggle followed by a pause."""

    target: StateNode | UnionComposite
    highlighted: bool
    delay: float
    phase: SimulationPhase


@dataclass
class SimulationResult:
    """Outcome of a walk."""

    word: str
    visited: list[StateNode] = field(default_factory=list)
    consumed: int = 0
    phase: SimulationPhase = SimulationPhase.IDLE
    accepted: bool = False
    reason: str | None = None

    @property
    def final_state(self) -> StateNode | None:
        return self.visited[-1] if self.visited else None

    @property
    def path(self) -> list[str]:
        """Names of the visited states, start state first."""
        return [state.name for state in self.visited]


def _word_text(word: str | Sequence[str]) -> str:
    return word if isinstance(word, str) else " ".join(word)


class Sequencer:
    """Walks a word over an automaton, emitting highlight steps.

    The sequencer writes ``current_state`` and highlight flags on the graph
    it animates. It guards against overlapping runs of itself, but nothing
    stops a host from editing the graph mid-run.
    """

    def __init__(self, automaton: AutomatonGraph, settings: AnimationSettings | None = None):
        self.automaton = automaton
        self.settings = settings or AnimationSettings()
        self.phase = SimulationPhase.IDLE
        self.visited: list[StateNode] = []
        self.consumed = 0
        self.reason: str | None = None
        self._word = ""
        self._running = False
        self._cancelled = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def result(self) -> SimulationResult:
        current = self.automaton.current_state
        accepted = (
            self.phase == SimulationPhase.DONE
            and current is not None
            and current.is_final
        )
        return SimulationResult(
            word=self._word,
            visited=list(self.visited),
            consumed=self.consumed,
            phase=self.phase,
            accepted=accepted,
            reason=self.reason,
        )

    def cancel(self) -> None:
        """Stop a running walk at its next suspension point."""
        self._cancelled = True

    # -------------------------------------------------------------------------
    # Walk
    # -------------------------------------------------------------------------

    def steps(self, word: str | Sequence[str]) -> Iterator[AnimationStep]:
        """Generate the highlight steps for ``word``.

        Symbols are the characters of a string, or the items of any other
        sequence.
        """
        self._word = _word_text(word)
        self.phase = SimulationPhase.IDLE
        self.visited = []
        self.consumed = 0
        self.reason = None

        automaton = self.automaton
        automaton.current_state = automaton.initial_state
        state = automaton.current_state
        if state is None:
            logger.warning("No initial state set, nothing to simulate")
            self._abort("no initial state")
            return

        logger.info("Processing word %r from initial state %r", self._word, state.name)
        self.visited.append(state)
        yield from self._flicker(state)
        yield from self._pulse_state(state)

        for symbol in word:
            previous = automaton.current_state
            captured = previous.transition(symbol) if previous is not None else None
            following = automaton.step_state(captured) if captured is not None else None
            if previous is None or following is None:
                name = previous.name if previous is not None else None
                logger.warning("No transition from %r on %r, stopping", name, symbol)
                self._abort(f"no transition from {name!r} on {symbol!r}")
                return

            automaton.current_state = following
            self.visited.append(following)
            self.consumed += 1
            logger.info("%r -> %s", symbol, following.name)

            for composite in automaton.get_union_composites():
                if composite.source is previous and composite.destination is following:
                    yield from self._pulse_union(composite)
            yield from self._pulse_state(following)

        yield from self._flicker(automaton.current_state)
        self.phase = SimulationPhase.DONE
        logger.info(
            "Finished on %r (%s)",
            automaton.current_state.name,
            "accepted" if automaton.current_state.is_final else "rejected",
        )

    def _abort(self, reason: str) -> None:
        self.phase = SimulationPhase.ABORTED
        self.reason = reason

    def _emit(
        self,
        target: StateNode | UnionComposite,
        highlighted: bool,
        delay: float,
        phase: SimulationPhase,
    ) -> AnimationStep:
        self.phase = phase
        target.set_highlight(highlighted)
        return AnimationStep(target, highlighted, self.settings.scaled(delay), phase)

    def _flicker(self, state: StateNode) -> Iterator[AnimationStep]:
        interval = self.settings.flicker_interval
        for _ in range(self.settings.flicker_count):
            yield self._emit(state, True, interval, SimulationPhase.FLICKERING)
            yield self._emit(state, False, interval, SimulationPhase.FLICKERING)

    def _pulse_state(self, state: StateNode) -> Iterator[AnimationStep]:
        phase = SimulationPhase.TRANSITIONING
        yield self._emit(state, True, self.settings.transition_on, phase)
        yield self._emit(state, False, self.settings.transition_off, phase)

    def _pulse_union(self, composite: UnionComposite) -> Iterator[AnimationStep]:
        phase = SimulationPhase.TRANSITIONING
        yield self._emit(composite, True, self.settings.union_on, phase)
        yield self._emit(composite, False, self.settings.union_off, phase)

    # -------------------------------------------------------------------------
    # Drivers
    # -------------------------------------------------------------------------

    def trace(self, word: str | Sequence[str]) -> SimulationResult:
        """Run the walk to completion without waiting between steps."""
        for _ in self.steps(word):
            pass
        return self.result

    async def run(
        self,
        word: str | Sequence[str],
        on_step: Callable[[AnimationStep], None] | None = None,
    ) -> SimulationResult:
        """Animate ``word``, sleeping between highlight toggles.

        Args:
            word: Input word.
            on_step: Called after each highlight change, typically to redraw.

        Returns:
            The result of the walk. A call made while another run is in
            flight returns an aborted result with reason ``"busy"``.
        """
        if self._running:
            logger.warning("Simulation already running, ignoring %r", _word_text(word))
            return SimulationResult(
                word=_word_text(word),
                phase=SimulationPhase.ABORTED,
                reason="busy",
            )

        self._running = True
        self._cancelled = False
        steps = self.steps(word)
        try:
            for step in steps:
                if on_step is not None:
                    on_step(step)
                await asyncio.sleep(step.delay)
                if self._cancelled:
                    logger.info("Simulation cancelled")
                    self._abort("cancelled")
                    break
        except asyncio.CancelledError:
            self._abort("cancelled")
            raise
        finally:
            steps.close()
            self.automaton.clear_highlights()
            self._running = False
        return self.result
