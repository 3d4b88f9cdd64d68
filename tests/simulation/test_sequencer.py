"""Tests for the simulation sequencer."""

import asyncio

import pytest

from dfa_studio.model.automaton import AutomatonGraph, UnionComposite
from dfa_studio.simulation.sequencer import Sequencer, SimulationPhase
from dfa_studio.simulation.settings import INSTANT, AnimationSettings


class TestTrace:
    def test_rejected_word(self, sequencer):
        result = sequencer.trace("101")

        assert result.path == ["a", "b", "b", "a"]
        assert result.phase == SimulationPhase.DONE
        assert result.consumed == 3
        assert not result.accepted

    def test_accepted_word(self, sequencer):
        result = sequencer.trace("111")

        assert result.path == ["a", "b", "a", "b"]
        assert result.accepted
        assert result.final_state.name == "b"

    def test_empty_word(self, sequencer):
        result = sequencer.trace("")

        assert result.path == ["a"]
        assert result.phase == SimulationPhase.DONE
        assert not result.accepted

    def test_sequence_of_symbols(self, pair_automaton):
        result = Sequencer(pair_automaton, INSTANT).trace(["x", "y", "x"])

        assert result.path == ["p", "q", "q", "q"]
        assert result.word == "x y x"
        assert result.accepted

    def test_deterministic(self, parity_automaton):
        first = Sequencer(parity_automaton, INSTANT).trace("0110")
        second = Sequencer(parity_automaton, INSTANT).trace("0110")

        assert first.path == second.path
        assert first.accepted == second.accepted

    def test_missing_transition_aborts(self, sequencer):
        result = sequencer.trace("102")

        assert result.phase == SimulationPhase.ABORTED
        assert result.consumed == 2
        assert result.path == ["a", "b", "b"]
        assert "no transition" in result.reason
        assert not result.accepted

    def test_no_initial_state(self, automaton, caplog):
        automaton.create_state("a")

        result = Sequencer(automaton, INSTANT).trace("1")

        assert result.phase == SimulationPhase.ABORTED
        assert result.reason == "no initial state"
        assert result.path == []
        assert "No initial state" in caplog.text

    def test_current_state_follows_walk(self, sequencer, parity_automaton):
        sequencer.trace("1")

        assert parity_automaton.current_state.name == "b"

    def test_restarts_from_initial(self, sequencer):
        sequencer.trace("1")
        result = sequencer.trace("1")

        assert result.path == ["a", "b"]


class TestSteps:
    def test_step_sequence(self, parity_automaton):
        sequencer = Sequencer(parity_automaton)
        steps = list(sequencer.steps("1"))

        a = parity_automaton.find_by_name("a")
        b = parity_automaton.find_by_name("b")
        # Flicker a, pulse a, pulse a->b, pulse b, flicker b
        assert len(steps) == 6 + 2 + 2 + 2 + 6
        assert all(step.target is a for step in steps[:8])
        assert isinstance(steps[8].target, UnionComposite)
        assert steps[8].target.source is a and steps[8].target.destination is b
        assert all(step.target is b for step in steps[10:])
        assert [s.highlighted for s in steps[:2]] == [True, False]

    def test_phases(self, parity_automaton):
        steps = list(Sequencer(parity_automaton).steps("1"))

        assert steps[0].phase == SimulationPhase.FLICKERING
        assert steps[6].phase == SimulationPhase.TRANSITIONING
        assert steps[-1].phase == SimulationPhase.FLICKERING

    def test_steps_apply_highlights(self, parity_automaton):
        a = parity_automaton.find_by_name("a")
        steps = Sequencer(parity_automaton).steps("")

        first = next(steps)
        assert first.highlighted
        assert a.highlighted
        next(steps)
        assert not a.highlighted

    def test_delays_scale_with_speed(self, parity_automaton):
        normal = list(Sequencer(parity_automaton).steps("1"))
        fast = list(Sequencer(parity_automaton, AnimationSettings(speed=2)).steps("1"))

        assert normal[0].delay == pytest.approx(0.125)
        assert [s.delay for s in fast] == pytest.approx([s.delay / 2 for s in normal])

    def test_highlights_off_after_trace(self, sequencer, parity_automaton):
        sequencer.trace("1101")

        assert not any(e.highlighted for e in parity_automaton.get_elements())


class TestRun:
    def test_run_instant(self, sequencer, parity_automaton):
        seen = []

        result = asyncio.run(sequencer.run("111", on_step=seen.append))

        assert result.accepted
        assert len(seen) > 0
        assert not sequencer.running
        assert not any(e.highlighted for e in parity_automaton.get_elements())

    def test_busy_guard(self, parity_automaton):
        settings = AnimationSettings(flicker_interval=0.01, flicker_count=1)
        sequencer = Sequencer(parity_automaton, settings)

        async def scenario():
            task = asyncio.create_task(sequencer.run("1"))
            await asyncio.sleep(0)
            assert sequencer.running
            second = await sequencer.run("11")
            first = await task
            return first, second

        first, second = asyncio.run(scenario())

        assert second.phase == SimulationPhase.ABORTED
        assert second.reason == "busy"
        assert first.phase == SimulationPhase.DONE
        assert first.accepted

    def test_cancel(self, parity_automaton):
        sequencer = Sequencer(parity_automaton, AnimationSettings(flicker_interval=0.05))

        async def scenario():
            task = asyncio.create_task(sequencer.run("111"))
            await asyncio.sleep(0)
            sequencer.cancel()
            return await task

        result = asyncio.run(scenario())

        assert result.phase == SimulationPhase.ABORTED
        assert result.reason == "cancelled"
        assert not sequencer.running
        assert not any(e.highlighted for e in parity_automaton.get_elements())

    def test_task_cancellation_clears_highlights(self, parity_automaton):
        sequencer = Sequencer(parity_automaton, AnimationSettings(flicker_interval=1.0))

        async def scenario():
            task = asyncio.create_task(sequencer.run("1"))
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())

        assert not sequencer.running
        assert sequencer.phase == SimulationPhase.ABORTED
        assert not any(e.highlighted for e in parity_automaton.get_elements())

    def test_run_on_empty_automaton(self):
        result = asyncio.run(Sequencer(AutomatonGraph(), INSTANT).run("1"))

        assert result.phase == SimulationPhase.ABORTED
        assert result.reason == "no initial state"
