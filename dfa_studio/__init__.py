"""DFA Studio: an editor and simulator core for deterministic finite automata."""
