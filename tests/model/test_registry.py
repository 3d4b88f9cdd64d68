"""Tests for ElementRegistry."""

from dataclasses import dataclass

from dfa_studio.model.registry import ElementRegistry


@dataclass(eq=False)
class Box:
    name: str
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def key(self) -> str:
        return f"box:{self.name}"

    def is_clicked_at(self, x: float, y: float) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


def make_registry(*boxes):
    registry = ElementRegistry()
    for box in boxes:
        registry.add(box)
    return registry


class TestOrdering:
    def test_iterates_back_to_front(self):
        a, b, c = Box("a", 0, 0, 1, 1), Box("b", 0, 0, 1, 1), Box("c", 0, 0, 1, 1)
        registry = make_registry(a, b, c)

        assert list(registry) == [a, b, c]
        assert list(registry.reversed_view()) == [c, b, a]

    def test_bring_to_front(self):
        a, b, c = Box("a", 0, 0, 1, 1), Box("b", 0, 0, 1, 1), Box("c", 0, 0, 1, 1)
        registry = make_registry(a, b, c)

        assert registry.bring_to_front(a)
        assert list(registry) == [b, c, a]

    def test_readd_moves_to_front(self):
        a, b = Box("a", 0, 0, 1, 1), Box("b", 0, 0, 1, 1)
        registry = make_registry(a, b)
        registry.add(a)

        assert list(registry) == [b, a]
        assert len(registry) == 2

    def test_bring_unknown_to_front(self):
        registry = make_registry(Box("a", 0, 0, 1, 1))

        assert not registry.bring_to_front(Box("z", 0, 0, 1, 1))


class TestMembership:
    def test_contains_checks_identity(self):
        a = Box("a", 0, 0, 1, 1)
        registry = make_registry(a)

        assert a in registry
        assert Box("a", 0, 0, 1, 1) not in registry

    def test_remove(self):
        a, b = Box("a", 0, 0, 1, 1), Box("b", 0, 0, 1, 1)
        registry = make_registry(a, b)

        assert registry.remove(a)
        assert not registry.remove(a)
        assert list(registry) == [b]

    def test_clear(self):
        registry = make_registry(Box("a", 0, 0, 1, 1))
        registry.clear()

        assert len(registry) == 0


class TestHitTesting:
    def test_front_most_hit_first(self):
        back = Box("back", 0, 0, 10, 10)
        front = Box("front", 5, 5, 15, 15)
        registry = make_registry(back, front)

        assert registry.nth_hit_element(0, 7, 7) is front
        assert registry.nth_hit_element(1, 7, 7) is back
        assert registry.nth_hit_element(2, 7, 7) is None

    def test_only_hits_count(self):
        back = Box("back", 0, 0, 10, 10)
        front = Box("front", 5, 5, 15, 15)
        registry = make_registry(back, front)

        assert registry.nth_hit_element(0, 2, 2) is back
        assert registry.nth_hit_element(0, 50, 50) is None

    def test_negative_index(self):
        registry = make_registry(Box("a", 0, 0, 10, 10))

        assert registry.nth_hit_element(-1, 5, 5) is None
