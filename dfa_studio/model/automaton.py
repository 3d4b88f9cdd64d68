"""Automaton graph built on networkx.

States are graph nodes keyed by their id. Every ordered pair of states
that has at least one transition gets exactly one directed edge, and that
edge carries the pair's union composite. The initial-state marker has no
source state, so it lives outside the networkx graph.
"""

import logging
import random
from typing import Iterator

import networkx as nx

from ..geometry.primitives import Circle, Point
from ..geometry.shape_kinds import ShapeKind
from ..geometry.shapes import Shape, create_shape
from ..geometry.surface import Surface
from ..geometry.theme import DEFAULT_THEME, Theme
from .element_types import ElementKind
from .registry import ElementRegistry
from .transition_table import State, Union

logger = logging.getLogger(__name__)

AUXILIARY_STATE_ID = -1
MAX_SKEW = 80.0


class StateNode:
    """A state as the editor sees it: table state plus circle and flags."""

    kind = ElementKind.STATE

    def __init__(self, state_id: int, name: str, x: float = 0.0, y: float = 0.0):
        self._id = state_id
        self.state = State(state_id)
        self.circle = Circle(x, y)
        self.name = name
        self.is_final = False
        self.highlighted = False
        self.label_hidden = False

    def __repr__(self) -> str:
        return f"StateNode(id={self._id}, name={self.name!r})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def key(self) -> str:
        return f"state:{self._id}"

    @property
    def is_auxiliary(self) -> bool:
        return self._id == AUXILIARY_STATE_ID

    @property
    def position(self) -> Point:
        return self.circle.center

    def set_position(self, x: float, y: float) -> None:
        self.circle.set_position(x, y)

    @property
    def unions(self) -> tuple[Union, ...]:
        return self.state.unions

    def transition(self, symbol: str) -> State | None:
        return self.state.transition(symbol)

    def set_final(self, final: bool) -> None:
        self.is_final = final

    def set_highlight(self, highlighted: bool) -> None:
        self.highlighted = highlighted

    def set_label_hidden(self, hidden: bool) -> None:
        self.label_hidden = hidden

    def is_clicked_at(self, x: float, y: float) -> bool:
        return self.circle.is_point_inside(x, y)

    def dwarf(self) -> None:
        """Turn into the tiny unlabeled guide used while drawing a transition."""
        self.set_label_hidden(True)
        self.circle.dwarf()

    def join_was_performed(self, destination: "StateNode", symbol: str) -> Union:
        return self.state.join(destination.state, symbol)

    def disjoin_was_performed(self, destination: "StateNode", symbol: str) -> bool:
        return self.state.disjoin(destination.state, symbol)


class UnionComposite:
    """All transitions of one ordered state pair, drawn as one arrow.

    A composite without a source is the initial-state marker.
    """

    kind = ElementKind.UNION

    def __init__(
        self,
        composite_id: int,
        source: StateNode | None,
        destination: StateNode,
        rng: random.Random,
    ):
        self._id = composite_id
        self.source = source
        self.destination = destination
        self.shape: Shape = create_shape(
            source.circle if source is not None else None,
            destination.circle,
        )
        # Random skew keeps overlapping arrows apart
        skew = rng.random() * MAX_SKEW
        self.shape.set_parameter(skew if rng.randrange(2) == 0 else -skew)

    def __repr__(self) -> str:
        source = self.source.name if self.source is not None else None
        return (
            f"UnionComposite(id={self._id}, source={source!r}, "
            f"destination={self.destination.name!r}, label={self.label!r})"
        )

    @property
    def id(self) -> int:
        return self._id

    @property
    def key(self) -> str:
        return f"union:{self._id}"

    @property
    def shape_kind(self) -> ShapeKind:
        return self.shape.kind

    @property
    def is_initial_marker(self) -> bool:
        return self.source is None

    @property
    def unions(self) -> list[Union]:
        """Transitions of the source that lead to the destination."""
        if self.source is None:
            return []
        return self.source.state.unions_to(self.destination.state)

    @property
    def symbols(self) -> list[str]:
        return [union.symbol for union in self.unions]

    @property
    def label(self) -> str:
        return ", ".join(self.symbols)

    @property
    def highlighted(self) -> bool:
        return self.shape.highlighted

    def set_highlight(self, highlighted: bool) -> None:
        self.shape.highlighted = highlighted

    @property
    def label_visible(self) -> bool:
        return self.shape.label_visible

    def set_label_visible(self, visible: bool) -> None:
        self.shape.set_label_visible(visible)

    def label_position(self) -> Point:
        return self.shape.label_position()

    def is_clicked_at(self, x: float, y: float) -> bool:
        return self.shape.is_curve_clicked_at(x, y)

    def is_label_clicked_at(self, x: float, y: float) -> bool:
        return self.shape.is_label_clicked_at(x, y)

    def recalculate_from_point(self, x: float, y: float) -> None:
        self.shape.recalculate_from_point(x, y)

    def draw(self, surface: Surface, theme: Theme = DEFAULT_THEME) -> None:
        self.shape.label = self.label
        self.shape.draw(surface, theme)


StateRef = StateNode | str


class AutomatonGraph:
    """States, their union composites, and initial/final/current status.

    Mutations that cannot resolve a state return False instead of raising.
    """

    def __init__(self, rng: random.Random | None = None):
        self._graph = nx.DiGraph()
        self._registry = ElementRegistry()
        self._rng = rng or random.Random()
        self._next_state_id = 0
        self._next_composite_id = 0
        self._initial_marker: UnionComposite | None = None
        self._auxiliary: StateNode | None = None
        self._final_states: dict[int, StateNode] = {}
        self.initial_state: StateNode | None = None
        self.current_state: StateNode | None = None

    @property
    def graph(self) -> nx.DiGraph:
        """The underlying networkx graph."""
        return self._graph

    @property
    def registry(self) -> ElementRegistry:
        return self._registry

    # -------------------------------------------------------------------------
    # States
    # -------------------------------------------------------------------------

    def create_state(self, name: str, x: float = 0.0, y: float = 0.0) -> StateNode:
        """Create a non-final state with a fresh id."""
        node = StateNode(self._next_state_id, name, x, y)
        self._next_state_id += 1
        self._add_node(node)
        logger.debug("Created state %r with id %d", name, node.id)
        return node

    def create_auxiliary_state(self, x: float, y: float) -> StateNode:
        """Create the guide state that follows the pointer while drawing a transition.

        Only one auxiliary state exists at a time; an existing one is removed.
        """
        if self._auxiliary is not None:
            self.remove_auxiliary_state()
        node = StateNode(AUXILIARY_STATE_ID, "", x, y)
        node.dwarf()
        self._add_node(node)
        self._auxiliary = node
        return node

    def remove_auxiliary_state(self) -> bool:
        if self._auxiliary is None:
            return False
        return self.remove_state(self._auxiliary)

    @property
    def auxiliary_state(self) -> StateNode | None:
        return self._auxiliary

    def _add_node(self, node: StateNode) -> None:
        self._graph.add_node(node.id, node=node)
        self._registry.add(node)

    def find_by_name(self, name: str) -> StateNode | None:
        """First state whose name equals ``name``."""
        for node in self.get_states():
            if node.name == name:
                return node
        return None

    def _resolve(self, state: StateRef) -> StateNode | None:
        if isinstance(state, str):
            return self.find_by_name(state)
        if self._graph.has_node(state.id) and self._graph.nodes[state.id]["node"] is state:
            return state
        return None

    def rename_state(self, state: StateRef, name: str) -> bool:
        node = self._resolve(state)
        if node is None:
            return False
        node.name = name
        return True

    def remove_state(self, state: StateRef) -> bool:
        """Remove a state and every composite that touches it."""
        node = self._resolve(state)
        if node is None:
            logger.debug("remove_state: %r not found", state)
            return False

        touching = {
            data["composite"].id: data["composite"]
            for _, _, data in [
                *self._graph.in_edges(node.id, data=True),
                *self._graph.out_edges(node.id, data=True),
            ]
        }
        for composite in touching.values():
            self.remove_union_composite(composite)

        if node is self.initial_state:
            self._remove_initial_marker()
        if node is self.current_state:
            self.current_state = None
        self._final_states.pop(node.id, None)
        if node is self._auxiliary:
            self._auxiliary = None

        self._graph.remove_node(node.id)
        self._registry.remove(node)
        logger.debug("Removed state %r (%d composites)", node.name, len(touching))
        return True

    def get_states(self) -> list[StateNode]:
        return [data["node"] for _, data in self._graph.nodes(data=True)]

    def step_state(self, table_state: State) -> StateNode | None:
        """Map a table state back to its graph-level state by id."""
        if not self._graph.has_node(table_state.id):
            return None
        return self._graph.nodes[table_state.id]["node"]

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def join(self, source: StateRef, destination: StateRef, symbol: str) -> bool:
        """Add a transition, creating the pair's composite if needed."""
        src = self._resolve(source)
        dst = self._resolve(destination)
        if src is None or dst is None:
            logger.debug("join: cannot resolve %r -> %r", source, destination)
            return False

        src.join_was_performed(dst, symbol)
        if not self._graph.has_edge(src.id, dst.id):
            composite = UnionComposite(self._new_composite_id(), src, dst, self._rng)
            self._graph.add_edge(src.id, dst.id, composite=composite)
            self._registry.add(composite)
        return True

    def disjoin(self, source: StateRef, destination: StateRef, symbol: str) -> bool:
        """Remove one transition from the table; the composite stays.

        Returns:
            True if a transition was removed.
        """
        src = self._resolve(source)
        dst = self._resolve(destination)
        if src is None or dst is None:
            return False
        return src.disjoin_was_performed(dst, symbol)

    def find_union_composite(
        self, source: StateNode | None, destination: StateNode
    ) -> UnionComposite | None:
        if source is None:
            marker = self._initial_marker
            if marker is not None and marker.destination is destination:
                return marker
            return None
        if self._graph.has_edge(source.id, destination.id):
            composite = self._graph.edges[source.id, destination.id]["composite"]
            if composite.source is source and composite.destination is destination:
                return composite
        return None

    def remove_union_composite(self, composite: UnionComposite) -> bool:
        """Remove a composite together with every transition it represents."""
        if composite.is_initial_marker:
            if composite is not self._initial_marker:
                return False
            return self._remove_initial_marker()

        if self.find_union_composite(composite.source, composite.destination) is not composite:
            return False

        for union in composite.unions:
            self.disjoin(composite.source, composite.destination, union.symbol)
        self._graph.remove_edge(composite.source.id, composite.destination.id)
        self._registry.remove(composite)
        return True

    def relabel_union_composite(self, composite: UnionComposite, text: str) -> bool:
        """Replace a composite's transitions with the comma separated symbols in ``text``."""
        if composite.is_initial_marker:
            return False
        if self.find_union_composite(composite.source, composite.destination) is not composite:
            return False
        for union in composite.unions:
            self.disjoin(composite.source, composite.destination, union.symbol)
        for symbol in text.split(","):
            symbol = symbol.strip()
            if symbol:
                self.join(composite.source, composite.destination, symbol)
        return True

    def get_union_composites(self) -> list[UnionComposite]:
        composites = [data["composite"] for _, _, data in self._graph.edges(data=True)]
        if self._initial_marker is not None:
            composites.append(self._initial_marker)
        return sorted(composites, key=lambda c: c.id)

    def iter_transitions(self) -> Iterator[tuple[StateNode, str, StateNode]]:
        """Yield (source, symbol, destination) for every table entry."""
        for node in self.get_states():
            for union in node.unions:
                destination = self.step_state(union.state)
                if destination is not None:
                    yield node, union.symbol, destination

    def alphabet(self) -> list[str]:
        """Sorted non-empty symbols used by any transition."""
        return sorted({symbol for _, symbol, _ in self.iter_transitions() if symbol})

    def _new_composite_id(self) -> int:
        composite_id = self._next_composite_id
        self._next_composite_id += 1
        return composite_id

    # -------------------------------------------------------------------------
    # Initial, final and current state
    # -------------------------------------------------------------------------

    def set_initial_state(self, state: StateRef) -> bool:
        """Make ``state`` the initial state, replacing any existing marker."""
        node = self._resolve(state)
        if node is None:
            return False
        self._remove_initial_marker()
        marker = UnionComposite(self._new_composite_id(), None, node, self._rng)
        self._initial_marker = marker
        self._registry.add(marker)
        self.initial_state = node
        self.current_state = node
        return True

    def _remove_initial_marker(self) -> bool:
        if self._initial_marker is None:
            return False
        self._registry.remove(self._initial_marker)
        self._initial_marker = None
        self.initial_state = None
        return True

    @property
    def initial_marker(self) -> UnionComposite | None:
        return self._initial_marker

    def set_final_state(self, state: StateRef) -> bool:
        """Toggle whether ``state`` is final."""
        node = self._resolve(state)
        if node is None:
            return False
        if node.is_final:
            node.set_final(False)
            self._final_states.pop(node.id, None)
        else:
            node.set_final(True)
            self._final_states[node.id] = node
        return True

    @property
    def final_states(self) -> list[StateNode]:
        return list(self._final_states.values())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_elements(self) -> list[StateNode | UnionComposite]:
        """Every state and composite, back to front."""
        return list(self._registry)  # type: ignore[arg-type]

    def reachable_states(self) -> set[StateNode]:
        """States reachable from the initial state over existing transitions."""
        if self.initial_state is None:
            return set()

        def has_transitions(u: int, v: int) -> bool:
            return bool(self._graph.edges[u, v]["composite"].unions)

        view = nx.subgraph_view(self._graph, filter_edge=has_transitions)
        ids = nx.descendants(view, self.initial_state.id) | {self.initial_state.id}
        return {self._graph.nodes[i]["node"] for i in ids}

    def clear_highlights(self) -> None:
        for element in self._registry:
            element.set_highlight(False)  # type: ignore[attr-defined]

    def clear(self) -> None:
        """Remove everything. Ids keep increasing across clears."""
        self._graph.clear()
        self._registry.clear()
        self._initial_marker = None
        self._auxiliary = None
        self._final_states.clear()
        self.initial_state = None
        self.current_state = None
