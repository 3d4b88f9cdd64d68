"""Per-state transition tables."""

from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class Union:
    """A single (symbol, destination) pair owned by a source state."""

    symbol: str
    state: "State"


class State:
    """A table state: an id and its outgoing unions in insertion order.

    The table is permissive. Joining the same (destination, symbol) pair
    twice stores two unions, and lookups always use the first match.
    """

    def __init__(self, state_id: int):
        self._id = state_id
        self._unions: list[Union] = []

    def __repr__(self) -> str:
        return f"State(id={self._id}, unions={len(self._unions)})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def unions(self) -> tuple[Union, ...]:
        """Outgoing unions in insertion order."""
        return tuple(self._unions)

    def symbols(self) -> list[str]:
        """Symbols of all outgoing unions, duplicates included."""
        return [union.symbol for union in self._unions]

    def transition(self, symbol: str) -> "State | None":
        """Return the destination of the first union labeled ``symbol``."""
        for union in self._unions:
            if union.symbol == symbol:
                return union.state
        return None

    def join(self, state: "State", symbol: str) -> Union:
        """Append a union to ``state`` labeled ``symbol``."""
        union = Union(symbol, state)
        self._unions.append(union)
        return union

    def disjoin(self, state: "State", symbol: str) -> bool:
        """Remove the first union to ``state`` labeled ``symbol``.

        Returns:
            True if a union was removed.
        """
        for index, union in enumerate(self._unions):
            if union.state is state and union.symbol == symbol:
                del self._unions[index]
                return True
        return False

    def unions_to(self, state: "State") -> list[Union]:
        """Unions whose destination is ``state``."""
        return [union for union in self._unions if union.state is state]
