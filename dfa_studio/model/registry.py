"""Z-ordered registry of drawable elements."""

from typing import Iterator, Protocol


class Element(Protocol):
    """Anything the registry can hold."""

    @property
    def key(self) -> str: ...

    def is_clicked_at(self, x: float, y: float) -> bool: ...


class ElementRegistry:
    """Insertion-ordered elements shared by drawing and hit testing.

    Iteration runs back to front (draw order); ``reversed_view`` runs front
    to back (hit-test priority). Keys are element keys such as
    ``state:3`` or ``union:7``, so moving an element to the front is a
    constant-time pop and reinsert.
    """

    def __init__(self):
        self._elements: dict[str, Element] = {}

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements.values()))

    def __contains__(self, element: object) -> bool:
        key = getattr(element, "key", None)
        return key is not None and self._elements.get(key) is element

    def add(self, element: Element) -> None:
        """Append an element at the front. Re-adding moves it to the front."""
        self._elements.pop(element.key, None)
        self._elements[element.key] = element

    def remove(self, element: Element) -> bool:
        """Remove an element.

        Returns:
            True if the element was registered.
        """
        if element not in self:
            return False
        del self._elements[element.key]
        return True

    def bring_to_front(self, element: Element) -> bool:
        """Move an element to the end of the draw order."""
        if element not in self:
            return False
        self._elements[element.key] = self._elements.pop(element.key)
        return True

    def reversed_view(self) -> Iterator[Element]:
        """Elements front to back."""
        return reversed(list(self._elements.values()))

    def nth_hit_element(self, n: int, x: float, y: float) -> Element | None:
        """The n-th element (0 = front-most) whose hit test succeeds at (x, y)."""
        if n < 0:
            return None
        count = 0
        for element in self.reversed_view():
            if element.is_clicked_at(x, y):
                if count == n:
                    return element
                count += 1
        return None

    def clear(self) -> None:
        self._elements.clear()
