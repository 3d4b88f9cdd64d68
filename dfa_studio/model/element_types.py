"""Kinds of elements held by the element registry."""

from enum import Enum


class ElementKind(str, Enum):
    """Types of drawable elements."""

    STATE = "state"
    UNION = "union"  # Union composite, including the initial marker
