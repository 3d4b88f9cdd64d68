"""Pointer-driven editing."""

from .interaction import EditKind, EditorController, EditRequest, InteractionState, PointerEvent

__all__ = [
    "EditKind",
    "EditorController",
    "EditRequest",
    "InteractionState",
    "PointerEvent",
]
