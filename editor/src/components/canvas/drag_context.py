"""Gesture state records for the canvas controller.

A gesture is one pointer-down -> move -> up interaction. The controller holds
exactly one of these at a time.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GestureState:
    """Base class for controller states."""

    @property
    def is_active(self) -> bool:
        return False


@dataclass(frozen=True)
class Idle(GestureState):
    """No gesture in progress."""


@dataclass(frozen=True)
class Dragging(GestureState):
    """Moving a shape; offset is pointer position minus shape origin at pointer-down."""
    shape_id: str
    offset_x: float
    offset_y: float

    @property
    def is_active(self) -> bool:
        return True


@dataclass(frozen=True)
class Resizing(GestureState):
    """Resizing a shape from its bottom-right handle, top-left stays anchored."""
    shape_id: str
    origin_width: float
    origin_height: float
    origin_pointer_x: float
    origin_pointer_y: float

    @property
    def is_active(self) -> bool:
        return True


IDLE = Idle()
