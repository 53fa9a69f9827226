"""
CSS Shapes Studio - Canvas Interaction Components

This package holds the pointer-driven editing logic for the shape canvas:
- drag_context.py: Gesture states (Idle, Dragging, Resizing)
- handles.py: Hit testing for shape bodies and the resize handle
- controller.py: CanvasController state machine with grid snapping

Nothing here imports Qt; the canvas widget forwards plain pixel coordinates.
"""

from .drag_context import GestureState, Idle, Dragging, Resizing, IDLE
from .handles import Handle, BodyHandle, ResizeHandle, to_local
from .controller import CanvasController

__all__ = [
    'GestureState', 'Idle', 'Dragging', 'Resizing', 'IDLE',
    'Handle', 'BodyHandle', 'ResizeHandle', 'to_local',
    'CanvasController',
]
