"""
CSS Shapes Studio - Canvas Controller

Pointer-event state machine that drives move and resize gestures:

    Idle --down on body--------> Dragging --up--> Idle  (one history entry)
    Idle --down on resize handle-> Resizing --up--> Idle  (one history entry)
    Idle --down on empty canvas--> Idle (selection cleared)

Pointer-move frames write straight into the live shape; history is only
touched when the gesture ends. The host must deliver pointer-up even when
the pointer was released outside the canvas, otherwise the gesture never
commits.

Escape does not cancel a gesture; there is no cancel path.
"""

import logging

from constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, MIN_SHAPE_SIZE,
    DEFAULT_SNAP_ENABLED, DEFAULT_GRID_SIZE,
)
from models.errors import NotFoundError, ValidationError
from models.geometry import js_round
from .drag_context import Dragging, Resizing, IDLE
from .handles import BodyHandle, ResizeHandle


def _clamp(value, low, high):
    return max(low, min(high, value))


class CanvasController:
    """Translates pointer events into shape moves and resizes.

    The controller never owns shapes. It reads and mutates them through the
    EditorSession it was created for and asks the session to record history
    when a gesture completes.
    """

    def __init__(self, session, canvas_width=CANVAS_WIDTH, canvas_height=CANVAS_HEIGHT,
                 snap_enabled=DEFAULT_SNAP_ENABLED, grid_size=DEFAULT_GRID_SIZE):
        self.session = session
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.snap_enabled = False
        self.grid_size = DEFAULT_GRID_SIZE
        self.set_snap(snap_enabled, grid_size)

        self.state = IDLE
        self.body_handle = BodyHandle()
        self.resize_handle = ResizeHandle()
        self._logger = logging.getLogger('CanvasController')

    # ========================================
    # Configuration
    # ========================================

    def set_snap(self, enabled, grid_size=None):
        """Configure grid snapping

        Args:
            enabled: Whether pointer results snap to the grid
            grid_size: Positive integer grid pitch in pixels (unchanged if None)

        Raises:
            ValidationError: If grid_size is not a positive integer
        """
        if grid_size is not None:
            if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size <= 0:
                raise ValidationError(f"grid_size must be a positive integer, got {grid_size!r}")
            self.grid_size = grid_size
        self.snap_enabled = bool(enabled)

    def set_canvas_size(self, width, height):
        """Update the canvas bounds used to clamp moves"""
        self.canvas_width = width
        self.canvas_height = height

    def snap(self, value):
        """Round value to the nearest grid line when snapping is on (halves round up)"""
        if not self.snap_enabled:
            return value
        return js_round(value / self.grid_size) * self.grid_size

    def clamp_position(self, shape, x, y):
        """Keep a shape of this size fully inside the canvas

        Returns:
            (x, y) clamped to [0, canvas - shape size] per axis
        """
        max_x = max(0, self.canvas_width - shape.width)
        max_y = max(0, self.canvas_height - shape.height)
        return _clamp(x, 0, max_x), _clamp(y, 0, max_y)

    # ========================================
    # State queries
    # ========================================

    @property
    def is_idle(self):
        return not self.state.is_active

    def cursor_at(self, x, y):
        """Cursor name for hovering at (x, y), or None for the default cursor"""
        selected = self.session.selected_shape()
        if selected is not None and self.resize_handle.hit_test(x, y, selected):
            return self.resize_handle.get_cursor()
        if self.shape_at(x, y) is not None:
            return self.body_handle.get_cursor()
        return None

    def shape_at(self, x, y):
        """Topmost shape whose body contains (x, y), or None"""
        for shape in reversed(self.session.shapes):
            if self.body_handle.hit_test(x, y, shape):
                return shape
        return None

    # ========================================
    # Pointer events
    # ========================================

    def pointer_down(self, x, y):
        """Start a gesture or clear the selection

        Args:
            x, y: Pointer position in canvas pixels

        Returns:
            The id of the shape the gesture acts on, or None
        """
        if not self.is_idle:
            # A lost pointer-up must not swallow the previous gesture
            self._logger.debug("pointer_down during active gesture, committing it first")
            self.pointer_up()

        selected = self.session.selected_shape()
        if selected is not None and self.resize_handle.hit_test(x, y, selected):
            self.state = Resizing(
                shape_id=selected.id,
                origin_width=selected.width,
                origin_height=selected.height,
                origin_pointer_x=x,
                origin_pointer_y=y,
            )
            self._logger.debug(f"Resize started on {selected.id}")
            return selected.id

        shape = self.shape_at(x, y)
        if shape is None:
            self.state = IDLE
            self.session.select(None)
            return None

        self.session.select(shape.id)
        self.state = Dragging(shape_id=shape.id, offset_x=x - shape.x, offset_y=y - shape.y)
        self._logger.debug(f"Drag started on {shape.id}")
        return shape.id

    def pointer_move(self, x, y):
        """Apply the active gesture to its shape

        Returns:
            True if a shape changed
        """
        if self.is_idle:
            return False

        try:
            shape = self.session.find_shape(self.state.shape_id)
        except NotFoundError:
            # Shape vanished under the gesture (e.g. host undo), nothing to commit
            self._logger.debug(f"Gesture target {self.state.shape_id} is gone, resetting")
            self.state = IDLE
            return False

        if isinstance(self.state, Dragging):
            new_x, new_y = self.clamp_position(shape, x - self.state.offset_x, y - self.state.offset_y)
            new_x, new_y = self.clamp_position(shape, self.snap(new_x), self.snap(new_y))
            shape.x = new_x
            shape.y = new_y
        else:
            new_width = max(MIN_SHAPE_SIZE, self.state.origin_width + (x - self.state.origin_pointer_x))
            new_height = max(MIN_SHAPE_SIZE, self.state.origin_height + (y - self.state.origin_pointer_y))
            shape.width = max(MIN_SHAPE_SIZE, self.snap(new_width))
            shape.height = max(MIN_SHAPE_SIZE, self.snap(new_height))

        self.session._emit_changed()
        return True

    def pointer_up(self):
        """Finish the active gesture with exactly one history entry

        Safe to call when idle, so hosts can forward every release.

        Returns:
            True if a gesture was committed
        """
        if self.is_idle:
            return False

        state = self.state
        self.state = IDLE

        if not self.session.has_shape(state.shape_id):
            return False

        description = "Move shape" if isinstance(state, Dragging) else "Resize shape"
        self.session._save_state(description)
        self.session._emit_changed()
        self._logger.debug(f"{description} committed for {state.shape_id}")
        return True
