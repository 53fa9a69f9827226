"""
CSS Shapes Studio - Editor Session

THE ORCHESTRATOR between the host UI and the shape model. Owns:
- The ordered shape list (order = z-order, last is painted on top)
- The selection (at most one shape, always a live id or None)
- Undo/redo history of full snapshots
- The session clipboard
- The canvas controller for pointer gestures

Every public mutator either applies a validated change and records exactly
one history entry, or does nothing. Invalid input (ValidationError) and stale
references (NotFoundError) are logged at debug level and ignored; nothing
here raises into the host.

Usage:
    session = EditorSession(notify=show_toast)
    shape = session.add_shape('star')
    session.update_property(shape.id, 'curve', 40)
    session.undo()
    css, html = session.generate_css(), session.generate_html()

    # Save/restore
    records = session.get_snapshot()
    session.load_snapshot(records)
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, DEFAULT_COMPOSITION_NAME,
    DEFAULT_SNAP_ENABLED, DEFAULT_GRID_SIZE, MAX_HISTORY_ENTRIES,
    NOTIFY_ERROR,
)
from models.errors import NotFoundError, ValidationError
from models.shape import Shape, create_default, resolve_attribute, validate_property
from utils.history_manager import HistoryManager
from actions.clipboard_actions import ClipboardActions
from components.canvas.controller import CanvasController
from components.canvas.drag_context import IDLE
from services import code_generator
from services.shortcuts import (
    resolve_shortcut,
    ACTION_UNDO, ACTION_REDO, ACTION_DELETE, ACTION_COPY, ACTION_CUT, ACTION_PASTE,
)

ShapeFactory = Callable[[str, Optional[Tuple[float, float]]], Shape]
CommitAction = Callable[[List[Dict[str, Any]]], Any]
Notifier = Callable[[str, str], None]


def _no_notify(message, kind):
    pass


class EditorSession:
    """One editing session over an ordered set of shapes.

    Fresh compositions and edits of saved ones use the same session; they only
    differ in initial_shapes and in the commit_action that persists the result
    (save as new vs overwrite).
    """

    def __init__(self, initial_shapes: Optional[Sequence] = None,
                 commit_action: Optional[CommitAction] = None,
                 notify: Optional[Notifier] = None,
                 shape_factory: Optional[ShapeFactory] = None,
                 canvas_size: Tuple[int, int] = (CANVAS_WIDTH, CANVAS_HEIGHT),
                 name: str = DEFAULT_COMPOSITION_NAME,
                 snap_enabled: bool = DEFAULT_SNAP_ENABLED,
                 grid_size: int = DEFAULT_GRID_SIZE,
                 max_history: Optional[int] = MAX_HISTORY_ENTRIES):
        """Create a session

        Args:
            initial_shapes: Shapes or saved records to start from
            commit_action: Strategy called by commit() with the snapshot records
            notify: Sink for user feedback, called as notify(message, kind)
            shape_factory: Default-shape factory keyed by type (create_default if None)
            canvas_size: (width, height) of the canvas in pixels
            name: Composition name, used for the export container class
            snap_enabled: Initial grid snapping state
            grid_size: Initial grid pitch in pixels
            max_history: Optional history cap, None for unbounded

        Raises:
            ValidationError: If initial_shapes contains an invalid record
        """
        self._logger = logging.getLogger('EditorSession')

        self.name = name
        self.selected_id = None
        self._commit_action = commit_action
        self._notify = notify or _no_notify
        self._shape_factory = shape_factory or create_default
        self._listeners = []

        self._shapes = self._build_shapes(initial_shapes or [])

        self.history = HistoryManager(max_history=max_history)
        self.clipboard = ClipboardActions(self)
        self.controller = CanvasController(self, canvas_size[0], canvas_size[1],
                                           snap_enabled=snap_enabled, grid_size=grid_size)

        self._save_state("Initial state")
        self._logger.debug(f"Created session with {len(self._shapes)} shape(s)")

    # ========================================
    # Queries
    # ========================================

    @property
    def shapes(self) -> Tuple[Shape, ...]:
        """Live shapes in z-order (read-only view; mutate through the session)"""
        return tuple(self._shapes)

    def find_shape(self, shape_id) -> Shape:
        """Live shape with this id

        Raises:
            NotFoundError: If no shape has this id
        """
        for shape in self._shapes:
            if shape.id == shape_id:
                return shape
        raise NotFoundError(f"No shape with id {shape_id!r}")

    def has_shape(self, shape_id) -> bool:
        return any(shape.id == shape_id for shape in self._shapes)

    def selected_shape(self) -> Optional[Shape]:
        """The selected live shape, or None"""
        if self.selected_id is None:
            return None
        try:
            return self.find_shape(self.selected_id)
        except NotFoundError:
            self.selected_id = None
            return None

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ========================================
    # Change notification
    # ========================================

    def subscribe(self, callback: Callable[['EditorSession'], None]):
        """Call callback(session) after every visible change"""
        self._listeners.append(callback)

    def unsubscribe(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit_changed(self):
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:
                self._logger.exception("Error notifying session listener")

    # ========================================
    # Internal mutation helpers (clipboard, controller)
    # ========================================

    def _build_shapes(self, items) -> List[Shape]:
        shapes = []
        seen_ids = set()
        for item in items:
            if isinstance(item, Shape):
                # Instances go through the same checks as saved records
                item = {key: value for key, value in item.to_dict().items() if value is not None}
            shape = Shape.from_dict(item)
            if shape.id in seen_ids:
                raise ValidationError(f"Duplicate shape id {shape.id!r}")
            seen_ids.add(shape.id)
            shapes.append(shape)
        return shapes

    def _append_shape(self, shape: Shape):
        if self.has_shape(shape.id):
            raise ValidationError(f"Duplicate shape id {shape.id!r}")
        self._shapes.append(shape)

    def _remove_shape(self, shape_id) -> Shape:
        shape = self.find_shape(shape_id)
        self._shapes.remove(shape)
        return shape

    def _save_state(self, description: str):
        self.history.save_state([shape.copy() for shape in self._shapes], description)

    def _restore(self, snapshot):
        self._shapes = [shape.copy() for shape in snapshot]
        self.selected_id = None
        # A restored snapshot invalidates any half-finished gesture
        self.controller.state = IDLE
        self._emit_changed()

    def _finish_gesture(self):
        # An edit arriving mid-gesture closes the gesture first, one entry each
        if not self.controller.is_idle:
            self.controller.pointer_up()

    def _apply(self, operation: str, func: Callable, *args):
        """Run a mutation, turning validation/lookup failures into no-ops"""
        self._finish_gesture()
        try:
            result = func(*args)
        except (ValidationError, NotFoundError) as e:
            self._logger.debug(f"{operation} ignored: {e}")
            return None
        self._emit_changed()
        return result

    # ========================================
    # Mutations
    # ========================================

    def add_shape(self, shape_type: str, position: Optional[Tuple[float, float]] = None) -> Optional[Shape]:
        """Add a default shape of this type on top and select it

        Returns:
            The new Shape, or None for an unknown type
        """
        def _add():
            shape = self._shape_factory(shape_type, position)
            if position is None:
                shape.x, shape.y = self.controller.clamp_position(shape, shape.x, shape.y)
            self._append_shape(shape)
            self.selected_id = shape.id
            self._save_state(f"Add {shape_type}")
            return shape

        return self._apply("add_shape", _add)

    def delete_selected(self) -> bool:
        """Remove the selected shape and clear the selection

        Returns:
            True if a shape was removed
        """
        def _delete():
            if self.selected_id is None:
                raise NotFoundError("Nothing selected")
            self._remove_shape(self.selected_id)
            self.selected_id = None
            self._save_state("Delete shape")
            return True

        return bool(self._apply("delete_selected", _delete))

    def update_property(self, shape_id, key: str, value: Any) -> bool:
        """Set one property of a shape

        Args:
            shape_id: Target shape
            key: Record key ('fontSize') or attribute name ('font_size')
            value: New value, validated against the shape's invariants

        Returns:
            True if the shape changed
        """
        def _update():
            shape = self.find_shape(shape_id)
            attr = resolve_attribute(key)
            new_value = validate_property(shape, attr, value)
            if attr in ('x', 'y'):
                x = new_value if attr == 'x' else shape.x
                y = new_value if attr == 'y' else shape.y
                x, y = self.controller.clamp_position(shape, x, y)
                new_value = x if attr == 'x' else y
            if getattr(shape, attr) == new_value:
                return False
            setattr(shape, attr, new_value)
            self._save_state(f"Change {key}")
            return True

        return bool(self._apply("update_property", _update))

    def move(self, shape_id, x, y) -> bool:
        """Move a shape's top-left corner, clamped inside the canvas

        Returns:
            True if the shape moved
        """
        def _move():
            shape = self.find_shape(shape_id)
            new_x, new_y = self.controller.clamp_position(
                shape, validate_property(shape, 'x', x), validate_property(shape, 'y', y))
            if (new_x, new_y) == (shape.x, shape.y):
                return False
            shape.x, shape.y = new_x, new_y
            self._save_state("Move shape")
            return True

        return bool(self._apply("move", _move))

    def resize(self, shape_id, width, height) -> bool:
        """Resize a shape keeping its top-left corner

        Sizes below the minimum are rejected, not clamped.

        Returns:
            True if the shape changed
        """
        def _resize():
            shape = self.find_shape(shape_id)
            new_width = validate_property(shape, 'width', width)
            new_height = validate_property(shape, 'height', height)
            if (new_width, new_height) == (shape.width, shape.height):
                return False
            shape.width, shape.height = new_width, new_height
            self._save_state("Resize shape")
            return True

        return bool(self._apply("resize", _resize))

    def select(self, shape_id) -> bool:
        """Select a shape (deselecting any other) or clear with None

        Selection is not an edit, so no history entry is recorded.

        Returns:
            True if the selection is now what was asked for
        """
        if shape_id is None:
            if self.selected_id is not None:
                self.selected_id = None
                self._emit_changed()
            return True
        if not self.has_shape(shape_id):
            self._logger.debug(f"select ignored: no shape with id {shape_id!r}")
            return False
        if self.selected_id != shape_id:
            self.selected_id = shape_id
            self._emit_changed()
        return True

    def clear(self) -> bool:
        """Remove every shape

        Returns:
            True if there was anything to remove
        """
        self._finish_gesture()
        if not self._shapes:
            return False
        self._shapes = []
        self.selected_id = None
        self._save_state("Clear canvas")
        self._emit_changed()
        return True

    # ========================================
    # Clipboard
    # ========================================

    def copy(self) -> bool:
        """Copy the selected shape into the session clipboard"""
        shape = self.selected_shape()
        if shape is None:
            return False
        self.clipboard.copy(shape)
        return True

    def cut(self) -> bool:
        """Move the selected shape into the clipboard"""
        shape = self.selected_shape()
        if shape is None:
            return False
        return self._apply("cut", self.clipboard.cut, shape) is not None

    def paste(self) -> Optional[Shape]:
        """Paste the clipboard shape offset from its original, or None"""
        return self._apply("paste", self.clipboard.paste)

    # ========================================
    # History
    # ========================================

    def undo(self) -> bool:
        """Restore the previous snapshot; clears the selection"""
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    def redo(self) -> bool:
        """Re-apply the next snapshot; clears the selection"""
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        return True

    # ========================================
    # Canvas gestures
    # ========================================

    def set_snap(self, enabled: bool, grid_size: Optional[int] = None) -> bool:
        """Configure grid snapping; an invalid grid size leaves settings unchanged"""
        try:
            self.controller.set_snap(enabled, grid_size)
        except ValidationError as e:
            self._logger.debug(f"set_snap ignored: {e}")
            return False
        return True

    def pointer_down(self, x, y):
        return self.controller.pointer_down(x, y)

    def pointer_move(self, x, y):
        return self.controller.pointer_move(x, y)

    def pointer_up(self):
        return self.controller.pointer_up()

    # ========================================
    # Keyboard
    # ========================================

    def handle_shortcut(self, key: str, ctrl: bool = False, shift: bool = False,
                        text_input_focused: bool = False) -> bool:
        """Run the edit action bound to a key press

        Returns:
            True if the key was consumed
        """
        action = resolve_shortcut(key, ctrl=ctrl, shift=shift, text_input_focused=text_input_focused)
        if action is None:
            return False

        handlers = {
            ACTION_UNDO: self.undo,
            ACTION_REDO: self.redo,
            ACTION_DELETE: self.delete_selected,
            ACTION_COPY: self.copy,
            ACTION_CUT: self.cut,
            ACTION_PASTE: self.paste,
        }
        handlers[action]()
        return True

    # ========================================
    # Code export
    # ========================================

    def generate_css(self) -> str:
        return code_generator.generate_css(self._shapes)

    def generate_html(self) -> str:
        return code_generator.generate_html(self._shapes, self.name)

    # ========================================
    # Save / restore
    # ========================================

    def get_snapshot(self) -> List[Dict[str, Any]]:
        """Plain records of every shape in z-order (the save format)"""
        return [shape.to_dict() for shape in self._shapes]

    def load_snapshot(self, records: Sequence) -> bool:
        """Replace all shapes with the given records

        The whole load is rejected if any record is invalid.

        Returns:
            True if the shapes were replaced
        """
        self._finish_gesture()
        try:
            shapes = self._build_shapes(records)
        except ValidationError as e:
            self._logger.debug(f"load_snapshot ignored: {e}")
            return False
        self._shapes = shapes
        self.selected_id = None
        self._save_state("Load shapes")
        self._emit_changed()
        return True

    def commit(self):
        """Hand the current shapes to the commit strategy (save as new / overwrite)

        Returns:
            Whatever the strategy returns, or None if nothing was committed
        """
        if not self._shapes:
            self._notify("Add at least one shape", NOTIFY_ERROR)
            return None
        if self._commit_action is None:
            self._logger.debug("commit ignored: no commit action configured")
            return None
        return self._commit_action(self.get_snapshot())
