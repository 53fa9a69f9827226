"""Clipboard operations - copy/cut/paste of single shapes"""
import logging

from models.errors import NotFoundError
from models.shape import clone
from constants import PASTE_OFFSET_X, PASTE_OFFSET_Y


class ClipboardActions:
    """Single-slot shape clipboard owned by one EditorSession

    The slot always holds an independent copy, so later edits to the canvas
    never leak into it. Pastes are offset from the stored copy rather than
    from the previous paste, so repeated pastes stack on the same spot.
    """

    def __init__(self, session):
        """Initialize with reference to the owning session

        Args:
            session: The EditorSession whose canvas cut/paste modify
        """
        self.session = session
        self._slot = None
        self._logger = logging.getLogger('ClipboardActions')

    def has_content(self):
        """Check if a shape is waiting to be pasted"""
        return self._slot is not None

    def peek(self):
        """Copy of the stored shape, or None"""
        return self._slot.copy() if self._slot is not None else None

    def clear(self):
        """Forget the stored shape"""
        self._slot = None

    def copy(self, shape):
        """Store a copy of shape; the canvas is left alone"""
        self._slot = shape.copy()
        self._logger.debug(f"Copied {shape.type} ({shape.id})")

    def cut(self, shape):
        """Store a copy of shape, then remove it from the canvas

        Records one history entry for the removal.

        Raises:
            NotFoundError: If shape is no longer on the canvas
        """
        # Resolve first so a stale shape leaves the slot untouched
        self.session.find_shape(shape.id)

        self._slot = shape.copy()
        self.session._remove_shape(shape.id)
        if self.session.selected_id == shape.id:
            self.session.selected_id = None
        self.session._save_state("Cut shape")
        self._logger.debug(f"Cut {shape.type} ({shape.id})")

    def paste(self):
        """Insert a clone of the stored shape on top of the canvas

        The clone gets a fresh id, sits PASTE_OFFSET px right/down of the
        stored shape and becomes the selection. Records one history entry.

        Returns:
            The pasted Shape

        Raises:
            NotFoundError: If the clipboard is empty
        """
        if self._slot is None:
            raise NotFoundError("Clipboard is empty")

        pasted = clone(self._slot)
        pasted.x = self._slot.x + PASTE_OFFSET_X
        pasted.y = self._slot.y + PASTE_OFFSET_Y

        self.session._append_shape(pasted)
        self.session.selected_id = pasted.id
        self.session._save_state("Paste shape")
        self._logger.debug(f"Pasted {pasted.type} ({pasted.id})")
        return pasted
