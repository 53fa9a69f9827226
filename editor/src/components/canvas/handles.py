"""Canvas hit testing - ABC-based handle architecture.

Each handle type knows:
- How to test if a pointer position hits it
- Which cursor the host should show over it

Hit tests run in the shape's own rotated frame, so a rotated shape is hit
where it is painted, not where its unrotated box would be.
"""

import math
from abc import ABC, abstractmethod

from constants import RESIZE_HANDLE_SIZE


def to_local(pointer_x, pointer_y, shape):
    """Convert canvas pixels to shape-local pixels.

    Local origin is the shape centre, axes follow the shape's rotation
    (CSS rotate() is clockwise on a Y-down canvas).

    Returns:
        (local_x, local_y)
    """
    center_x = shape.x + shape.width / 2
    center_y = shape.y + shape.height / 2
    dx = pointer_x - center_x
    dy = pointer_y - center_y

    if not shape.rotation:
        return dx, dy

    theta = math.radians(shape.rotation)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return dx * cos_t + dy * sin_t, -dx * sin_t + dy * cos_t


class Handle(ABC):
    """Abstract base class for canvas handles."""

    @abstractmethod
    def hit_test(self, pointer_x, pointer_y, shape) -> bool:
        """Test if pointer position hits this handle of shape.

        Args:
            pointer_x, pointer_y: Pointer position in canvas pixels
            shape: Shape the handle belongs to

        Returns:
            bool: True if pointer hits this handle
        """
        pass

    @abstractmethod
    def get_cursor(self) -> str:
        """Name of the cursor to show while hovering (host maps it)."""
        pass


class BodyHandle(Handle):
    """The shape's whole box, used to start a move."""

    def hit_test(self, pointer_x, pointer_y, shape):
        local_x, local_y = to_local(pointer_x, pointer_y, shape)
        return abs(local_x) <= shape.width / 2 and abs(local_y) <= shape.height / 2

    def get_cursor(self):
        return 'move'


class ResizeHandle(Handle):
    """Square handle centred on the bottom-right corner of the selected shape."""

    def __init__(self, handle_size=RESIZE_HANDLE_SIZE):
        """
        Args:
            handle_size: Edge length of the handle square in pixels
        """
        self.handle_size = handle_size

    def corner(self, shape):
        """Canvas position of the handle centre, following rotation."""
        half_w = shape.width / 2
        half_h = shape.height / 2
        center_x = shape.x + half_w
        center_y = shape.y + half_h

        theta = math.radians(shape.rotation or 0)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return (
            center_x + half_w * cos_t - half_h * sin_t,
            center_y + half_w * sin_t + half_h * cos_t,
        )

    def hit_test(self, pointer_x, pointer_y, shape):
        local_x, local_y = to_local(pointer_x, pointer_y, shape)
        half = self.handle_size / 2
        return (abs(local_x - shape.width / 2) <= half and
                abs(local_y - shape.height / 2) <= half)

    def get_cursor(self):
        return 'se-resize'
