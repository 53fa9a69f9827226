"""Error types raised by the shape model.

Both are caught at the EditorSession boundary and turned into no-ops, so
nothing here ever reaches the user as a failure.
"""


class ValidationError(ValueError):
    """A mutation would break a shape invariant (size, opacity, rotation...)"""


class NotFoundError(LookupError):
    """An operation referenced a shape, selection or clipboard entry that is gone"""
