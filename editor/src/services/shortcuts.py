"""Keyboard shortcut resolution for the editor.

Maps a key press to an edit action name. The host passes whether a text
input currently has focus; while it does, every shortcut is suppressed so
native text editing (including Backspace and Ctrl+Z inside the field) keeps
working.
"""

ACTION_UNDO = 'undo'
ACTION_REDO = 'redo'
ACTION_DELETE = 'delete'
ACTION_COPY = 'copy'
ACTION_CUT = 'cut'
ACTION_PASTE = 'paste'

# Keys that delete the selection without a modifier
DELETE_KEYS = ('delete', 'backspace')

# (lowercase key, shift) -> action, all with Ctrl/Cmd held
CTRL_BINDINGS = {
    ('z', False): ACTION_UNDO,
    ('z', True): ACTION_REDO,
    ('y', False): ACTION_REDO,
    ('c', False): ACTION_COPY,
    ('x', False): ACTION_CUT,
    ('v', False): ACTION_PASTE,
}


def resolve_shortcut(key, ctrl=False, shift=False, text_input_focused=False):
    """Resolve a key press to an action name

    Args:
        key: Key name as the host reports it ('z', 'Z', 'Delete', 'Backspace', ...)
        ctrl: Ctrl (or Cmd on macOS) held
        shift: Shift held
        text_input_focused: A text input or text area has focus

    Returns:
        One of the ACTION_* names, or None if the key is not bound
    """
    if text_input_focused or not key:
        return None

    key = key.lower()
    if ctrl:
        return CTRL_BINDINGS.get((key, bool(shift)))
    if key in DELETE_KEYS:
        return ACTION_DELETE
    return None
