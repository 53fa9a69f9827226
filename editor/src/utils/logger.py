"""Global error handling for host-side operations (file I/O, clipboard)

The editing core never raises into the UI; this helper is for the parts the
host owns, such as reading and writing the creation store.
"""
import sys
import logging
from PyQt5.QtWidgets import QMessageBox

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_logger = logging.getLogger('errors')
_main_window = None
_notifier = None


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def set_notifier(notify):
    """Route user-facing error messages to notify(message, kind) instead of a popup"""
    global _notifier
    _notifier = notify


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Report an exception to the user, then re-raise it

    Args:
        e: The exception to handle
        user_message: User-friendly message (defaults to str(e))
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Sends the message to the notifier, or a popup if none is set
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    _logger.error(user_message or str(e), exc_info=e)

    message = user_message if user_message else str(e)
    if _notifier is not None:
        _notifier(message, 'error')
    elif _main_window is not None:
        QMessageBox.critical(_main_window, title, message)
    else:
        _logger.error(f"ERROR POPUP (no window): {title} - {message}")

    raise e
