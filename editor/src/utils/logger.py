"""Global logging and error handling utilities"""
import logging
import sys
import traceback
from PyQt5.QtWidgets import QMessageBox

from constants import DEFAULT_LOG_LEVEL, LOG_FORMAT

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_main_window = None


def setup_logging(level: str = DEFAULT_LOG_LEVEL):
    """Configure root logging for the editor (console output)

    The level is applied to the root logger even when handlers were
    already installed by an earlier call.

    Args:
        level: Logging level name, e.g. 'WARNING' or 'DEBUG'
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    logging.getLogger().setLevel(numeric_level)


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    logger = logging.getLogger('Editor')
    logger.error(traceback.format_exc())

    message = user_message if user_message else str(e)
    if _main_window:
        QMessageBox.critical(_main_window, title, message)
    else:
        logger.error(f"ERROR POPUP (no window): {title} - {message}")

    raise e
