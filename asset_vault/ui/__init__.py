"""UI implementations for CLI environment."""

from .notifier import ConsoleNotifier
from .notifier import clean_message

__all__ = ["ConsoleNotifier", "clean_message"]
