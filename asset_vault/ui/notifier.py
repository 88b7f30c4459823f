"""Console notification sink using rich terminal UX."""

import logging

from rich.console import Console

from ..utils.error_format import escape_markup

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully."
DEFAULT_FAILURE_MESSAGE = "An error occurred."


def clean_message(message: str, success: bool) -> str:
    """Single-line version of ``message``; a default when it is empty."""
    clean = message.replace("\r", "").replace("\n", " ").replace("\t", " ").strip()
    if not clean:
        return DEFAULT_SUCCESS_MESSAGE if success else DEFAULT_FAILURE_MESSAGE
    return clean


class ConsoleNotifier:
    """Prints vault notifications to the terminal. Never raises."""

    def __init__(self, console: Console | None = None, source: str = "Asset Vault"):
        self.console = console or Console()
        self.source = source

    def notify(self, message: str, success: bool) -> None:
        text = clean_message(message, success)
        icon, color = ("✓", "green") if success else ("✗", "red")
        try:
            self.console.print(f"[{color}]{icon}[/{color}] {escape_markup(text)} [dim]({self.source})[/dim]")
        except Exception:
            logger.exception("Failed to display notification")

        if success:
            logger.info(f"Notification: {text}")
        else:
            logger.error(f"Notification: {text}")
