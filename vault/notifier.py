"""Notification collaborators used to report outcomes to the user."""

from typing import Protocol

from common.logging_config import get_logger

logger = get_logger(__name__)

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


class Notifier(Protocol):
    def success(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


class LoggingNotifier:
    """Reports outcomes through the log only."""

    def success(self, text: str) -> None:
        logger.info(text)

    def error(self, text: str) -> None:
        logger.error(text)


class ConsoleNotifier:
    """Prints colored outcome lines to the terminal."""

    def __init__(self, color: bool = True):
        self.color = color

    def success(self, text: str) -> None:
        print(self._paint(GREEN, text))

    def error(self, text: str) -> None:
        print(self._paint(RED, text))

    def _paint(self, color: str, text: str) -> str:
        return f"{color}{text}{RESET}" if self.color else text


class RecordingNotifier:
    """Keeps every notification in memory."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def success(self, text: str) -> None:
        self.messages.append(("success", text))

    def error(self, text: str) -> None:
        self.messages.append(("error", text))

    @property
    def errors(self) -> list[str]:
        return [text for kind, text in self.messages if kind == "error"]

    @property
    def successes(self) -> list[str]:
        return [text for kind, text in self.messages if kind == "success"]
