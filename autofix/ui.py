"""UI collaborator interface consumed by the parse hook."""

from __future__ import annotations

import logging
from typing import Literal, Protocol

NotifyLevel = Literal["info", "warning", "error"]

logger = logging.getLogger(__name__)

_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class HostUI(Protocol):
    """What the host exposes for status and notifications."""

    def set_working_message(self, text: str | None = None) -> None:
        """Show `text` as the working indicator; no argument restores the default."""
        ...

    def notify(self, message: str, level: NotifyLevel = "info") -> None: ...


class LoggingUI:
    """HostUI backed by stdlib logging, for headless hosts and the self-test CLI."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self.working_message: str | None = None

    def set_working_message(self, text: str | None = None) -> None:
        self.working_message = text
        if text:
            self._log.debug("working: %s", text)

    def notify(self, message: str, level: NotifyLevel = "info") -> None:
        self._log.log(_LEVELS.get(level, logging.INFO), message)
