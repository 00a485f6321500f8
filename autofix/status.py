"""Per-call working status, so overlapping repairs don't clobber each other."""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Iterator

from autofix.ui import HostUI


class WorkingStatusBoard:
    """Tracks one working message per in-flight call.

    The UI shows the most recently started active message. When a call ends,
    its message is dropped and the UI falls back to the next most recent one,
    or is reset to the host default once nothing is active.

    Not thread-safe; meant to be driven from a single event loop.
    """

    def __init__(self, ui: HostUI) -> None:
        self._ui = ui
        self._active: dict[int, str] = {}
        self._tokens = itertools.count()

    @property
    def active(self) -> list[str]:
        return list(self._active.values())

    def push(self, message: str) -> int:
        token = next(self._tokens)
        self._active[token] = message
        self._ui.set_working_message(message)
        return token

    def pop(self, token: int) -> None:
        if token not in self._active:
            return
        showing = token == next(reversed(self._active))
        del self._active[token]
        if not showing:
            return
        if self._active:
            self._ui.set_working_message(next(reversed(self._active.values())))
        else:
            self._ui.set_working_message()

    @contextmanager
    def scope(self, message: str) -> Iterator[int]:
        token = self.push(message)
        try:
            yield token
        finally:
            self.pop(token)
