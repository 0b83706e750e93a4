"""Ordered, thread-safe collector of user-facing diagnostic messages."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator

from symbo.utils.logging import get_logger

log = get_logger(__name__)

LogListener = Callable[[list[str]], None]


class LogSink:
    """Collects diagnostic strings in insertion order.

    Messages may be added from any thread. Listeners receive a snapshot of all
    messages after every change and are called outside the lock.
    """

    def __init__(self, listener: LogListener | None = None) -> None:
        self._lock = threading.Lock()
        self._messages: list[str] = []
        self._listener = listener

    def add(self, message: str) -> None:
        self.add_many([message])

    def add_many(self, messages: Iterable[str]) -> None:
        batch = list(messages)
        if not batch:
            return
        with self._lock:
            self._messages.extend(batch)
            snapshot = list(self._messages)
        for message in batch:
            log.debug("diagnostic", message=message)
        self._notify(snapshot)

    def reset(self) -> None:
        with self._lock:
            self._messages.clear()
        self._notify([])

    @property
    def messages(self) -> list[str]:
        with self._lock:
            return list(self._messages)

    def text(self) -> str:
        return "\n".join(self.messages)

    def _notify(self, snapshot: list[str]) -> None:
        if self._listener is not None:
            self._listener(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self.messages)
