from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class FetchTicket:
    key: str
    generation: int


class FetchGuard:
    """
    Generation counter for superseded fetches.

    Every fetch takes a ticket for its key (e.g. one view's slot list). When the
    response arrives, the caller keeps it only if no newer ticket was issued for
    the same key in the meantime.
    """

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}
        self._lock = threading.Lock()

    def begin(self, key: str) -> FetchTicket:
        with self._lock:
            generation = self._latest.get(key, 0) + 1
            self._latest[key] = generation
            return FetchTicket(key=key, generation=generation)

    def is_current(self, ticket: FetchTicket) -> bool:
        with self._lock:
            return self._latest.get(ticket.key) == ticket.generation

    def latest_generation(self, key: str) -> int:
        with self._lock:
            return self._latest.get(key, 0)
