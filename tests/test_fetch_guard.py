"""
Tests for the generation counter that drops superseded fetches.
"""

from __future__ import annotations

import threading

from clinicboard.application.utils.fetch_guard import FetchGuard


def test_newer_ticket_supersedes_older():
    guard = FetchGuard()

    first = guard.begin("slots")
    second = guard.begin("slots")

    assert not guard.is_current(first)
    assert guard.is_current(second)
    assert guard.latest_generation("slots") == 2


def test_keys_are_independent():
    guard = FetchGuard()

    slots = guard.begin("slots")
    guard.begin("calls")

    assert guard.is_current(slots)
    assert guard.latest_generation("unused") == 0


def test_concurrent_tickets_are_unique():
    guard = FetchGuard()
    tickets = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            ticket = guard.begin("slots")
            with lock:
                tickets.append(ticket.generation)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(tickets) == list(range(1, 801))
    assert guard.latest_generation("slots") == 800
