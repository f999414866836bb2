"""
Latest-request-wins tracking for dashboard refreshes.

Each client session may have several dashboard computations in flight when
the user changes the period quickly. Every computation takes a ticket keyed
by (session, parameters); only the newest ticket of a session may publish
its result, older ones are dropped.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from threading import Lock
from typing import Dict, Hashable, Optional, Tuple


@dataclass(frozen=True)
class RefreshTicket:
    session: str
    params: Tuple[Hashable, ...]
    sequence: int


class RefreshTracker:
    def __init__(self):
        self._lock = Lock()
        self._counter = count(1)
        self._latest: Dict[str, RefreshTicket] = {}

    def begin(self, session: str, params: Tuple[Hashable, ...]) -> RefreshTicket:
        with self._lock:
            ticket = RefreshTicket(session=session, params=params, sequence=next(self._counter))
            self._latest[session] = ticket
            return ticket

    def is_current(self, ticket: RefreshTicket) -> bool:
        with self._lock:
            latest = self._latest.get(ticket.session)
            return latest is not None and latest.sequence == ticket.sequence

    def finish(self, ticket: RefreshTicket) -> bool:
        """Release the ticket. Returns False when a newer request superseded it."""
        with self._lock:
            latest = self._latest.get(ticket.session)
            if latest is None or latest.sequence != ticket.sequence:
                return False
            del self._latest[ticket.session]
            return True

    def latest_params(self, session: str) -> Optional[Tuple[Hashable, ...]]:
        with self._lock:
            latest = self._latest.get(session)
            return latest.params if latest else None


_TRACKER: Optional[RefreshTracker] = None
_TRACKER_LOCK = Lock()


def get_refresh_tracker() -> RefreshTracker:
    global _TRACKER
    with _TRACKER_LOCK:
        if _TRACKER is None:
            _TRACKER = RefreshTracker()
        return _TRACKER
