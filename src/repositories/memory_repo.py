"""
In-process ticket and history stores.

Same contract as the DynamoDB stores; used for local runs
(STORAGE_BACKEND=memory) and tests. Survives across warm Lambda invocations
only, so it is never a production backend.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional

from models.history import TicketHistory
from models.ticket import Ticket, TicketFilters, TicketPage
from repositories.base import newest_first, paginate
from utils.clock import next_after
from utils.error_handling import ConcurrentModificationError, NotFoundError


class InMemoryTicketRepository:
    """Thread-safe dict-backed ticket store."""

    def __init__(self) -> None:
        self._tickets: Dict[str, Ticket] = {}
        self._last_created: Optional[datetime] = None
        self._lock = Lock()

    def create(self, ticket: Ticket) -> Ticket:
        """Insert a ticket, assigning id and timestamps."""
        with self._lock:
            # Strictly increasing creation times keep newest-first ordering total.
            now = next_after(self._last_created)
            self._last_created = now
            created = ticket.model_copy(
                update={
                    "id": str(uuid.uuid4()),
                    "created_at": now,
                    "updated_at": now,
                    "version": 0,
                }
            )
            self._tickets[created.id] = created
        return created.model_copy()

    def find_by_id(self, ticket_id: str) -> Optional[Ticket]:
        with self._lock:
            ticket = self._tickets.get(ticket_id)
        return ticket.model_copy() if ticket else None

    def update(self, ticket: Ticket) -> Ticket:
        """Replace a ticket if nobody else updated it since it was read."""
        with self._lock:
            current = self._tickets.get(ticket.id)
            if current is None:
                raise NotFoundError(f"Ticket {ticket.id} not found")
            if current.version != ticket.version:
                raise ConcurrentModificationError(
                    f"Ticket {ticket.id} was modified concurrently"
                )
            updated_at = ticket.updated_at
            if updated_at is None or updated_at <= current.updated_at:
                updated_at = next_after(current.updated_at)
            stored = ticket.model_copy(
                update={"updated_at": updated_at, "version": current.version + 1}
            )
            self._tickets[stored.id] = stored
        return stored.model_copy()

    def find_many(self, filters: TicketFilters) -> TicketPage:
        with self._lock:
            matching = [t.model_copy() for t in self._tickets.values() if filters.matches(t)]
        return paginate(newest_first(matching), filters)

    def find_by_customer_id(self, customer_id: str) -> List[Ticket]:
        with self._lock:
            tickets = [
                t.model_copy() for t in self._tickets.values() if t.customer_id == customer_id
            ]
        return newest_first(tickets)

    def find_by_assigned_agent(self, agent_id: str) -> List[Ticket]:
        with self._lock:
            tickets = [
                t.model_copy()
                for t in self._tickets.values()
                if t.assigned_agent_id == agent_id
            ]
        return newest_first(tickets)


class InMemoryTicketHistoryRepository:
    """Append-only list of history entries."""

    def __init__(self) -> None:
        self._entries: List[TicketHistory] = []
        self._lock = Lock()

    def create(self, entry: TicketHistory) -> TicketHistory:
        """Append an entry; timestamps never go backwards within the log."""
        with self._lock:
            previous = self._entries[-1].timestamp if self._entries else None
            stored = entry.model_copy(
                update={"id": str(uuid.uuid4()), "timestamp": next_after(previous)}
            )
            self._entries.append(stored)
        return stored.model_copy()

    def find_by_ticket_id(self, ticket_id: str) -> List[TicketHistory]:
        with self._lock:
            entries = [e for e in self._entries if e.ticket_id == ticket_id]
        return [e.model_copy() for e in reversed(entries)]
