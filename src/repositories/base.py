"""Store contracts consumed by the use cases."""

from __future__ import annotations

import math
from typing import List, Optional, Protocol, Sequence

from models.history import TicketHistory
from models.ticket import Ticket, TicketFilters, TicketPage


class TicketStore(Protocol):
    """Ticket persistence.

    ``create`` assigns id, created_at and updated_at. ``update`` is a
    conditional write on ``version``: it raises NotFoundError when the ticket
    does not exist and ConcurrentModificationError when the stored version
    differs from the one the caller read.
    """

    def create(self, ticket: Ticket) -> Ticket: ...

    def find_by_id(self, ticket_id: str) -> Optional[Ticket]: ...

    def update(self, ticket: Ticket) -> Ticket: ...

    def find_many(self, filters: TicketFilters) -> TicketPage: ...

    def find_by_customer_id(self, customer_id: str) -> List[Ticket]: ...

    def find_by_assigned_agent(self, agent_id: str) -> List[Ticket]: ...


class TicketHistoryStore(Protocol):
    """Append-only ticket history; ``create`` assigns id and timestamp."""

    def create(self, entry: TicketHistory) -> TicketHistory: ...

    def find_by_ticket_id(self, ticket_id: str) -> List[TicketHistory]: ...


def newest_first(tickets: Sequence[Ticket]) -> List[Ticket]:
    """Order tickets by creation time, most recent first."""
    return sorted(tickets, key=lambda t: (t.created_at is not None, t.created_at), reverse=True)


def paginate(tickets: Sequence[Ticket], filters: TicketFilters) -> TicketPage:
    """Slice an already-filtered sequence into the requested page."""
    total = len(tickets)
    start = (filters.page - 1) * filters.limit
    return TicketPage(
        items=list(tickets[start : start + filters.limit]),
        total=total,
        page=filters.page,
        limit=filters.limit,
        total_pages=math.ceil(total / filters.limit),
    )
