"""Ticket models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class TicketStatus(str, Enum):
    """Lifecycle states; NEW is initial and CLOSED is terminal."""

    NEW = "new"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    """Priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Ticket(BaseModel):
    """A customer-reported issue tracked through its lifecycle."""

    id: str = ""
    title: str
    description: str
    status: TicketStatus = TicketStatus.NEW
    priority: TicketPriority
    category: str
    customer_id: str
    assigned_agent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    # Bumped by the store on every successful update.
    version: int = 0


class CreateTicketRequest(BaseModel):
    """
    Inbound payload for ticket creation.

    Fields are deliberately loose: the business rules report every problem
    at once instead of pydantic failing on the first missing field.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    customer_id: Optional[str] = None


class UpdateTicketStatusRequest(BaseModel):
    """Inbound payload for a status change."""

    status: TicketStatus
    user_id: str = Field(min_length=1)
    comment: Optional[str] = Field(default=None, max_length=1000)


class AssignTicketRequest(BaseModel):
    """Inbound payload for an assignment; a missing agent is reported by the rules."""

    agent_id: Optional[str] = None
    assigned_by: str = Field(min_length=1)


class AddCommentRequest(BaseModel):
    """Inbound payload for a comment."""

    user_id: str = Field(min_length=1)
    comment: Optional[str] = None


class TicketFilters(BaseModel):
    """Exact-match filters plus 1-based pagination for ticket listing."""

    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    category: Optional[str] = None
    customer_id: Optional[str] = None
    assigned_agent_id: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    def criteria(self) -> Dict[str, Any]:
        """Supplied filter fields, keyed by ticket attribute name."""
        values = self.model_dump(
            mode="json", exclude={"page", "limit"}, exclude_none=True
        )
        return {key: value for key, value in values.items() if value != ""}

    def matches(self, ticket: Ticket) -> bool:
        """True if the ticket satisfies every supplied filter."""
        stored = ticket.model_dump(mode="json")
        return all(stored.get(key) == value for key, value in self.criteria().items())


class TicketPage(BaseModel):
    """One page of a filtered ticket listing."""

    items: List[Ticket] = Field(default_factory=list)
    total: int
    page: int
    limit: int
    total_pages: int
