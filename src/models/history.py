"""Ticket history (audit trail) models."""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class TicketAction(str, Enum):
    """Actions recorded in a ticket's history."""

    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    ASSIGNED = "assigned"
    COMMENT_ADDED = "comment_added"
    PRIORITY_CHANGED = "priority_changed"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketHistory(BaseModel):
    """Immutable record of one action taken on a ticket."""

    id: str = ""
    ticket_id: str
    user_id: str
    action: TicketAction
    previous_value: Optional[str] = None
    new_value: Optional[str] = None
    comment: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    timestamp: Optional[datetime] = None
