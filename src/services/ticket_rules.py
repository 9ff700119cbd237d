"""
Ticket business rules.

Pure functions with no I/O. Every validator collects all violations before
returning so callers can report the complete set in one response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, FrozenSet, List, Optional, Union

from models.ticket import CreateTicketRequest, Ticket, TicketPriority, TicketStatus
from utils.validators import exceeds, is_blank

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000
MAX_CATEGORY_LENGTH = 100
MAX_COMMENT_LENGTH = 5000

VALID_TRANSITIONS: Dict[TicketStatus, FrozenSet[TicketStatus]] = {
    TicketStatus.NEW: frozenset({TicketStatus.ASSIGNED, TicketStatus.CLOSED}),
    TicketStatus.ASSIGNED: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.PENDING, TicketStatus.CLOSED}
    ),
    TicketStatus.IN_PROGRESS: frozenset(
        {TicketStatus.PENDING, TicketStatus.RESOLVED, TicketStatus.CLOSED}
    ),
    TicketStatus.PENDING: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED, TicketStatus.CLOSED}
    ),
    TicketStatus.RESOLVED: frozenset({TicketStatus.CLOSED, TicketStatus.IN_PROGRESS}),
    TicketStatus.CLOSED: frozenset(),
}

_PRIORITY_VALUES = frozenset(priority.value for priority in TicketPriority)


@dataclass
class ValidationResult:
    """Outcome of a validator: valid only when no errors were collected."""

    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_ticket_creation(request: CreateTicketRequest) -> ValidationResult:
    """Check creation input; title, description, customer and priority are required."""
    errors: List[str] = []

    if is_blank(request.title):
        errors.append("Ticket title is required")
    elif exceeds(request.title.strip(), MAX_TITLE_LENGTH):
        errors.append(f"Ticket title cannot exceed {MAX_TITLE_LENGTH} characters")

    if is_blank(request.description):
        errors.append("Ticket description is required")
    elif exceeds(request.description.strip(), MAX_DESCRIPTION_LENGTH):
        errors.append(
            f"Ticket description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )

    if is_blank(request.customer_id):
        errors.append("Customer ID is required")

    if is_blank(request.priority):
        errors.append("Ticket priority is required")
    elif request.priority not in _PRIORITY_VALUES:
        errors.append("Invalid ticket priority")

    # An absent category is allowed; a supplied one must carry text.
    if request.category is not None:
        if is_blank(request.category):
            errors.append("Category cannot be empty if provided")
        elif exceeds(request.category.strip(), MAX_CATEGORY_LENGTH):
            errors.append(f"Category cannot exceed {MAX_CATEGORY_LENGTH} characters")

    return ValidationResult(errors=errors)


def validate_status_transition(
    current: Union[TicketStatus, str], target: Union[TicketStatus, str]
) -> bool:
    """True if the transition table allows current -> target."""
    try:
        current, target = TicketStatus(current), TicketStatus(target)
    except ValueError:
        return False
    return target in VALID_TRANSITIONS[current]


def validate_ticket_assignment(ticket: Ticket, agent_id: Optional[str]) -> ValidationResult:
    """Check that the ticket can be handed to agent_id."""
    errors: List[str] = []

    if is_blank(agent_id):
        errors.append("Agent ID is required for assignment")

    if ticket.status == TicketStatus.CLOSED:
        errors.append("Cannot assign closed tickets")

    return ValidationResult(errors=errors)


def validate_comment(comment: Optional[str]) -> ValidationResult:
    """Comments must carry text and stay within MAX_COMMENT_LENGTH."""
    errors: List[str] = []

    if is_blank(comment):
        errors.append("Comment cannot be empty")

    if exceeds(comment, MAX_COMMENT_LENGTH):
        errors.append(f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters")

    return ValidationResult(errors=errors)


def resolution_time(ticket: Ticket) -> Optional[timedelta]:
    """Time from creation to the latest resolution, or None if never resolved."""
    if ticket.resolved_at is None or ticket.created_at is None:
        return None
    return ticket.resolved_at - ticket.created_at
