"""
Ticket use cases.

Each class is one business operation wired with its collaborators through
the constructor. The order is always: validate, mutate through the store,
then record the audit entry. Validation failures never reach the store.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from models.history import TicketAction, TicketHistory
from models.ticket import (
    AddCommentRequest,
    AssignTicketRequest,
    CreateTicketRequest,
    Ticket,
    TicketFilters,
    TicketPage,
    TicketPriority,
    TicketStatus,
    UpdateTicketStatusRequest,
)
from repositories.base import TicketStore
from services.audit_service import AuditService
from services.ticket_rules import (
    validate_comment,
    validate_status_transition,
    validate_ticket_assignment,
    validate_ticket_creation,
)
from utils.clock import next_after
from utils.error_handling import (
    AssignmentError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORY = "general"


def _require_ticket(ticket_repository: TicketStore, ticket_id: str) -> Ticket:
    ticket = ticket_repository.find_by_id(ticket_id)
    if ticket is None:
        raise NotFoundError(f"Ticket {ticket_id} not found")
    return ticket


def _record(
    audit_service: AuditService,
    ticket_id: str,
    action: TicketAction,
    user_id: str,
    details: Mapping[str, Any],
) -> TicketHistory:
    """Record an audit entry after a committed mutation; failures reach the caller."""
    try:
        return audit_service.record_ticket_action(ticket_id, action, user_id, details)
    except Exception:
        logger.exception(
            "Audit recording failed; ticket change is already committed",
            extra={"ticket_id": ticket_id, "action": action.value},
        )
        raise


class CreateTicketUseCase:
    """Open a new ticket in the NEW state."""

    def __init__(self, ticket_repository: TicketStore, audit_service: AuditService):
        self.ticket_repository = ticket_repository
        self.audit_service = audit_service

    def execute(self, request: CreateTicketRequest) -> Ticket:
        validation = validate_ticket_creation(request)
        if not validation.is_valid:
            raise ValidationError(validation.errors)

        ticket = Ticket(
            title=request.title.strip(),
            description=request.description.strip(),
            status=TicketStatus.NEW,
            priority=TicketPriority(request.priority),
            category=(request.category or DEFAULT_CATEGORY).strip(),
            customer_id=request.customer_id.strip(),
        )
        created = self.ticket_repository.create(ticket)

        _record(
            self.audit_service,
            created.id,
            TicketAction.CREATED,
            created.customer_id,
            {
                "new_value": created.status,
                "title": created.title,
                "priority": created.priority,
            },
        )
        logger.info(
            "Ticket created",
            extra={"ticket_id": created.id, "customer_id": created.customer_id},
        )
        return created


class UpdateTicketStatusUseCase:
    """Move a ticket along the transition table."""

    def __init__(self, ticket_repository: TicketStore, audit_service: AuditService):
        self.ticket_repository = ticket_repository
        self.audit_service = audit_service

    def execute(self, ticket_id: str, request: UpdateTicketStatusRequest) -> Ticket:
        ticket = _require_ticket(self.ticket_repository, ticket_id)
        target = request.status

        if not validate_status_transition(ticket.status, target):
            raise InvalidTransitionError(ticket.status, target)

        previous_status = ticket.status
        now = next_after(ticket.updated_at)
        changes = {"status": target, "updated_at": now}
        if target == TicketStatus.RESOLVED:
            changes["resolved_at"] = now
        elif target == TicketStatus.CLOSED:
            changes["closed_at"] = now

        updated = self.ticket_repository.update(ticket.model_copy(update=changes))

        comment = (request.comment or "").strip() or None
        _record(
            self.audit_service,
            ticket_id,
            TicketAction.STATUS_CHANGED,
            request.user_id,
            {
                "previous_value": previous_status,
                "new_value": target,
                "comment": comment,
            },
        )
        logger.info(
            "Ticket status changed",
            extra={
                "ticket_id": ticket_id,
                "from_status": previous_status.value,
                "to_status": target.value,
                "user_id": request.user_id,
            },
        )
        return updated


class AssignTicketUseCase:
    """Hand a ticket to an agent; a NEW ticket becomes ASSIGNED on the way."""

    def __init__(self, ticket_repository: TicketStore, audit_service: AuditService):
        self.ticket_repository = ticket_repository
        self.audit_service = audit_service

    def execute(self, ticket_id: str, request: AssignTicketRequest) -> Ticket:
        ticket = _require_ticket(self.ticket_repository, ticket_id)

        validation = validate_ticket_assignment(ticket, request.agent_id)
        if not validation.is_valid:
            raise AssignmentError(validation.errors)

        agent_id = request.agent_id.strip()
        previous_agent = ticket.assigned_agent_id
        # Auto-advance tied to assignment, not a regular transition.
        status = TicketStatus.ASSIGNED if ticket.status == TicketStatus.NEW else ticket.status

        updated = self.ticket_repository.update(
            ticket.model_copy(
                update={
                    "assigned_agent_id": agent_id,
                    "status": status,
                    "updated_at": next_after(ticket.updated_at),
                }
            )
        )

        _record(
            self.audit_service,
            ticket_id,
            TicketAction.ASSIGNED,
            request.assigned_by,
            {
                "previous_value": previous_agent,
                "new_value": agent_id,
                "agent_id": agent_id,
            },
        )
        logger.info(
            "Ticket assigned",
            extra={
                "ticket_id": ticket_id,
                "agent_id": agent_id,
                "assigned_by": request.assigned_by,
                "status": status.value,
            },
        )
        return updated


class GetTicketUseCase:
    """Read-only ticket lookups."""

    def __init__(self, ticket_repository: TicketStore):
        self.ticket_repository = ticket_repository

    def execute(self, ticket_id: str) -> Optional[Ticket]:
        """Return the ticket, or None when it does not exist."""
        return self.ticket_repository.find_by_id(ticket_id)

    def execute_many(self, filters: TicketFilters) -> TicketPage:
        return self.ticket_repository.find_many(filters)

    def execute_by_customer(self, customer_id: str) -> List[Ticket]:
        return self.ticket_repository.find_by_customer_id(customer_id)

    def execute_by_agent(self, agent_id: str) -> List[Ticket]:
        return self.ticket_repository.find_by_assigned_agent(agent_id)


class GetTicketHistoryUseCase:
    """Audit trail of one ticket, newest first."""

    def __init__(self, ticket_repository: TicketStore, audit_service: AuditService):
        self.ticket_repository = ticket_repository
        self.audit_service = audit_service

    def execute(self, ticket_id: str) -> List[TicketHistory]:
        _require_ticket(self.ticket_repository, ticket_id)
        return self.audit_service.get_history(ticket_id)


class AddCommentUseCase:
    """Attach a comment to a ticket's history without touching the ticket."""

    def __init__(self, ticket_repository: TicketStore, audit_service: AuditService):
        self.ticket_repository = ticket_repository
        self.audit_service = audit_service

    def execute(self, ticket_id: str, request: AddCommentRequest) -> TicketHistory:
        _require_ticket(self.ticket_repository, ticket_id)

        validation = validate_comment(request.comment)
        if not validation.is_valid:
            raise ValidationError(validation.errors)

        entry = _record(
            self.audit_service,
            ticket_id,
            TicketAction.COMMENT_ADDED,
            request.user_id,
            {"comment": request.comment.strip()},
        )
        logger.info(
            "Comment added",
            extra={"ticket_id": ticket_id, "user_id": request.user_id},
        )
        return entry
