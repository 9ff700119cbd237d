"""
Composition root.

Builds stores, the audit recorder and every use case once, passing
collaborators through constructors. The storage backend is chosen here and
nowhere else.
"""

from dataclasses import dataclass

from repositories.base import TicketHistoryStore, TicketStore
from services.audit_service import AuditService
from services.ticket_service import (
    AddCommentUseCase,
    AssignTicketUseCase,
    CreateTicketUseCase,
    GetTicketHistoryUseCase,
    GetTicketUseCase,
    UpdateTicketStatusUseCase,
)
from utils.config import ServiceSettings
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class TicketServices:
    """Everything the HTTP handlers need."""

    settings: ServiceSettings
    create_ticket: CreateTicketUseCase
    update_status: UpdateTicketStatusUseCase
    assign_ticket: AssignTicketUseCase
    get_ticket: GetTicketUseCase
    get_history: GetTicketHistoryUseCase
    add_comment: AddCommentUseCase


def build_use_cases(
    settings: ServiceSettings,
    ticket_repository: TicketStore,
    history_repository: TicketHistoryStore,
) -> TicketServices:
    """Wire use cases around the given stores."""
    audit_service = AuditService(history_repository)
    return TicketServices(
        settings=settings,
        create_ticket=CreateTicketUseCase(ticket_repository, audit_service),
        update_status=UpdateTicketStatusUseCase(ticket_repository, audit_service),
        assign_ticket=AssignTicketUseCase(ticket_repository, audit_service),
        get_ticket=GetTicketUseCase(ticket_repository),
        get_history=GetTicketHistoryUseCase(ticket_repository, audit_service),
        add_comment=AddCommentUseCase(ticket_repository, audit_service),
    )


def build_services(settings: ServiceSettings) -> TicketServices:
    """Pick the storage backend from settings and wire the use cases."""
    if settings.storage_backend == "memory":
        from repositories.memory_repo import (
            InMemoryTicketHistoryRepository,
            InMemoryTicketRepository,
        )

        ticket_repository = InMemoryTicketRepository()
        history_repository = InMemoryTicketHistoryRepository()
    elif settings.storage_backend == "dynamodb":
        from repositories.dynamodb_repo import (
            DynamoTicketHistoryRepository,
            DynamoTicketRepository,
        )

        ticket_repository = DynamoTicketRepository(settings.tickets_table)
        history_repository = DynamoTicketHistoryRepository(settings.history_table)
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    logger.info(
        "Ticket services wired",
        extra={"storage_backend": settings.storage_backend, "environment": settings.environment},
    )
    return build_use_cases(settings, ticket_repository, history_repository)
