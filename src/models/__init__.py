"""Pydantic models for tickets, history and API payloads."""

from models.history import TicketAction, TicketHistory  # noqa: F401
from models.response import ApiResponse  # noqa: F401
from models.ticket import (  # noqa: F401
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
