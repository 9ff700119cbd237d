"""
Ticket route handlers.

Each handler parses the API Gateway event into a request model, calls one
use case and wraps the result in the ``{success, data}`` envelope. Domain
errors map to their status codes; anything else is a 500.
"""

from __future__ import annotations

import base64
import functools
import json
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from pydantic import ValidationError as SchemaError

from models.response import ApiResponse
from models.ticket import (
    AddCommentRequest,
    AssignTicketRequest,
    CreateTicketRequest,
    TicketFilters,
    UpdateTicketStatusRequest,
)
from utils.config import ServiceSettings
from utils.error_handling import AppError, error_body, json_response, to_response
from utils.logging_config import get_logger

if TYPE_CHECKING:
    from services.container import TicketServices

logger = get_logger(__name__)

# Lazy-loaded services to avoid import-time AWS clients
_services: Optional["TicketServices"] = None

Handler = Callable[[Dict[str, Any], Any], Dict[str, Any]]


def _get_services():
    """Lazy-load the wired use cases."""
    global _services
    if _services is None:
        from services.container import build_services

        _services = build_services(ServiceSettings.from_environment())
    return _services


def _ok(data: Any, status_code: int = 200) -> Dict[str, Any]:
    return json_response(
        status_code, ApiResponse(success=True, data=data).model_dump(exclude_none=True)
    )


def _body(event: Dict[str, Any]) -> Dict[str, Any]:
    raw = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AppError("Malformed JSON body", status_code=400) from exc
    if not isinstance(payload, dict):
        raise AppError("Request body must be a JSON object", status_code=400)
    return payload


def _path_id(event: Dict[str, Any]) -> str:
    ticket_id = (event.get("pathParameters") or {}).get("id")
    if not ticket_id:
        raise AppError("Path parameter 'id' is required", status_code=400)
    return ticket_id


def _query(event: Dict[str, Any]) -> Dict[str, str]:
    params = event.get("queryStringParameters") or {}
    return {key: value for key, value in params.items() if value not in (None, "")}


def _guarded(action: str) -> Callable[[Handler], Handler]:
    """Translate exceptions raised by a handler into envelope responses."""

    def decorator(fn: Handler) -> Handler:
        @functools.wraps(fn)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            try:
                return fn(event, context)
            except AppError as exc:
                logger.info(
                    "Request rejected",
                    extra={"action": action, "status_code": exc.status_code, "error": str(exc)},
                )
                return to_response(exc)
            except SchemaError as exc:
                logger.info("Invalid request payload", extra={"action": action})
                return json_response(
                    400, error_body("Invalid request", exc.errors(include_url=False))
                )
            except Exception as exc:
                logger.exception("Unhandled error", extra={"action": action})
                settings = ServiceSettings.from_environment()
                details = str(exc) if settings.expose_error_details else None
                return json_response(500, error_body("Internal server error", details))

        return wrapper

    return decorator


@_guarded("create_ticket")
def create_ticket(event, context):
    """Handle POST /tickets."""
    request = CreateTicketRequest.model_validate(_body(event))
    ticket = _get_services().create_ticket.execute(request)
    return _ok(ticket.model_dump(mode="json"), status_code=201)


@_guarded("list_tickets")
def list_tickets(event, context):
    """Handle GET /tickets with exact-match filters and pagination."""
    services = _get_services()
    settings = services.settings
    params = _query(event)

    filters = TicketFilters.model_validate(
        {
            "status": params.get("status"),
            "priority": params.get("priority"),
            "category": params.get("category"),
            "customer_id": params.get("customer_id"),
            "assigned_agent_id": params.get("assigned_to"),
            "page": params.get("page", 1),
            "limit": params.get("limit", settings.default_page_limit),
        }
    )
    if filters.limit > settings.max_page_limit:
        raise AppError(
            f"limit cannot exceed {settings.max_page_limit}", status_code=400
        )

    page = services.get_ticket.execute_many(filters)
    return _ok(page.model_dump(mode="json"))


@_guarded("get_ticket")
def get_ticket(event, context):
    """Handle GET /tickets/{id}."""
    ticket_id = _path_id(event)
    ticket = _get_services().get_ticket.execute(ticket_id)
    if ticket is None:
        return json_response(404, error_body("Ticket not found"))
    return _ok(ticket.model_dump(mode="json"))


@_guarded("update_status")
def update_status(event, context):
    """Handle PUT /tickets/{id}/status."""
    ticket_id = _path_id(event)
    request = UpdateTicketStatusRequest.model_validate(_body(event))
    ticket = _get_services().update_status.execute(ticket_id, request)
    return _ok(ticket.model_dump(mode="json"))


@_guarded("assign_ticket")
def assign_ticket(event, context):
    """Handle PUT /tickets/{id}/assign."""
    ticket_id = _path_id(event)
    request = AssignTicketRequest.model_validate(_body(event))
    ticket = _get_services().assign_ticket.execute(ticket_id, request)
    return _ok(ticket.model_dump(mode="json"))


@_guarded("get_history")
def get_history(event, context):
    """Handle GET /tickets/{id}/history."""
    ticket_id = _path_id(event)
    entries = _get_services().get_history.execute(ticket_id)
    return _ok([entry.model_dump(mode="json") for entry in entries])


@_guarded("add_comment")
def add_comment(event, context):
    """Handle POST /tickets/{id}/comments."""
    ticket_id = _path_id(event)
    request = AddCommentRequest.model_validate(_body(event))
    entry = _get_services().add_comment.execute(ticket_id, request)
    return _ok(entry.model_dump(mode="json"), status_code=201)


@_guarded("customer_tickets")
def customer_tickets(event, context):
    """Handle GET /customers/{id}/tickets (unpaginated)."""
    tickets = _get_services().get_ticket.execute_by_customer(_path_id(event))
    return _ok([ticket.model_dump(mode="json") for ticket in tickets])


@_guarded("agent_tickets")
def agent_tickets(event, context):
    """Handle GET /agents/{id}/tickets (unpaginated)."""
    tickets = _get_services().get_ticket.execute_by_agent(_path_id(event))
    return _ok([ticket.model_dump(mode="json") for ticket in tickets])
