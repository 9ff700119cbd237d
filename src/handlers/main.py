"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

Why one Lambda?
- Keeps the wired stores and use cases warm across routes.
- Simpler to deploy while still keeping code organized by delegating to modules.
"""

from typing import Callable, Dict, Pattern, Tuple
import re

from . import health_check, tickets
from utils.error_handling import error_body, json_response

_HEALTH = re.compile(r"^/health/?$")
_TICKETS = re.compile(r"^/tickets/?$")
_TICKET = re.compile(r"^/tickets/(?P<id>[^/]+)/?$")
_TICKET_STATUS = re.compile(r"^/tickets/(?P<id>[^/]+)/status/?$")
_TICKET_ASSIGN = re.compile(r"^/tickets/(?P<id>[^/]+)/assign/?$")
_TICKET_HISTORY = re.compile(r"^/tickets/(?P<id>[^/]+)/history/?$")
_TICKET_COMMENTS = re.compile(r"^/tickets/(?P<id>[^/]+)/comments/?$")
_CUSTOMER_TICKETS = re.compile(r"^/customers/(?P<id>[^/]+)/tickets/?$")
_AGENT_TICKETS = re.compile(r"^/agents/(?P<id>[^/]+)/tickets/?$")


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler and fill ``pathParameters`` from the path when the integration
    did not (e.g. a catch-all route).
    """
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method", "").upper()
    path = http.get("path", "") or event.get("rawPath", "")

    # Built per call so handlers can be swapped out in tests.
    route_table: Tuple[Tuple[str, Pattern, Callable], ...] = (
        ("GET", _HEALTH, health_check.lambda_handler),
        ("POST", _TICKETS, tickets.create_ticket),
        ("GET", _TICKETS, tickets.list_tickets),
        ("GET", _TICKET, tickets.get_ticket),
        ("PUT", _TICKET_STATUS, tickets.update_status),
        ("PUT", _TICKET_ASSIGN, tickets.assign_ticket),
        ("GET", _TICKET_HISTORY, tickets.get_history),
        ("POST", _TICKET_COMMENTS, tickets.add_comment),
        ("GET", _CUSTOMER_TICKETS, tickets.customer_tickets),
        ("GET", _AGENT_TICKETS, tickets.agent_tickets),
    )

    for route_method, pattern, handler in route_table:
        if route_method != method:
            continue
        match = pattern.match(path)
        if match:
            params: Dict[str, str] = dict(event.get("pathParameters") or {})
            for key, value in match.groupdict().items():
                params.setdefault(key, value)
            return handler({**event, "pathParameters": params}, context)

    body = error_body("Route not found", {"route": f"{method} {path}"})
    return json_response(404, body)
