"""DynamoDB repositories for tickets and their history."""

from __future__ import annotations

import uuid
from typing import Any, Callable, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import ClientError

from models.history import TicketHistory
from models.ticket import Ticket, TicketFilters, TicketPage
from repositories.base import newest_first, paginate
from utils.clock import utcnow
from utils.error_handling import ConcurrentModificationError, NotFoundError
from utils.logging_config import get_logger

logger = get_logger(__name__)

CUSTOMER_INDEX = "customer_id-created_at-index"
AGENT_INDEX = "assigned_agent_id-status-index"

# Keep every store call bounded; retries stay inside botocore.
_CLIENT_CONFIG = Config(
    connect_timeout=2,
    read_timeout=5,
    retries={"max_attempts": 3, "mode": "standard"},
)


def _table(table_name: str):
    return boto3.resource("dynamodb", config=_CLIENT_CONFIG).Table(table_name)


def _to_item(model: Any) -> Dict[str, Any]:
    """Serialize a model; None attributes are dropped since GSI keys cannot be NULL."""
    return model.model_dump(mode="json", exclude_none=True)


def _to_ticket(item: Dict[str, Any]) -> Ticket:
    data = dict(item)
    # Numbers come back as Decimal.
    data["version"] = int(data.get("version", 0))
    return Ticket.model_validate(data)


def _to_history(item: Dict[str, Any]) -> TicketHistory:
    data = dict(item)
    data.pop("entry_key", None)
    return TicketHistory.model_validate(data)


def _collect(operation: Callable[..., Dict[str, Any]], **kwargs: Any) -> List[Dict[str, Any]]:
    """Follow LastEvaluatedKey until the scan/query is exhausted."""
    items: List[Dict[str, Any]] = []
    while True:
        resp = operation(**kwargs)
        items.extend(resp.get("Items", []))
        last_key = resp.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def _is_conditional_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class DynamoTicketRepository:
    """Tickets table keyed by ``id`` with customer and agent GSIs."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.table = _table(table_name)

    def create(self, ticket: Ticket) -> Ticket:
        """Insert a ticket, assigning id and timestamps."""
        now = utcnow()
        created = ticket.model_copy(
            update={
                "id": str(uuid.uuid4()),
                "created_at": now,
                "updated_at": now,
                "version": 0,
            }
        )
        self.table.put_item(
            Item=_to_item(created),
            ConditionExpression=Attr("id").not_exists(),
        )
        return created

    def find_by_id(self, ticket_id: str) -> Optional[Ticket]:
        resp = self.table.get_item(Key={"id": ticket_id})
        item = resp.get("Item")
        return _to_ticket(item) if item else None

    def update(self, ticket: Ticket) -> Ticket:
        """Write the ticket only if it exists and the stored version is the one that was read."""
        stored = ticket.model_copy(
            update={
                "updated_at": ticket.updated_at or utcnow(),
                "version": ticket.version + 1,
            }
        )
        try:
            self.table.put_item(
                Item=_to_item(stored),
                ConditionExpression=Attr("id").exists() & Attr("version").eq(ticket.version),
            )
        except ClientError as exc:
            if not _is_conditional_failure(exc):
                raise
            if not self._exists(ticket.id):
                raise NotFoundError(f"Ticket {ticket.id} not found") from exc
            logger.warning(
                "Conditional ticket write rejected",
                extra={"ticket_id": ticket.id, "expected_version": ticket.version},
            )
            raise ConcurrentModificationError(
                f"Ticket {ticket.id} was modified concurrently"
            ) from exc
        return stored

    def _exists(self, ticket_id: str) -> bool:
        resp = self.table.get_item(Key={"id": ticket_id}, ProjectionExpression="id")
        return "Item" in resp

    def find_many(self, filters: TicketFilters) -> TicketPage:
        """Scan with a filter expression; totals cover the whole filtered set."""
        condition = None
        for name, value in filters.criteria().items():
            clause = Attr(name).eq(value)
            condition = clause if condition is None else condition & clause

        kwargs: Dict[str, Any] = {}
        if condition is not None:
            kwargs["FilterExpression"] = condition
        tickets = [_to_ticket(item) for item in _collect(self.table.scan, **kwargs)]
        return paginate(newest_first(tickets), filters)

    def find_by_customer_id(self, customer_id: str) -> List[Ticket]:
        items = _collect(
            self.table.query,
            IndexName=CUSTOMER_INDEX,
            KeyConditionExpression=Key("customer_id").eq(customer_id),
            ScanIndexForward=False,
        )
        return newest_first([_to_ticket(item) for item in items])

    def find_by_assigned_agent(self, agent_id: str) -> List[Ticket]:
        items = _collect(
            self.table.query,
            IndexName=AGENT_INDEX,
            KeyConditionExpression=Key("assigned_agent_id").eq(agent_id),
        )
        return newest_first([_to_ticket(item) for item in items])


class DynamoTicketHistoryRepository:
    """History table keyed by ``ticket_id`` + ``entry_key``."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.table = _table(table_name)

    def create(self, entry: TicketHistory) -> TicketHistory:
        """Append an entry, assigning id and timestamp."""
        now = utcnow()
        stored = entry.model_copy(update={"id": str(uuid.uuid4()), "timestamp": now})
        item = _to_item(stored)
        # Fixed-width timestamp so the sort key orders chronologically; the id
        # suffix keeps two entries in the same microsecond apart.
        item["entry_key"] = f"{now.strftime('%Y-%m-%dT%H:%M:%S.%fZ')}#{stored.id}"
        self.table.put_item(Item=item)
        return stored

    def find_by_ticket_id(self, ticket_id: str) -> List[TicketHistory]:
        """Entries for one ticket, most recent first."""
        items = _collect(
            self.table.query,
            KeyConditionExpression=Key("ticket_id").eq(ticket_id),
            ScanIndexForward=False,
        )
        return [_to_history(item) for item in items]
