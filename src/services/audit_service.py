"""Audit recorder: turns ticket actions into history entries."""

from typing import Any, List, Mapping, Optional

from models.history import TicketAction, TicketHistory
from repositories.base import TicketHistoryStore
from utils.logging_config import get_logger

logger = get_logger(__name__)

_FIELD_KEYS = ("previous_value", "new_value", "comment")


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(getattr(value, "value", value))


class AuditService:
    """Append-only recorder; trusts the calling use case for semantics."""

    def __init__(self, history_repository: TicketHistoryStore):
        self.history_repository = history_repository

    def record_ticket_action(
        self,
        ticket_id: str,
        action: TicketAction,
        user_id: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> TicketHistory:
        """
        Append one history entry.

        ``previous_value``, ``new_value`` and ``comment`` in details map onto
        the entry's fields; any other key is kept as string metadata.
        """
        details = details or {}
        entry = TicketHistory(
            ticket_id=ticket_id,
            user_id=user_id,
            action=action,
            previous_value=_as_text(details.get("previous_value")),
            new_value=_as_text(details.get("new_value")),
            comment=details.get("comment"),
            metadata={
                key: _as_text(value)
                for key, value in details.items()
                if key not in _FIELD_KEYS and value is not None
            },
        )
        stored = self.history_repository.create(entry)
        logger.info(
            "Ticket action recorded",
            extra={"ticket_id": ticket_id, "action": action.value, "user_id": user_id},
        )
        return stored

    def get_history(self, ticket_id: str) -> List[TicketHistory]:
        """History for one ticket, newest first."""
        return self.history_repository.find_by_ticket_id(ticket_id)
