"""
Runtime configuration for the ticketing Lambda.

Mirrors the CDK-side settings: a plain dataclass with environment-driven
construction so handlers never read os.environ directly.
"""

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class ServiceSettings:
    """Settings read once per warm container."""

    environment: str = "dev"
    log_level: str = "INFO"

    # "dynamodb" in deployed stacks, "memory" for local runs and tests
    storage_backend: str = "dynamodb"
    tickets_table: str = "ticketing-tickets"
    history_table: str = "ticketing-ticket-history"

    # Pagination
    default_page_limit: int = 20
    max_page_limit: int = 100

    @property
    def expose_error_details(self) -> bool:
        """Internal error details are only surfaced outside production."""
        return self.environment != "prod"

    @classmethod
    def from_environment(cls) -> "ServiceSettings":
        """Load settings from environment variables."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            storage_backend=os.environ.get("STORAGE_BACKEND", "dynamodb").lower(),
            tickets_table=os.environ.get("TICKETS_TABLE", cls.tickets_table),
            history_table=os.environ.get("TICKET_HISTORY_TABLE", cls.history_table),
            default_page_limit=int(os.environ.get("DEFAULT_PAGE_LIMIT", "20")),
            max_page_limit=int(os.environ.get("MAX_PAGE_LIMIT", "100")),
        )
