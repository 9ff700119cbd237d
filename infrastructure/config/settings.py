"""
Environment-specific configuration settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Deployment settings with cost-optimized defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"  # Default AWS region

    # DynamoDB tables
    tickets_table_name: str = "ticketing-tickets"
    history_table_name: str = "ticketing-ticket-history"
    point_in_time_recovery: bool = False
    retain_tables: bool = False

    # Lambda Configuration
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 15
    log_level: str = "INFO"

    # Pagination
    default_page_limit: int = 20
    max_page_limit: int = 100

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        region = os.environ.get("AWS_REGION", cls.aws_region)

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                aws_region=region,
                point_in_time_recovery=True,  # audit trail must survive mistakes
                retain_tables=True,
                lambda_memory_mb=512,
                lambda_timeout_seconds=30,
            )

        return cls(
            environment=env,
            aws_region=region,
            tickets_table_name=f"ticketing-tickets-{env}",
            history_table_name=f"ticketing-ticket-history-{env}",
            log_level=os.environ.get("LOG_LEVEL", "DEBUG" if env == "dev" else "INFO"),
        )
