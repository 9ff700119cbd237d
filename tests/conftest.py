"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import main` to work when running
tests, simulating the Lambda environment where code is deployed from the
src/ directory.
"""

import os
import sys
from pathlib import Path

import boto3
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    # Add repo root first (for imports like infrastructure.*)
    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    # Add src/ for Lambda-style imports (from handlers import ...)
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Lambda environment variables used by handlers
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("TICKETS_TABLE", "test-tickets-table")
os.environ.setdefault("TICKET_HISTORY_TABLE", "test-ticket-history-table")

# Create a default boto3 session so resources/clients do not error during import.
boto3.setup_default_session(region_name="eu-west-2")


@pytest.fixture
def ticket_repository():
    """Fresh in-memory ticket store."""
    from repositories.memory_repo import InMemoryTicketRepository

    return InMemoryTicketRepository()


@pytest.fixture
def history_repository():
    """Fresh in-memory history store."""
    from repositories.memory_repo import InMemoryTicketHistoryRepository

    return InMemoryTicketHistoryRepository()


@pytest.fixture
def services(ticket_repository, history_repository):
    """Use cases wired around the in-memory stores."""
    from services.container import build_use_cases
    from utils.config import ServiceSettings

    return build_use_cases(
        ServiceSettings(storage_backend="memory"), ticket_repository, history_repository
    )


@pytest.fixture
def create_request():
    """Factory for valid creation payloads, overridable per test."""
    from models.ticket import CreateTicketRequest

    def _make(**overrides):
        payload = {
            "title": "Printer broken",
            "description": "No toner",
            "priority": "high",
            "category": "Hardware",
            "customer_id": "cust-1",
        }
        payload.update(overrides)
        return CreateTicketRequest(**payload)

    return _make
