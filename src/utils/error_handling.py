"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict, List, Optional

from models.response import ApiResponse


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails; carries every violation."""

    def __init__(self, errors: List[str], prefix: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(
            f"{prefix}: {', '.join(self.errors)}", status_code=422, details=self.errors
        )


class AssignmentError(ValidationError):
    """Raised when a ticket cannot be assigned."""

    def __init__(self, errors: List[str]):
        super().__init__(errors, prefix="Assignment failed")


class InvalidTransitionError(AppError):
    """Raised when a status change is not in the transition table."""

    def __init__(self, current: Any, target: Any):
        self.current = getattr(current, "value", current)
        self.target = getattr(target, "value", target)
        super().__init__(
            f"Invalid status transition from {self.current} to {self.target}",
            status_code=409,
            details={"current": self.current, "target": self.target},
        )


class ConcurrentModificationError(AppError):
    """Raised when a conditional write loses against another writer."""

    def __init__(self, message: str = "Ticket was modified concurrently"):
        super().__init__(message, status_code=409)


def json_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_body(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """Build the failure envelope."""
    return ApiResponse(success=False, error=message, details=details).model_dump(
        exclude_none=True
    )


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return json_response(error.status_code, error_body(str(error), error.details))
