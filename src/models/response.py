"""Common response wrapper."""

from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Success/failure envelope returned by every route."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    details: Optional[Any] = None
