"""Lightweight health check handler."""

import os
import json
from datetime import datetime, timezone

SERVICE_VERSION = "1.0.0"


def lambda_handler(event, context):
    """Return a simple 200 response to verify the stack is alive."""
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(
            {
                "success": True,
                "data": {
                    "status": "healthy",
                    "version": SERVICE_VERSION,
                    "environment": os.environ.get("ENVIRONMENT", "dev"),
                    "storage_backend": os.environ.get("STORAGE_BACKEND", "dynamodb"),
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
            }
        ),
    }
