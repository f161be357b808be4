from contextlib import AbstractContextManager
import uuid

import structlog

CORRELATION_HEADER = "X-Correlation-ID"


def new_correlation_id() -> str:
    """Generate a short request-scoped correlation ID."""
    return f"req_{uuid.uuid4().hex[:8]}"


def request_context(correlation_id: str, **extra) -> AbstractContextManager:
    """Bind correlation ID (and extra keys) for the duration of a request.

    Previous values are restored on exit, so process-wide keys such as
    ``service`` survive. Tasks spawned inside the block inherit the binding.
    """
    return structlog.contextvars.bound_contextvars(correlation_id=correlation_id, **extra)


def get_correlation_id() -> str | None:
    """Get correlation ID from current context."""
    return structlog.contextvars.get_contextvars().get("correlation_id")
