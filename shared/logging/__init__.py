from .config import get_logger, setup_logging
from .correlation import (
    CORRELATION_HEADER,
    get_correlation_id,
    new_correlation_id,
    request_context,
)

__all__ = [
    "CORRELATION_HEADER",
    "setup_logging",
    "get_logger",
    "new_correlation_id",
    "request_context",
    "get_correlation_id",
]
