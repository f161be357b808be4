"""FastAPI dependencies: shared services and rate limits."""

import math

from fastapi import HTTPException, Request, status
import structlog

from .orchestrator import GenerationOrchestrator
from .store import ProjectStore

logger = structlog.get_logger()

GENERAL_LIMIT = "general"
GENERATE_LIMIT = "generate"


def get_store(request: Request) -> ProjectStore:
    return request.app.state.store


def get_orchestrator(request: Request) -> GenerationOrchestrator:
    return request.app.state.orchestrator


class RateLimit:
    """Dependency enforcing one of the app's configured rate limiters.

    Raises 429 with a Retry-After header when the client is over the limit.
    Does nothing if the limiter is not configured (rate limiting disabled).
    """

    def __init__(self, name: str):
        self.name = name

    async def __call__(self, request: Request) -> None:
        limiter = request.app.state.rate_limiters.get(self.name)
        if limiter is None:
            return

        client = request.client.host if request.client else "unknown"
        retry_after = limiter.hit(client)
        if retry_after is None:
            return

        logger.warning(
            "rate_limit_exceeded",
            limiter=self.name,
            client=client,
            retry_after_s=round(retry_after, 1),
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=limiter.message,
            headers={"Retry-After": str(max(1, math.ceil(retry_after)))},
        )


general_rate_limit = RateLimit(GENERAL_LIMIT)
generate_rate_limit = RateLimit(GENERATE_LIMIT)
