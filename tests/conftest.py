import asyncio
from datetime import UTC, datetime, timedelta

from httpx import ASGITransport, AsyncClient
import pytest

from scaffold_api.config import Settings
from scaffold_api.delays import DelayStrategy, NoDelay
from scaffold_api.main import create_app
from scaffold_api.schemas import GenerateRequest
from scaffold_api.store import InMemoryProjectStore


class FakeClock:
    """Settable UTC clock for stores."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1) -> None:
        self.now += timedelta(seconds=seconds)


class GatedDelay(DelayStrategy):
    """Blocks every run until ``release`` is set."""

    def __init__(self, seconds: float = 3.0):
        self.seconds = seconds
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    def duration(self, complexity: int) -> float:
        return self.seconds

    async def wait(self, complexity, on_progress=None) -> None:
        self.started.set()
        await self.release.wait()


def build_request(**overrides) -> GenerateRequest:
    payload = {
        "name": "Shop",
        "description": "An online store with checkout",
        "stack": "react-node",
        "features": {
            "auth": True,
            "crud": True,
            "payments": True,
            "database": True,
            "api": False,
        },
    }
    payload.update(overrides)
    return GenerateRequest.model_validate(payload)


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        store_backend="memory",
        generation_delay_enabled=False,
        rate_limit_enabled=False,
    )


@pytest.fixture
def store():
    return InMemoryProjectStore()


@pytest.fixture
def gated_delay():
    return GatedDelay()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store, delay=NoDelay())


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    await app.state.orchestrator.shutdown()


@pytest.fixture
def gated_app(settings, store, gated_delay):
    return create_app(settings, store=store, delay=gated_delay)


@pytest.fixture
async def gated_client(gated_app, gated_delay):
    async with AsyncClient(transport=ASGITransport(app=gated_app), base_url="http://test") as ac:
        yield ac
    gated_delay.release.set()
    await gated_app.state.orchestrator.shutdown()
