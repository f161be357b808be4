from pydantic import ValidationError
import pytest

from scaffold_api.config import Settings
from scaffold_api.delays import NoDelay, SimulatedDelay
from scaffold_api.dependencies import GENERAL_LIMIT, GENERATE_LIMIT
from scaffold_api.main import build_delay, build_rate_limiters


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("STORE_BACKEND", "REDIS_URL", "PORT", "LOG_LEVEL", "LOG_FORMAT", "SERVICE_NAME"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.service_name == "scaffold-api"
    assert settings.store_backend == "memory"
    assert settings.port == 3001
    assert settings.log_level == "INFO"
    assert settings.generate_rate_limit_requests == 10


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("RATE_LIMIT_REQUESTS", "5")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.rate_limit_requests == 5


def test_redis_backend_requires_url():
    with pytest.raises(ValidationError, match="REDIS_URL"):
        Settings(_env_file=None, store_backend="redis")


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="LOUD")


def test_build_delay():
    assert isinstance(build_delay(Settings(_env_file=None)), SimulatedDelay)
    disabled = Settings(_env_file=None, generation_delay_enabled=False)
    assert isinstance(build_delay(disabled), NoDelay)

    delay = build_delay(Settings(_env_file=None, generation_max_delay=2))
    assert delay.duration(11) == 2


def test_build_rate_limiters():
    limiters = build_rate_limiters(Settings(_env_file=None, generate_rate_limit_requests=3))

    assert set(limiters) == {GENERAL_LIMIT, GENERATE_LIMIT}
    assert limiters[GENERATE_LIMIT].limit == 3
    assert build_rate_limiters(Settings(_env_file=None, rate_limit_enabled=False)) == {}


def test_logging_options():
    settings = Settings(_env_file=None, log_format="json", log_level="warning")

    assert settings.logging_options() == {
        "service_name": "scaffold-api",
        "log_format": "json",
        "log_level": "WARNING",
    }
    assert settings.logging_options(service_name="scaffold-cli")["service_name"] == "scaffold-cli"
