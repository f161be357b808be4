"""Project storage backends."""

from typing import TYPE_CHECKING

from .base import ProjectStore, utc_now
from .memory import InMemoryProjectStore
from .redis import RedisProjectStore

if TYPE_CHECKING:
    from scaffold_api.config import Settings


def build_store(settings: "Settings") -> ProjectStore:
    """Create the store selected by ``STORE_BACKEND``."""
    if settings.store_backend == "redis":
        return RedisProjectStore.from_url(settings.redis_url)
    return InMemoryProjectStore()


__all__ = [
    "InMemoryProjectStore",
    "ProjectStore",
    "RedisProjectStore",
    "build_store",
    "utc_now",
]
