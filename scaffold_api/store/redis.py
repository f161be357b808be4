"""Redis-backed project store.

Layout:
    scaffold:project:<id>   JSON document of the project
    scaffold:projects       sorted set of ids scored by insertion sequence
    scaffold:projects:seq   insertion sequence counter

Updates are optimistic WATCH/MULTI transactions, retried on conflict, so two
writers touching the same project never lose each other's changes and an
update racing a delete never resurrects the record.
"""

from collections.abc import Callable
from urllib.parse import urlsplit
import uuid

import redis.asyncio as redis
from redis.exceptions import WatchError
import structlog

from scaffold_api.schemas import GeneratedFile, GenerateRequest, Project, ProjectStatus

from .base import Clock, ProjectStore, newest_first, utc_now

logger = structlog.get_logger(__name__)


class RedisProjectStore(ProjectStore):
    """Project store persisted in Redis."""

    def __init__(
        self,
        client: redis.Redis,
        clock: Clock = utc_now,
        key_prefix: str = "scaffold",
    ):
        super().__init__(clock)
        self._redis = client
        self._prefix = key_prefix
        self._index_key = f"{key_prefix}:projects"
        self._seq_key = f"{key_prefix}:projects:seq"

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> "RedisProjectStore":
        client = redis.from_url(redis_url, decode_responses=True)
        # Credentials in the URL stay out of the logs.
        url = urlsplit(redis_url)
        logger.info(
            "redis_connected",
            host=url.hostname,
            port=url.port,
            db=url.path.lstrip("/") or "0",
        )
        return cls(client, **kwargs)

    def _key(self, project_id: str) -> str:
        return f"{self._prefix}:project:{project_id}"

    async def create(self, request: GenerateRequest) -> Project:
        project = self._new_project(str(uuid.uuid4()), request)
        seq = await self._redis.incr(self._seq_key)

        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.set(self._key(project.id), project.model_dump_json())
            pipe.zadd(self._index_key, {project.id: seq})
            await pipe.execute()

        logger.info("project_stored", project_id=project.id, stack=project.stack.value, seq=seq)
        return project

    async def get_all(self) -> list[Project]:
        ids = await self._redis.zrange(self._index_key, 0, -1)
        if not ids:
            return []
        raws = await self._redis.mget([self._key(pid) for pid in ids])
        projects = [Project.model_validate_json(raw) for raw in raws if raw is not None]
        return newest_first(projects)

    async def get_by_id(self, project_id: str) -> Project | None:
        raw = await self._redis.get(self._key(project_id))
        if raw is None:
            return None
        return Project.model_validate_json(raw)

    async def update_status(self, project_id: str, status: ProjectStatus) -> Project | None:
        def apply(project: Project) -> None:
            project.status = status

        return await self._mutate(project_id, apply)

    async def update_files(
        self, project_id: str, files: list[GeneratedFile] | None
    ) -> Project | None:
        def apply(project: Project) -> None:
            project.files = list(files) if files is not None else None

        return await self._mutate(project_id, apply)

    async def reset(self, project_id: str) -> Project | None:
        def apply(project: Project) -> None:
            project.status = ProjectStatus.GENERATING
            project.files = None

        return await self._mutate(project_id, apply)

    async def complete(self, project_id: str, files: list[GeneratedFile]) -> Project | None:
        def apply(project: Project) -> bool:
            if project.status != ProjectStatus.GENERATING:
                return False
            project.files = list(files)
            project.status = ProjectStatus.COMPLETED
            return True

        return await self._mutate(project_id, apply)

    async def fail(self, project_id: str) -> Project | None:
        def apply(project: Project) -> bool:
            if project.status != ProjectStatus.GENERATING:
                return False
            project.files = None
            project.status = ProjectStatus.FAILED
            return True

        return await self._mutate(project_id, apply)

    async def delete(self, project_id: str) -> bool:
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(project_id))
            pipe.zrem(self._index_key, project_id)
            deleted, _ = await pipe.execute()

        if deleted:
            logger.info("project_removed", project_id=project_id)
        return bool(deleted)

    async def close(self) -> None:
        await self._redis.aclose()
        logger.info("redis_connection_closed")

    async def _mutate(
        self, project_id: str, apply: Callable[[Project], bool | None]
    ) -> Project | None:
        """Read-modify-write one project. ``apply`` returning False aborts."""
        key = self._key(project_id)
        async with self._redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    raw = await pipe.get(key)
                    if raw is None:
                        return None
                    project = Project.model_validate_json(raw)
                    if apply(project) is False:
                        return None
                    self._touch(project)
                    pipe.multi()
                    pipe.set(key, project.model_dump_json())
                    await pipe.execute()
                    return project
                except WatchError:
                    logger.debug("project_update_conflict", project_id=project_id)
