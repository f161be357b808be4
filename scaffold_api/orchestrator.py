"""Generation orchestrator.

Owns the asynchronous lifecycle of a generation run:

    generating -> (simulated delay) -> generate files -> completed | failed

A request gets a :class:`GenerationTicket` immediately; completion is observed
by polling the project's status in the store. Runs for the same project are
serialized, so overlapping regenerate requests queue behind each other and the
most recent one always finishes last.
"""

import asyncio
from collections import Counter, defaultdict
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import partial
import math

import structlog

from .delays import DelayStrategy, NoDelay, complexity_score
from .generator import generate_files
from .schemas import GeneratedFile, GenerateRequest, Project, ProjectStatus
from .store import ProjectStore

logger = structlog.get_logger(__name__)

FileGenerator = Callable[[Project], list[GeneratedFile]]


@dataclass
class GenerationTicket:
    """Acknowledgment of a scheduled generation run."""

    project_id: str
    estimated_time: int
    task: asyncio.Task


class GenerationOrchestrator:
    """Schedules generation runs and writes their outcome back to the store."""

    def __init__(
        self,
        store: ProjectStore,
        delay: DelayStrategy | None = None,
        generate: FileGenerator = generate_files,
    ):
        self._store = store
        self._delay = delay or NoDelay()
        self._generate = generate
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()
        self._tasks: dict[str, set[asyncio.Task]] = defaultdict(set)

    @property
    def active_runs(self) -> int:
        return sum(len(tasks) for tasks in self._tasks.values())

    def estimate(self, project: Project) -> int:
        """Estimated run time in whole seconds."""
        return math.ceil(self._delay.duration(complexity_score(project.features)))

    async def submit(self, request: GenerateRequest) -> GenerationTicket:
        """Create a project in ``generating`` state and schedule its run."""
        project = await self._store.create(request)
        ticket = self._schedule(project)
        logger.info(
            "generation_requested",
            project_id=project.id,
            stack=project.stack.value,
            features=project.features.enabled(),
            active_runs=self.active_runs,
        )
        return ticket

    async def regenerate(self, project_id: str) -> GenerationTicket | None:
        """Reset a project to ``generating`` and schedule a new run.

        Returns None if the project does not exist.
        """
        project = await self._store.reset(project_id)
        if project is None:
            return None
        queued_behind = len(self._tasks.get(project_id, ()))
        ticket = self._schedule(project)
        logger.info(
            "regeneration_requested",
            project_id=project_id,
            queued_behind=queued_behind,
            active_runs=self.active_runs,
        )
        return ticket

    async def run(self, project_id: str) -> ProjectStatus | None:
        """Execute one generation run. Never raises on generation failure.

        Returns the final status, or None if the project disappeared.
        """
        log = logger.bind(project_id=project_id)

        async with self._project_lock(project_id):
            project = await self._store.get_by_id(project_id)
            if project is not None and project.status != ProjectStatus.GENERATING:
                # An earlier run finished while this one was queued.
                project = await self._store.reset(project_id)
            if project is None:
                log.info("generation_skipped", reason="project_deleted")
                return None

            complexity = complexity_score(project.features)
            log.info(
                "generation_started",
                stack=project.stack.value,
                complexity=complexity,
                duration_s=self._delay.duration(complexity),
            )

            try:
                await self._delay.wait(complexity, on_progress=partial(self._on_progress, log))

                project = await self._store.get_by_id(project_id)
                if project is None:
                    log.info("generation_skipped", reason="project_deleted")
                    return None

                files = self._generate(project)

                # Files and status land in one write.
                if await self._store.complete(project_id, files) is None:
                    log.info("generation_discarded", reason="project_deleted_or_finished")
                    return None
            except Exception as e:
                log.exception("generation_failed", error=str(e), error_type=type(e).__name__)
                await self._mark_failed(project_id)
                return ProjectStatus.FAILED

            log.info("generation_completed", file_count=len(files))
            return ProjectStatus.COMPLETED

    async def wait(self, project_id: str | None = None) -> None:
        """Wait until no run (for one project, or at all) is outstanding."""
        while True:
            if project_id is not None:
                pending = set(self._tasks.get(project_id, ()))
            else:
                pending = {task for tasks in self._tasks.values() for task in tasks}
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel outstanding runs and wait for them to unwind."""
        pending = [task for tasks in self._tasks.values() for task in tasks]
        if not pending:
            return
        logger.warning("generation_runs_cancelled", count=len(pending))
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    def _schedule(self, project: Project) -> GenerationTicket:
        task = asyncio.create_task(self.run(project.id), name=f"generate:{project.id}")
        self._tasks[project.id].add(task)
        task.add_done_callback(partial(self._forget, project.id))
        return GenerationTicket(
            project_id=project.id,
            estimated_time=self.estimate(project),
            task=task,
        )

    def _forget(self, project_id: str, task: asyncio.Task) -> None:
        tasks = self._tasks.get(project_id)
        if tasks is not None:
            tasks.discard(task)
            if not tasks:
                del self._tasks[project_id]
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "generation_task_crashed",
                project_id=project_id,
                error=str(task.exception()),
            )

    @asynccontextmanager
    async def _project_lock(self, project_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(project_id, asyncio.Lock())
        self._lock_users[project_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[project_id] -= 1
            if self._lock_users[project_id] == 0:
                del self._lock_users[project_id]
                self._locks.pop(project_id, None)

    async def _mark_failed(self, project_id: str) -> None:
        try:
            await self._store.fail(project_id)
        except Exception as e:
            logger.exception("generation_failure_not_recorded", project_id=project_id, error=str(e))

    @staticmethod
    def _on_progress(log: structlog.stdlib.BoundLogger, percent: int) -> None:
        log.info("generation_progress", percent=percent)
