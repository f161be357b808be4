"""In-memory project store (process lifetime only)."""

import threading
import uuid

import structlog

from scaffold_api.schemas import GeneratedFile, GenerateRequest, Project, ProjectStatus

from .base import Clock, ProjectStore, newest_first, utc_now

logger = structlog.get_logger(__name__)


class InMemoryProjectStore(ProjectStore):
    """Dict-backed store.

    A single lock serialises every read-modify-write, so the store stays
    consistent when used from worker threads as well as the event loop.
    Reads and writes exchange deep copies with callers.
    """

    def __init__(self, clock: Clock = utc_now):
        super().__init__(clock)
        self._projects: dict[str, Project] = {}
        self._lock = threading.Lock()

    async def create(self, request: GenerateRequest) -> Project:
        with self._lock:
            project_id = str(uuid.uuid4())
            while project_id in self._projects:
                project_id = str(uuid.uuid4())
            project = self._new_project(project_id, request)
            self._projects[project_id] = project
            snapshot = project.model_copy(deep=True)

        logger.info("project_stored", project_id=project_id, stack=project.stack.value)
        return snapshot

    async def get_all(self) -> list[Project]:
        with self._lock:
            projects = [p.model_copy(deep=True) for p in self._projects.values()]
        return newest_first(projects)

    async def get_by_id(self, project_id: str) -> Project | None:
        with self._lock:
            project = self._projects.get(project_id)
            return project.model_copy(deep=True) if project else None

    async def update_status(self, project_id: str, status: ProjectStatus) -> Project | None:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return None
            project.status = status
            self._touch(project)
            return project.model_copy(deep=True)

    async def update_files(
        self, project_id: str, files: list[GeneratedFile] | None
    ) -> Project | None:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return None
            project.files = [f.model_copy() for f in files] if files is not None else None
            self._touch(project)
            return project.model_copy(deep=True)

    async def reset(self, project_id: str) -> Project | None:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                return None
            project.status = ProjectStatus.GENERATING
            project.files = None
            self._touch(project)
            return project.model_copy(deep=True)

    async def complete(self, project_id: str, files: list[GeneratedFile]) -> Project | None:
        return self._finish(project_id, ProjectStatus.COMPLETED, files)

    async def fail(self, project_id: str) -> Project | None:
        return self._finish(project_id, ProjectStatus.FAILED, None)

    def _finish(
        self, project_id: str, status: ProjectStatus, files: list[GeneratedFile] | None
    ) -> Project | None:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None or project.status != ProjectStatus.GENERATING:
                return None
            project.files = [f.model_copy() for f in files] if files is not None else None
            project.status = status
            self._touch(project)
            return project.model_copy(deep=True)

    async def delete(self, project_id: str) -> bool:
        with self._lock:
            removed = self._projects.pop(project_id, None) is not None
        if removed:
            logger.info("project_removed", project_id=project_id)
        return removed
