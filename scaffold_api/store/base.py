"""Abstract project store."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime

from scaffold_api.schemas import GeneratedFile, GenerateRequest, Project, ProjectStatus

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class ProjectStore(ABC):
    """Authoritative keyed storage for Project records.

    The store owns the canonical copy of every project. Returned projects are
    snapshots; callers change state only through the store's operations.
    Every mutation refreshes ``updated_at``, which never moves backwards.
    """

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock

    def _touch(self, project: Project) -> None:
        project.updated_at = max(self._clock(), project.updated_at)

    @abstractmethod
    async def create(self, request: GenerateRequest) -> Project:
        """Store a new project in ``generating`` state and return it."""

    @abstractmethod
    async def get_all(self) -> list[Project]:
        """All projects, newest ``created_at`` first.

        Ties are broken by insertion order, most recent insertion first.
        """

    @abstractmethod
    async def get_by_id(self, project_id: str) -> Project | None:
        """Project by id, or None if unknown."""

    @abstractmethod
    async def update_status(self, project_id: str, status: ProjectStatus) -> Project | None:
        """Set status. Returns None (and changes nothing) if the id is unknown."""

    @abstractmethod
    async def update_files(
        self, project_id: str, files: list[GeneratedFile] | None
    ) -> Project | None:
        """Attach generated files, or clear them with None."""

    @abstractmethod
    async def reset(self, project_id: str) -> Project | None:
        """Put a project back into ``generating`` with no files, atomically."""

    @abstractmethod
    async def complete(self, project_id: str, files: list[GeneratedFile]) -> Project | None:
        """Attach files and set ``completed`` in one write.

        Applies only while the project is ``generating``; otherwise (or if the
        id is unknown) changes nothing and returns None.
        """

    @abstractmethod
    async def fail(self, project_id: str) -> Project | None:
        """Clear files and set ``failed`` in one write, under the same rule."""

    @abstractmethod
    async def delete(self, project_id: str) -> bool:
        """Remove a project. True iff one existed."""

    async def close(self) -> None:
        """Release backend resources."""

    def _new_project(self, project_id: str, request: GenerateRequest) -> Project:
        now = self._clock()
        return Project(
            id=project_id,
            name=request.name,
            description=request.description,
            stack=request.stack,
            features=request.features.model_copy(),
            status=ProjectStatus.GENERATING,
            created_at=now,
            updated_at=now,
        )


def newest_first(projects: list[Project]) -> list[Project]:
    """Order projects (given oldest insertion first) by created_at descending.

    The sort is stable, so reversing first makes ties come out newest
    insertion first.
    """
    return sorted(reversed(projects), key=lambda p: p.created_at, reverse=True)
