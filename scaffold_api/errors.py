"""Domain exceptions."""


class ScaffoldError(Exception):
    """Base class for scaffold service errors."""


class UnknownStackError(ScaffoldError, ValueError):
    """Raised when no generator is registered for a stack."""

    def __init__(self, stack: object, available: list[str]):
        self.stack = stack
        self.available = available
        super().__init__(f"Unknown stack: {stack}. Available: {available}")


class ProjectNotReadyError(ScaffoldError):
    """Raised when an operation needs a completed project."""

    def __init__(self, project_id: str, status: str):
        self.project_id = project_id
        self.status = status
        super().__init__(f"Project {project_id} is {status}, not completed")
