"""Common schemas."""

from .project import (
    ErrorResponse,
    GeneratedFile,
    GenerateRequest,
    GenerateResponse,
    MessageResponse,
    Project,
    ProjectFeatures,
    ProjectListResponse,
    ProjectResponse,
    ProjectStatus,
    Stack,
)

__all__ = [
    "ErrorResponse",
    "GeneratedFile",
    "GenerateRequest",
    "GenerateResponse",
    "MessageResponse",
    "Project",
    "ProjectFeatures",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectStatus",
    "Stack",
]
