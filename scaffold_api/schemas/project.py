"""Project schemas.

Attributes are snake_case; the wire format is camelCase (``createdAt``,
``projectId``, ...). Both spellings are accepted on input.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Stack(str, Enum):
    """Supported technology combinations."""

    REACT_NODE = "react-node"
    REACT_EXPRESS = "react-express"
    NEXT_NODE = "next-node"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class ProjectFeatures(CamelModel):
    """Feature toggles. All five are required."""

    model_config = ConfigDict(extra="forbid")

    auth: StrictBool
    crud: StrictBool
    payments: StrictBool
    database: StrictBool
    api: StrictBool

    def enabled(self) -> list[str]:
        """Names of enabled features, in declaration order."""
        return [name for name, value in self if value]


class GeneratedFile(CamelModel):
    """A generated file: virtual forward-slash path, content, language tag."""

    path: str
    content: str
    language: str


class GenerateRequest(CamelModel):
    """Body of POST /api/generate."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=10, max_length=2000)
    stack: Stack
    features: ProjectFeatures


class Project(CamelModel):
    """One scaffold request and its outcome."""

    id: str
    name: str
    description: str
    stack: Stack
    features: ProjectFeatures
    status: ProjectStatus = ProjectStatus.PENDING
    created_at: datetime
    updated_at: datetime
    files: list[GeneratedFile] | None = None


# === Response envelopes ===


class GenerateResponse(CamelModel):
    success: bool = True
    project_id: str
    message: str
    estimated_time: int


class ProjectResponse(CamelModel):
    success: bool = True
    data: Project


class ProjectListResponse(CamelModel):
    success: bool = True
    data: list[Project]
    count: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    details: list[str] | None = None
