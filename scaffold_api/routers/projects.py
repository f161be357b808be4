"""Projects router."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
import structlog

from ..archive import build_project_archive
from ..dependencies import get_store
from ..errors import ProjectNotReadyError
from ..schemas import MessageResponse, Project, ProjectListResponse, ProjectResponse
from ..store import ProjectStore

logger = structlog.get_logger()

router = APIRouter(prefix="/projects", tags=["projects"])


async def _get_or_404(store: ProjectStore, project_id: str) -> Project:
    project = await store.get_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.get("", response_model=ProjectListResponse, response_model_exclude_none=True)
async def list_projects(store: ProjectStore = Depends(get_store)) -> ProjectListResponse:
    """List all projects, newest first."""
    projects = await store.get_all()
    return ProjectListResponse(data=projects, count=len(projects))


@router.get("/{project_id}", response_model=ProjectResponse, response_model_exclude_none=True)
async def get_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
) -> ProjectResponse:
    """Get project by ID."""
    return ProjectResponse(data=await _get_or_404(store, project_id))


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
) -> MessageResponse:
    """Delete a project."""
    if not await store.delete(project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    logger.info("project_deleted", project_id=project_id)
    return MessageResponse(message="Project deleted successfully")


@router.get(
    "/{project_id}/download",
    response_class=Response,
    responses={200: {"content": {"application/zip": {}}, "description": "ZIP archive"}},
)
async def download_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
) -> Response:
    """Download a completed project as a ZIP archive."""
    project = await _get_or_404(store, project_id)

    try:
        filename, payload = build_project_archive(project)
    except ProjectNotReadyError as e:
        logger.info("download_rejected", project_id=project_id, status=e.status)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project is not ready for download",
        ) from e

    logger.info("project_downloaded", project_id=project_id, size_bytes=len(payload))
    return Response(
        content=payload,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
